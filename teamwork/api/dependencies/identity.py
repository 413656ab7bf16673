"""Caller identity dependency.

Authentication is out of scope for the service; the gateway in front of
it resolves the caller and forwards the account id in ``X-Account-ID``.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Header, HTTPException, status

from teamwork.infrastructure.observability import bind_actor

logger = structlog.get_logger(__name__)

ACCOUNT_HEADER = "X-Account-ID"


async def get_actor_id(
    x_account_id: Annotated[
        str | None,
        Header(
            alias=ACCOUNT_HEADER,
            description="Authenticated account id forwarded by the gateway.",
        ),
    ] = None,
) -> UUID:
    """Extract and validate the caller's account id and bind it to the request logs.

    Raises:
        HTTPException 401: Header missing.
        HTTPException 422: Header is not a UUID.
    """
    log = logger.bind(component="identity")

    if not x_account_id:
        log.warning("auth_failed", reason="missing_account_id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "type": "urn:teamwork:auth:missing-identity",
                "title": "Missing Identity",
                "status": 401,
                "detail": f"{ACCOUNT_HEADER} header is required",
            },
        )

    try:
        actor_id = UUID(x_account_id)
    except ValueError:
        log.warning("auth_failed", reason="invalid_account_id", account_id=x_account_id)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "type": "urn:teamwork:invalid-input",
                "title": "Invalid Input",
                "status": 422,
                "detail": f"{ACCOUNT_HEADER} must be a UUID",
                "field": ACCOUNT_HEADER,
            },
        ) from None

    bind_actor(actor_id)
    return actor_id
