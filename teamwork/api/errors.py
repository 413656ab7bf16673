"""RFC 7807 problem responses for domain errors.

Every TeamworkError knows its HTTP status and renders its own problem
document; routes catch it and re-raise the result of
``problem_exception`` so the client sees ``{"detail": {...problem...}}``.
"""

from fastapi import HTTPException, Request
from structlog import get_logger

from teamwork.domain.exceptions import TeamworkError

logger = get_logger(__name__)


def problem_exception(exc: TeamworkError, request: Request) -> HTTPException:
    """Convert a domain error into an HTTPException with a problem body.

    Args:
        exc: The domain error raised by an application service.
        request: Current request, used for the ``instance`` member.

    Returns:
        HTTPException carrying the RFC 7807 problem document.
    """
    problem = exc.to_rfc7807_dict()
    problem["instance"] = str(request.url)
    logger.info(
        "request_rejected",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
    )
    return HTTPException(status_code=exc.status_code, detail=problem)
