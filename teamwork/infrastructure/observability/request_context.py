"""Per-request logging context: correlation id and calling account.

Both values live in contextvars, so every log entry written while a
request is handled carries them without threading them through the
services. ``request_context`` restores the previous values on exit,
which keeps concurrent requests and the deadline worker apart.

Usage:
    with request_context(request.headers.get(CORRELATION_HEADER)) as cid:
        ...
        bind_actor(actor_id)  # from the identity dependency
"""

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import UUID, uuid4

CORRELATION_HEADER = "X-Correlation-ID"

# Incoming ids are echoed into logs and headers, so only short
# token-like values are accepted.
_CORRELATION_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_actor_id: ContextVar[str] = ContextVar("actor_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def resolve_correlation_id(incoming: str | None) -> str:
    """Return ``incoming`` when it is a usable id, otherwise a new one."""
    if incoming and _CORRELATION_PATTERN.match(incoming):
        return incoming
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Current correlation id, or an empty string outside a request."""
    return _correlation_id.get()


def get_actor_id() -> str:
    """Current account id as a string, or empty when none is bound."""
    return _actor_id.get()


def bind_actor(actor_id: UUID) -> None:
    """Attach the authenticated account to the current request's logs."""
    _actor_id.set(str(actor_id))


@contextmanager
def request_context(incoming_correlation_id: str | None = None) -> Iterator[str]:
    """Open a logging context for one request and yield its correlation id."""
    correlation_id = resolve_correlation_id(incoming_correlation_id)
    correlation_token = _correlation_id.set(correlation_id)
    actor_token = _actor_id.set("")
    try:
        yield correlation_id
    finally:
        _actor_id.reset(actor_token)
        _correlation_id.reset(correlation_token)


def request_context_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``correlation_id`` and ``actor_id``.

    Values bound explicitly on the logger take precedence.
    """
    correlation_id = _correlation_id.get()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    actor_id = _actor_id.get()
    if actor_id:
        event_dict.setdefault("actor_id", actor_id)
    return event_dict
