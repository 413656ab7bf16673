"""Structured logging and per-request log context."""

from teamwork.infrastructure.observability.logging import (
    configure_structlog,
    get_component_logger,
    resolve_log_level,
)
from teamwork.infrastructure.observability.request_context import (
    CORRELATION_HEADER,
    bind_actor,
    generate_correlation_id,
    get_actor_id,
    get_correlation_id,
    request_context,
    request_context_processor,
    resolve_correlation_id,
)

__all__: list[str] = [
    "CORRELATION_HEADER",
    "bind_actor",
    "configure_structlog",
    "generate_correlation_id",
    "get_actor_id",
    "get_component_logger",
    "get_correlation_id",
    "request_context",
    "request_context_processor",
    "resolve_correlation_id",
    "resolve_log_level",
]
