"""structlog setup for the API and the deadline worker.

``production`` writes one JSON object per line; any other environment
gets the colored console renderer. The threshold is ``LOG_LEVEL``
unless a level is passed in.

Log Entry Format (production):
    {
        "event": "task_created",
        "level": "info",
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "correlation_id": "uuid",
        "actor_id": "uuid",
        "task_id": "uuid"
    }
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor

from teamwork.infrastructure.observability.request_context import (
    request_context_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_log_level(name: str | None = None) -> int:
    """Map a level name (or ``LOG_LEVEL``) to a logging constant.

    Unknown names resolve to INFO.
    """
    name = (name or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    return _LEVELS.get(name, logging.INFO)


def _renderer(environment: str) -> Processor:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_structlog(environment: str = "production", level: str | None = None) -> None:
    """Configure structlog process-wide.

    Args:
        environment: ``production`` for JSON lines, anything else for console.
        level: Optional level name overriding ``LOG_LEVEL``.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, request_context_processor),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment == "production":
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(environment))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_component_logger(component: str) -> FilteringBoundLogger:
    """Logger for a long-lived component such as a background worker."""
    return cast(FilteringBoundLogger, structlog.get_logger().bind(component=component))
