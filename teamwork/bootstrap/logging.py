"""Logging setup for the process entry points."""

from __future__ import annotations

import logging

import structlog

from teamwork.config import TeamworkConfig
from teamwork.infrastructure.observability import configure_structlog, resolve_log_level


def configure_logging(config: TeamworkConfig) -> None:
    """Configure structlog for ``config.environment`` and announce it."""
    configure_structlog(environment=config.environment)
    structlog.get_logger(__name__).info(
        "logging_configured",
        environment=config.environment,
        level=logging.getLevelName(resolve_log_level()),
    )


__all__ = ["configure_logging"]
