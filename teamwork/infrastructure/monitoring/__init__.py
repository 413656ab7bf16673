"""Prometheus metrics for the API, fan-out and deadline worker."""

from teamwork.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    UNMATCHED_ROUTE,
    MetricsCollector,
)

__all__: list[str] = [
    "METRICS_CONTENT_TYPE",
    "UNMATCHED_ROUTE",
    "MetricsCollector",
]
