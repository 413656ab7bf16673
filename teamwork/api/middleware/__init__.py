"""HTTP middleware for the TeamWork API."""

from teamwork.api.middleware.logging_middleware import LoggingMiddleware
from teamwork.api.middleware.metrics_middleware import MetricsMiddleware

__all__: list[str] = ["LoggingMiddleware", "MetricsMiddleware"]
