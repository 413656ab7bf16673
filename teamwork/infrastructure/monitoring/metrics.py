"""Prometheus metrics for the TeamWork service.

Every series carries constant ``service`` and ``environment`` labels.
HTTP series are labelled by route template (``/v1/tasks/{task_id}``),
never by the concrete path, so ids do not multiply the series.

Series:
    service_starts_total, uptime_seconds
    http_requests_total{method, route, status}
    http_request_duration_seconds{method, route}
    notifications_written_total{notification_type}
    notifications_failed_total{notification_type}
    notification_plans_failed_total{event_type}
    deadline_sweeps_total, deadline_reminders_total
"""

import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST

# 5ms to 5s; every route is an in-process call
REQUEST_DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)

# Requests that matched no route share one label value
UNMATCHED_ROUTE = "<unmatched>"


class MetricsCollector:
    """Owns the TeamWork series on one registry.

    Satisfies ``FanOutMetricsProtocol`` for the notification fan-out.

    Args:
        registry: Registry to register on; a private one when omitted.
        service: Value of the ``service`` label.
        environment: Value of the ``environment`` label.
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        service: str = "teamwork-api",
        environment: str = "development",
    ) -> None:
        self._registry = registry or CollectorRegistry()
        self._constant = {"service": service, "environment": environment}
        self._started_at: float | None = None
        base = list(self._constant)

        self._starts = Counter(
            "service_starts_total",
            "Process starts",
            base,
            registry=self._registry,
        )
        self._uptime = Gauge(
            "uptime_seconds",
            "Seconds since the last recorded start",
            base,
            registry=self._registry,
        )
        self._uptime.labels(**self._constant).set_function(self.uptime_seconds)

        self._requests = Counter(
            "http_requests_total",
            "HTTP requests by route and status",
            [*base, "method", "route", "status"],
            registry=self._registry,
        )
        self._request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request latency by route",
            [*base, "method", "route"],
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self._registry,
        )

        self._notifications_written = Counter(
            "notifications_written_total",
            "Notifications persisted by the fan-out",
            [*base, "notification_type"],
            registry=self._registry,
        )
        self._notifications_failed = Counter(
            "notifications_failed_total",
            "Notification writes that failed and were skipped",
            [*base, "notification_type"],
            registry=self._registry,
        )
        self._plans_failed = Counter(
            "notification_plans_failed_total",
            "Events whose recipients could not be resolved",
            [*base, "event_type"],
            registry=self._registry,
        )

        self._sweeps = Counter(
            "deadline_sweeps_total",
            "Completed deadline sweeps",
            base,
            registry=self._registry,
        )
        self._reminders = Counter(
            "deadline_reminders_total",
            "DeadlineApproaching events produced by sweeps",
            base,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def get_registry(self) -> CollectorRegistry:
        return self._registry

    # Process

    def record_startup(self) -> None:
        self._started_at = time.monotonic()
        self._starts.labels(**self._constant).inc()

    def uptime_seconds(self) -> float:
        """Seconds since ``record_startup``, 0.0 before the first start."""
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    # HTTP

    def observe_request(
        self, method: str, route: str | None, status_code: int, duration: float
    ) -> None:
        """Count one request and record its latency.

        Args:
            method: HTTP method.
            route: Route template, or None when no route matched.
            status_code: Response status.
            duration: Seconds spent in the app.
        """
        route = route or UNMATCHED_ROUTE
        self._requests.labels(
            **self._constant, method=method, route=route, status=str(status_code)
        ).inc()
        self._request_duration.labels(
            **self._constant, method=method, route=route
        ).observe(duration)

    # Notification fan-out

    def record_notification_written(self, notification_type: str) -> None:
        self._notifications_written.labels(
            **self._constant, notification_type=notification_type
        ).inc()

    def record_notification_failed(self, notification_type: str) -> None:
        self._notifications_failed.labels(
            **self._constant, notification_type=notification_type
        ).inc()

    def record_notification_plan_failed(self, event_type: str) -> None:
        self._plans_failed.labels(**self._constant, event_type=event_type).inc()

    # Deadline sweep

    def record_deadline_sweep(self, reminders: int = 0) -> None:
        self._sweeps.labels(**self._constant).inc()
        if reminders:
            self._reminders.labels(**self._constant).inc(reminders)

    def render(self) -> bytes:
        """Exposition-format snapshot of every series."""
        return generate_latest(self._registry)
