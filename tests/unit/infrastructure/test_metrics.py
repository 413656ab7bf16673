"""Unit tests for MetricsCollector."""

import pytest
from prometheus_client import CollectorRegistry

from teamwork.infrastructure.monitoring import UNMATCHED_ROUTE, MetricsCollector

LABELS = {"service": "teamwork-api", "environment": "development"}


@pytest.fixture
def collector() -> MetricsCollector:
    return MetricsCollector(registry=CollectorRegistry())


def _value(collector: MetricsCollector, name: str, **labels: str) -> float | None:
    return collector.registry.get_sample_value(name, {**LABELS, **labels})


class TestProcessMetrics:
    def test_startup_is_counted(self, collector: MetricsCollector) -> None:
        collector.record_startup()
        assert _value(collector, "service_starts_total") == 1.0

    def test_uptime_is_zero_before_start(self, collector: MetricsCollector) -> None:
        assert collector.uptime_seconds() == 0.0
        assert _value(collector, "uptime_seconds") == 0.0

    def test_uptime_grows_after_start(self, collector: MetricsCollector) -> None:
        collector.record_startup()
        assert collector.uptime_seconds() >= 0.0
        assert _value(collector, "uptime_seconds") is not None

    def test_labels_come_from_constructor(self) -> None:
        collector = MetricsCollector(
            registry=CollectorRegistry(), service="worker", environment="production"
        )
        collector.record_startup()
        assert collector.registry.get_sample_value(
            "service_starts_total", {"service": "worker", "environment": "production"}
        ) == 1.0


class TestRequestMetrics:
    def test_request_counted_by_route_and_status(self, collector: MetricsCollector) -> None:
        collector.observe_request("GET", "/v1/tasks/{task_id}", 404, 0.002)
        collector.observe_request("GET", "/v1/tasks/{task_id}", 404, 0.003)

        assert _value(
            collector,
            "http_requests_total",
            method="GET",
            route="/v1/tasks/{task_id}",
            status="404",
        ) == 2.0
        assert _value(
            collector,
            "http_request_duration_seconds_count",
            method="GET",
            route="/v1/tasks/{task_id}",
        ) == 2.0

    def test_unmatched_requests_share_one_label(self, collector: MetricsCollector) -> None:
        collector.observe_request("GET", None, 404, 0.001)
        assert _value(
            collector,
            "http_requests_total",
            method="GET",
            route=UNMATCHED_ROUTE,
            status="404",
        ) == 1.0


class TestFanOutAndSweepMetrics:
    def test_notification_counters_labelled_by_type(self, collector: MetricsCollector) -> None:
        collector.record_notification_written("task_assigned")
        collector.record_notification_written("task_assigned")
        collector.record_notification_failed("comment_added")

        assert _value(
            collector, "notifications_written_total", notification_type="task_assigned"
        ) == 2.0
        assert _value(
            collector, "notifications_failed_total", notification_type="comment_added"
        ) == 1.0

    def test_plan_failures_labelled_by_event_type(self, collector: MetricsCollector) -> None:
        collector.record_notification_plan_failed("project.update")

        assert _value(
            collector, "notification_plans_failed_total", event_type="project.update"
        ) == 1.0

    def test_sweep_counts_reminders(self, collector: MetricsCollector) -> None:
        collector.record_deadline_sweep(3)
        collector.record_deadline_sweep(0)

        assert _value(collector, "deadline_sweeps_total") == 2.0
        assert _value(collector, "deadline_reminders_total") == 3.0

    def test_render_is_exposition_format(self, collector: MetricsCollector) -> None:
        collector.record_deadline_sweep()
        assert b"# TYPE deadline_sweeps_total counter" in collector.render()
