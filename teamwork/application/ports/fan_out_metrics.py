"""Metrics port for notification fan-out."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol


class FanOutMetricsProtocol(Protocol):
    """Counts per-recipient notification writes and unplannable events."""

    @abstractmethod
    def record_notification_written(self, notification_type: str) -> None:
        ...

    @abstractmethod
    def record_notification_failed(self, notification_type: str) -> None:
        ...

    @abstractmethod
    def record_notification_plan_failed(self, event_type: str) -> None:
        ...
