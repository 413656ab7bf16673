"""Deadline worker: runs the deadline sweep on a fixed interval.

Each cycle asks the DeadlineSweepService for tasks due within its
window and hands the resulting DeadlineApproaching events to the
notification fan-out. A failed cycle is logged and the loop carries
on; the next cycle sees the same tasks again.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from teamwork.application.dtos import FanOutReport
from teamwork.application.services import (
    DeadlineSweepService,
    NotificationFanOutService,
)
from teamwork.infrastructure.monitoring import MetricsCollector
from teamwork.infrastructure.observability import get_component_logger


class DeadlineWorker:
    """Background loop around DeadlineSweepService.

    Note:
        Started and stopped with the application lifecycle.
    """

    def __init__(
        self,
        sweep: DeadlineSweepService,
        fan_out: NotificationFanOutService,
        interval_seconds: float,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._sweep = sweep
        self._fan_out = fan_out
        self._interval = interval_seconds
        self._metrics = metrics
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._log = get_component_logger("deadline_worker")

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def start(self) -> None:
        """Start the sweep loop. Calling start twice is a no-op."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        self._log.info("deadline_worker_started", interval=self._interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._log.info("deadline_worker_stopped")

    async def run_once(self, now: datetime | None = None) -> FanOutReport:
        """Run a single sweep and dispatch its notifications.

        Args:
            now: Reference time; defaults to the current time.
        """
        events = await self._sweep.sweep(now)
        report = await self._fan_out.dispatch(events)
        if self._metrics is not None:
            self._metrics.record_deadline_sweep(len(events))
        return report

    async def _run_loop(self) -> None:
        while self._running:
            started = datetime.now(timezone.utc)
            try:
                report = await self.run_once(started)
                elapsed = (datetime.now(timezone.utc) - started).total_seconds()
                self._log.debug(
                    "deadline_cycle_complete",
                    notifications=report.written,
                    failed=len(report.failed),
                    elapsed_seconds=elapsed,
                )
                await asyncio.sleep(max(0.0, self._interval - elapsed))
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._log.error("deadline_cycle_failed", error=str(e))
                await asyncio.sleep(self._interval)
