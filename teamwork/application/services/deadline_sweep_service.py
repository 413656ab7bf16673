"""Deadline sweep: finds tasks due soon and emits reminder events.

A task qualifies when ``now <= due_date <= now + window``, it is not
done and it has at least one assignee. The sweep is system-triggered,
so the emitted events carry no actor.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

from structlog import get_logger

from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.application.ports.workspace_repository import WorkspaceRepositoryProtocol
from teamwork.domain.events import DeadlineApproachingEvent
from teamwork.domain.models.task import TaskStatus

logger = get_logger(__name__)

DEFAULT_WINDOW = timedelta(hours=24)


class DeadlineSweepService:
    """Computes DeadlineApproaching events for upcoming deadlines."""

    def __init__(
        self,
        tasks: TaskRepositoryProtocol,
        workspaces: WorkspaceRepositoryProtocol,
        window: timedelta = DEFAULT_WINDOW,
    ) -> None:
        self._tasks = tasks
        self._workspaces = workspaces
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    async def sweep(self, now: datetime | None = None) -> list[DeadlineApproachingEvent]:
        """Return one event per qualifying task.

        Args:
            now: Reference time (UTC); defaults to the current time.
        """
        now = now or datetime.now(timezone.utc)
        due = await self._tasks.list_due_between(now, now + self._window)

        candidates = [
            t for t in due if t.status is not TaskStatus.DONE and not t.is_unassigned
        ]
        workspace_ids: list[UUID] = list(dict.fromkeys(t.workspace_id for t in candidates))
        workspaces = {w.id: w for w in await self._workspaces.get_many(workspace_ids)}

        events: list[DeadlineApproachingEvent] = []
        for task in candidates:
            workspace = workspaces.get(task.workspace_id)
            if workspace is None:
                logger.warning(
                    "deadline_task_orphaned",
                    task_id=str(task.id),
                    workspace_id=str(task.workspace_id),
                )
                continue
            assert task.due_date is not None
            events.append(
                DeadlineApproachingEvent(
                    workspace_id=workspace.id,
                    workspace_name=workspace.name,
                    task_id=task.id,
                    task_title=task.title,
                    due_date=task.due_date,
                    assignees=task.assigned_to,
                )
            )

        logger.info(
            "deadline_sweep_completed",
            window_hours=self._window.total_seconds() / 3600,
            tasks_due=len(due),
            events=len(events),
        )
        return events
