"""In-memory stub for TaskRepositoryProtocol.

Supports failure injection on save and delete so cascade and
assignee-pruning rollback can be exercised in tests.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from teamwork.domain.models.task import Task


class TaskRepositoryStub:
    """In-memory implementation of TaskRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._tasks: dict[UUID, Task] = {}
        self._fail_delete_with: Exception | None = None
        self._fail_save_with: Exception | None = None
        self._saves_before_failure = 0

    async def get(self, task_id: UUID) -> Task | None:
        return self._tasks.get(task_id)

    async def save(self, task: Task) -> None:
        if self._fail_save_with is not None:
            if self._saves_before_failure <= 0:
                error, self._fail_save_with = self._fail_save_with, None
                raise error
            self._saves_before_failure -= 1
        self._tasks[task.id] = task

    async def delete(self, task_id: UUID) -> bool:
        if self._fail_delete_with is not None:
            raise self._fail_delete_with
        return self._tasks.pop(task_id, None) is not None

    async def list_for_workspace(self, workspace_id: UUID) -> list[Task]:
        return [t for t in self._tasks.values() if t.workspace_id == workspace_id]

    async def list_for_assignee(self, account_id: UUID) -> list[Task]:
        return [t for t in self._tasks.values() if account_id in t.assigned_to]

    async def list_due_between(self, start: datetime, end: datetime) -> list[Task]:
        return [
            t
            for t in self._tasks.values()
            if t.due_date is not None and start <= t.due_date <= end
        ]

    # Test helper methods

    def fail_deletes_with(self, error: Exception | None) -> None:
        """Make every subsequent ``delete`` raise ``error`` (None to clear)."""
        self._fail_delete_with = error

    def fail_saves_with(self, error: Exception | None, after: int = 0) -> None:
        """Pass ``after`` saves, then fail the next ``save`` once with ``error``."""
        self._fail_save_with = error
        self._saves_before_failure = after

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._tasks.clear()
        self._fail_delete_with = None
        self._fail_save_with = None
        self._saves_before_failure = 0
