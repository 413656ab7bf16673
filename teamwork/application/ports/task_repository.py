"""Task repository port."""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.task import Task


class TaskRepositoryProtocol(Protocol):
    """Protocol for task persistence.

    A workspace's task list is the result of ``list_for_workspace``;
    it is not stored on the workspace.
    """

    @abstractmethod
    async def get(self, task_id: UUID) -> Task | None:
        """Get a task by id, or None if absent."""
        ...

    @abstractmethod
    async def save(self, task: Task) -> None:
        """Insert or replace a task."""
        ...

    @abstractmethod
    async def delete(self, task_id: UUID) -> bool:
        """Delete a task. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def list_for_workspace(self, workspace_id: UUID) -> list[Task]:
        """List tasks of a workspace in creation order."""
        ...

    @abstractmethod
    async def list_for_assignee(self, account_id: UUID) -> list[Task]:
        """List tasks assigned to an account."""
        ...

    @abstractmethod
    async def list_due_between(self, start: datetime, end: datetime) -> list[Task]:
        """List tasks whose due date falls within [start, end]."""
        ...
