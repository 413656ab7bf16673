"""Issue repository port."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.issue import Issue


class IssueRepositoryProtocol(Protocol):
    """Protocol for issue persistence."""

    @abstractmethod
    async def get(self, issue_id: UUID) -> Issue | None:
        ...

    @abstractmethod
    async def save(self, issue: Issue) -> None:
        ...

    @abstractmethod
    async def delete(self, issue_id: UUID) -> bool:
        """Delete an issue. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def list_for_task(self, task_id: UUID) -> list[Issue]:
        """List issues of a task in creation order."""
        ...
