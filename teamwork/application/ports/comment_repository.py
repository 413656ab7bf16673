"""Comment repository port."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.comment import Comment


class CommentRepositoryProtocol(Protocol):
    """Protocol for comment persistence."""

    @abstractmethod
    async def get(self, comment_id: UUID) -> Comment | None:
        ...

    @abstractmethod
    async def save(self, comment: Comment) -> None:
        ...

    @abstractmethod
    async def delete(self, comment_id: UUID) -> bool:
        """Delete a comment. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def list_for_task(self, task_id: UUID) -> list[Comment]:
        """List comments of a task in creation order."""
        ...
