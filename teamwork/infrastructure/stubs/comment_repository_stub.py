"""In-memory stub for CommentRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from teamwork.domain.models.comment import Comment


class CommentRepositoryStub:
    """In-memory implementation of CommentRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._comments: dict[UUID, Comment] = {}

    async def get(self, comment_id: UUID) -> Comment | None:
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> None:
        self._comments[comment.id] = comment

    async def delete(self, comment_id: UUID) -> bool:
        return self._comments.pop(comment_id, None) is not None

    async def list_for_task(self, task_id: UUID) -> list[Comment]:
        return [c for c in self._comments.values() if c.task_id == task_id]

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._comments.clear()

    def count(self) -> int:
        return len(self._comments)
