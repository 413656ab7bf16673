"""Comment events."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from teamwork.domain.events.base import TaskScopedEvent

COMMENT_ADDED_EVENT_TYPE: str = "comment.added"


@dataclass(frozen=True, kw_only=True)
class CommentAddedEvent(TaskScopedEvent):
    """Emitted when a comment is added to a task.

    Attributes:
        comment_id: The new comment.
        assignees: Task assignees at the time of commenting.
    """

    event_type = COMMENT_ADDED_EVENT_TYPE

    comment_id: UUID
    assignees: tuple[UUID, ...] = ()
