"""Notification domain model.

Notifications are created only by the fan-out dispatcher, mutated
only to toggle ``read`` and deleted only by their recipient.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class NotificationType(Enum):
    """Closed set of notification types."""

    TASK_ASSIGNED = "task_assigned"
    TASK_COMPLETED = "task_completed"
    TASK_STATUS_CHANGED = "task_status_changed"
    PROJECT_INVITE = "project_invite"
    PROJECT_UPDATE = "project_update"
    PROJECT_REMOVED = "project_removed"
    DEADLINE_APPROACHING = "deadline_approaching"
    COMMENT_ADDED = "comment_added"
    ISSUE_CREATED = "issue_created"
    ISSUE_RESOLVED = "issue_resolved"
    SYSTEM = "system"


@dataclass(frozen=True, eq=True)
class NotificationReferences:
    """Entities a notification points at."""

    workspace_id: UUID | None = None
    task_id: UUID | None = None
    issue_id: UUID | None = None
    comment_id: UUID | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace_id": str(self.workspace_id) if self.workspace_id else None,
            "task_id": str(self.task_id) if self.task_id else None,
            "issue_id": str(self.issue_id) if self.issue_id else None,
            "comment_id": str(self.comment_id) if self.comment_id else None,
        }


@dataclass(frozen=True, eq=True)
class Notification:
    """A persisted per-recipient notification.

    Attributes:
        id: Unique notification identifier.
        recipient_account_id: The account that receives it.
        notification_type: One of NotificationType.
        title: Short title.
        description: Human-readable description.
        references: Referenced workspace/task/issue/comment.
        action_url: Client route to open.
        created_by_account_id: Actor that triggered it; None for system events.
        read: Whether the recipient has read it.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    recipient_account_id: UUID
    notification_type: NotificationType
    title: str
    description: str
    references: NotificationReferences = field(default_factory=NotificationReferences)
    action_url: str = ""
    created_by_account_id: UUID | None = field(default=None)
    read: bool = field(default=False)
    created_at: datetime = field(default_factory=_utc_now)

    def with_read(self, read: bool = True) -> Notification:
        return replace(self, read=read)
