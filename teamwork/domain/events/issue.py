"""Issue lifecycle events.

- IssueCreatedEvent: an issue was reported against a task
- IssueResolvedEvent: an issue moved into RESOLVED by someone other than its owner
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from teamwork.domain.events.base import TaskScopedEvent

ISSUE_CREATED_EVENT_TYPE: str = "issue.created"
ISSUE_RESOLVED_EVENT_TYPE: str = "issue.resolved"


@dataclass(frozen=True, kw_only=True)
class IssueCreatedEvent(TaskScopedEvent):
    """Emitted when an issue is created."""

    event_type = ISSUE_CREATED_EVENT_TYPE

    issue_id: UUID


@dataclass(frozen=True, kw_only=True)
class IssueResolvedEvent(TaskScopedEvent):
    """Emitted when an issue is resolved by an account other than its owner.

    Attributes:
        issue_id: The resolved issue.
        issue_owner_id: The reporter, who is notified.
    """

    event_type = ISSUE_RESOLVED_EVENT_TYPE

    issue_id: UUID
    issue_owner_id: UUID
