"""Result DTOs returned by application services.

Every mutating operation returns the entity it touched together with
the domain events it emitted. Routes hand ``events`` to the
notification dispatcher and map the entity to an API model.

Architecture Note:
Application layer defines its own DTOs. API layer converts these
to Pydantic response models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from teamwork.domain.events import DomainEvent
from teamwork.domain.models.comment import Comment
from teamwork.domain.models.issue import Issue
from teamwork.domain.models.mail import InvitationMessage, Mail
from teamwork.domain.models.notification import Notification
from teamwork.domain.models.task import Task, TaskStatus
from teamwork.domain.models.workspace import Membership, Workspace, WorkspaceRole


@dataclass(frozen=True)
class WorkspaceResult:
    workspace: Workspace
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class MembershipResult:
    """Outcome of a membership mutation.

    Attributes:
        membership: The membership added, changed or removed.
        changed: False when the call was a no-op (unchanged role).
        pruned_task_ids: Tasks whose assignee list lost the removed account.
        events: Emitted domain events.
    """

    membership: Membership
    changed: bool = True
    pruned_task_ids: list[UUID] = field(default_factory=list)
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class MemberView:
    """A member listed with role and display data."""

    account_id: UUID
    display_name: str
    email: str
    role: WorkspaceRole
    joined_at: datetime


@dataclass(frozen=True)
class WorkspaceSummary:
    """A workspace as seen by one member."""

    workspace: Workspace
    role: WorkspaceRole


@dataclass(frozen=True)
class WorkspaceDetails:
    """Workspace with the caller's role and task counts by status."""

    workspace: Workspace
    role: WorkspaceRole
    member_count: int
    task_counts: dict[TaskStatus, int]


@dataclass(frozen=True)
class TaskResult:
    task: Task
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class TaskDeletionResult:
    task_id: UUID
    issues_deleted: int
    comments_deleted: int
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class IssueResult:
    issue: Issue
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class CommentResult:
    comment: Comment
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class InvitationResult:
    """Outcome of invite/accept/decline.

    Attributes:
        invitation: The invitation after the operation.
        membership: Created membership (accept only).
        events: Emitted domain events.
    """

    invitation: InvitationMessage
    membership: Membership | None = None
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class MailResult:
    mail: Mail
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class FanOutReport:
    """Outcome of dispatching a batch of events.

    Attributes:
        planned: Drafts computed across all events.
        written: Notifications persisted.
        failed: Recipients whose write failed (logged, not raised).
        unplanned: Types of events whose recipients could not be resolved.
    """

    planned: int = 0
    written: int = 0
    failed: list[UUID] = field(default_factory=list)
    unplanned: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NotificationPage:
    """One page of a recipient's notifications."""

    notifications: list[Notification]
    total: int
    unread_count: int
    limit: int
    offset: int
