"""Notification fan-out rules.

Pure function of (event, membership snapshot) -> notification drafts.

Recipient Rules:
    TaskAssigned         -> the newly assigned account
    TaskStatusChanged    -> every current assignee
    TaskCompleted        -> workspace owner + admins
    CommentAdded         -> task assignees + workspace owner
    IssueCreated         -> workspace owner + admins
    IssueResolved        -> the issue owner
    ProjectInvite        -> the invited account
    ProjectUpdate        -> all workspace members
    ProjectRemoved       -> the removed account
    DeadlineApproaching  -> all task assignees (system-triggered)

Invariants:
- Recipient sets are deduplicated: one draft per account per event
- The actor that triggered the event is never a recipient
- No I/O: everything needed is in the event or the context
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from teamwork.domain.events import (
    CommentAddedEvent,
    DeadlineApproachingEvent,
    DomainEvent,
    IssueCreatedEvent,
    IssueResolvedEvent,
    ProjectInviteEvent,
    ProjectRemovedEvent,
    ProjectUpdateEvent,
    TaskAssignedEvent,
    TaskCompletedEvent,
    TaskStatusChangedEvent,
)
from teamwork.domain.models.notification import (
    NotificationReferences,
    NotificationType,
)
from teamwork.domain.models.workspace import WorkspaceRole

INBOX_URL = "/app/inbox"


def task_url(task_id: UUID) -> str:
    return f"/app/tasks/{task_id}"


def project_url(workspace_id: UUID) -> str:
    return f"/app/projects/{workspace_id}"


@dataclass(frozen=True)
class FanOutContext:
    """Membership snapshot of the event's workspace.

    Attributes:
        members: Account id -> role, in join order.
    """

    members: Mapping[UUID, WorkspaceRole] = field(default_factory=dict)

    def owner(self) -> list[UUID]:
        return [a for a, role in self.members.items() if role is WorkspaceRole.OWNER]

    def owner_and_admins(self) -> list[UUID]:
        return [a for a, role in self.members.items() if role.is_admin_or_owner()]

    def all_members(self) -> list[UUID]:
        return list(self.members)


@dataclass(frozen=True, eq=True)
class NotificationDraft:
    """A notification to be written for one recipient."""

    recipient_account_id: UUID
    notification_type: NotificationType
    title: str
    description: str
    references: NotificationReferences
    action_url: str
    created_by_account_id: UUID | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipient_account_id": str(self.recipient_account_id),
            "notification_type": self.notification_type.value,
            "title": self.title,
            "action_url": self.action_url,
        }


def resolve_recipients(
    candidates: Iterable[UUID], actor_id: UUID | None
) -> list[UUID]:
    """Deduplicate ``candidates`` in first-seen order and drop the actor."""
    return [a for a in dict.fromkeys(candidates) if a != actor_id]


def _drafts(
    event: DomainEvent,
    recipients: Iterable[UUID],
    notification_type: NotificationType,
    title: str,
    description: str,
    references: NotificationReferences,
    action_url: str,
) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            recipient_account_id=recipient,
            notification_type=notification_type,
            title=title,
            description=description,
            references=references,
            action_url=action_url,
            created_by_account_id=event.actor_id,
        )
        for recipient in resolve_recipients(recipients, event.actor_id)
    ]


def _task_refs(event: Any, **extra: UUID) -> NotificationReferences:
    return NotificationReferences(
        workspace_id=event.workspace_id, task_id=event.task_id, **extra
    )


def _task_assigned(event: TaskAssignedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        [event.assignee_id],
        NotificationType.TASK_ASSIGNED,
        "New task assigned to you",
        f'You have been assigned to task "{event.task_title}" '
        f'in project "{event.workspace_name}"',
        _task_refs(event),
        task_url(event.task_id),
    )


def _task_status_changed(
    event: TaskStatusChangedEvent, ctx: FanOutContext
) -> list[NotificationDraft]:
    return _drafts(
        event,
        event.assignees,
        NotificationType.TASK_STATUS_CHANGED,
        "Task status updated",
        f'Task "{event.task_title}" status has been changed to {event.new_status.value}',
        _task_refs(event),
        task_url(event.task_id),
    )


def _task_completed(event: TaskCompletedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        ctx.owner_and_admins(),
        NotificationType.TASK_COMPLETED,
        "Task completed",
        f'Task "{event.task_title}" in project "{event.workspace_name}" '
        "has been marked as complete",
        _task_refs(event),
        task_url(event.task_id),
    )


def _comment_added(event: CommentAddedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        [*event.assignees, *ctx.owner()],
        NotificationType.COMMENT_ADDED,
        "New comment on task",
        f'New comment on task "{event.task_title}" in project "{event.workspace_name}"',
        _task_refs(event, comment_id=event.comment_id),
        task_url(event.task_id),
    )


def _issue_created(event: IssueCreatedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        ctx.owner_and_admins(),
        NotificationType.ISSUE_CREATED,
        "New issue reported",
        f'New issue reported for task "{event.task_title}" '
        f'in project "{event.workspace_name}"',
        _task_refs(event, issue_id=event.issue_id),
        task_url(event.task_id),
    )


def _issue_resolved(event: IssueResolvedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        [event.issue_owner_id],
        NotificationType.ISSUE_RESOLVED,
        "Issue resolved",
        f'Your issue for task "{event.task_title}" has been resolved',
        _task_refs(event, issue_id=event.issue_id),
        task_url(event.task_id),
    )


def _project_invite(event: ProjectInviteEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        [event.invitee_id],
        NotificationType.PROJECT_INVITE,
        "Project invitation",
        f'You have been invited to join project "{event.workspace_name}"',
        NotificationReferences(workspace_id=event.workspace_id),
        project_url(event.workspace_id),
    )


def _project_update(event: ProjectUpdateEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        ctx.all_members(),
        NotificationType.PROJECT_UPDATE,
        "Project updated",
        f'Project "{event.workspace_name}" has been updated: {event.update_type}',
        NotificationReferences(workspace_id=event.workspace_id),
        project_url(event.workspace_id),
    )


def _project_removed(event: ProjectRemovedEvent, ctx: FanOutContext) -> list[NotificationDraft]:
    return _drafts(
        event,
        [event.removed_account_id],
        NotificationType.PROJECT_REMOVED,
        "Removed from project",
        f'You have been removed from project "{event.workspace_name}"',
        NotificationReferences(workspace_id=event.workspace_id),
        INBOX_URL,
    )


def _deadline_approaching(
    event: DeadlineApproachingEvent, ctx: FanOutContext
) -> list[NotificationDraft]:
    return _drafts(
        event,
        event.assignees,
        NotificationType.DEADLINE_APPROACHING,
        "Task deadline approaching",
        f'Task "{event.task_title}" in project "{event.workspace_name}" is due soon',
        _task_refs(event),
        task_url(event.task_id),
    )


FanOutRule = Callable[[Any, FanOutContext], list[NotificationDraft]]

FAN_OUT_RULES: dict[type[DomainEvent], FanOutRule] = {
    TaskAssignedEvent: _task_assigned,
    TaskStatusChangedEvent: _task_status_changed,
    TaskCompletedEvent: _task_completed,
    CommentAddedEvent: _comment_added,
    IssueCreatedEvent: _issue_created,
    IssueResolvedEvent: _issue_resolved,
    ProjectInviteEvent: _project_invite,
    ProjectUpdateEvent: _project_update,
    ProjectRemovedEvent: _project_removed,
    DeadlineApproachingEvent: _deadline_approaching,
}


def plan_notifications(
    event: DomainEvent, context: FanOutContext
) -> list[NotificationDraft]:
    """Compute the notifications an event produces.

    Args:
        event: The emitted domain event.
        context: Membership snapshot of the event's workspace.

    Returns:
        One draft per qualifying recipient, actor excluded.

    Raises:
        ValueError: If no rule is registered for the event type.
    """
    rule = FAN_OUT_RULES.get(type(event))
    if rule is None:
        raise ValueError(f"No fan-out rule for event {type(event).__name__}")
    return rule(event, context)
