"""Workspace membership events.

- ProjectInviteEvent: an account was invited to a workspace
- ProjectUpdateEvent: workspace details were changed by the owner
- ProjectRemovedEvent: an account lost its membership
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from teamwork.domain.events.base import WorkspaceEvent

PROJECT_INVITE_EVENT_TYPE: str = "workspace.invite"
PROJECT_UPDATE_EVENT_TYPE: str = "workspace.update"
PROJECT_REMOVED_EVENT_TYPE: str = "workspace.removed"


@dataclass(frozen=True, kw_only=True)
class ProjectInviteEvent(WorkspaceEvent):
    """Emitted when an invitation is created.

    Attributes:
        invitee_id: The invited account.
        invitation_id: The persisted invitation mail.
    """

    event_type = PROJECT_INVITE_EVENT_TYPE

    invitee_id: UUID
    invitation_id: UUID


@dataclass(frozen=True, kw_only=True)
class ProjectUpdateEvent(WorkspaceEvent):
    """Emitted when workspace details change.

    Attributes:
        update_type: Human-readable summary of what changed.
    """

    event_type = PROJECT_UPDATE_EVENT_TYPE

    update_type: str


@dataclass(frozen=True, kw_only=True)
class ProjectRemovedEvent(WorkspaceEvent):
    """Emitted when a membership is removed.

    Attributes:
        removed_account_id: The account that lost access.
    """

    event_type = PROJECT_REMOVED_EVENT_TYPE

    removed_account_id: UUID
