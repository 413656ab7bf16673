"""Workspace, membership and invitation request/response models."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from teamwork.api.models.common import DateTimeWithZ
from teamwork.domain.models.mail import InvitationStatus
from teamwork.domain.models.task import TaskStatus
from teamwork.domain.models.workspace import WorkspaceRole, WorkspaceStatus


class CreateWorkspaceRequest(BaseModel):
    """Request to create a workspace owned by the caller."""

    name: str = Field(..., min_length=1, max_length=200)
    short_description: str = Field(default="", max_length=500)
    description: str = Field(default="")
    target_date: DateTimeWithZ | None = None


class UpdateWorkspaceRequest(BaseModel):
    """Partial update of workspace details. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    short_description: str | None = Field(default=None, max_length=500)
    description: str | None = None
    status: WorkspaceStatus | None = None
    target_date: DateTimeWithZ | None = None


class WorkspaceResponse(BaseModel):
    id: UUID
    owner_account_id: UUID
    name: str
    short_description: str
    description: str
    status: WorkspaceStatus
    target_date: DateTimeWithZ | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class WorkspaceSummaryResponse(BaseModel):
    """A workspace with the caller's role in it."""

    workspace: WorkspaceResponse
    role: WorkspaceRole


class WorkspaceDetailsResponse(BaseModel):
    """Workspace with caller role, member count and task counts by status."""

    workspace: WorkspaceResponse
    role: WorkspaceRole
    member_count: int = Field(..., ge=1)
    task_counts: dict[TaskStatus, int]


class MemberResponse(BaseModel):
    account_id: UUID
    display_name: str
    email: str
    role: WorkspaceRole
    joined_at: DateTimeWithZ


class MembershipResponse(BaseModel):
    """Outcome of a membership mutation.

    Attributes:
        changed: False when the request did not change anything.
        pruned_task_ids: Tasks that lost the removed account as assignee.
    """

    workspace_id: UUID
    account_id: UUID
    role: WorkspaceRole
    changed: bool = True
    pruned_task_ids: list[UUID] = Field(default_factory=list)


class UpdateRoleRequest(BaseModel):
    role: WorkspaceRole


class InviteRequest(BaseModel):
    """Invite an existing account by email."""

    email: EmailStr
    role: WorkspaceRole = WorkspaceRole.MEMBER


class InvitationResponse(BaseModel):
    id: UUID
    workspace_id: UUID
    sender_account_id: UUID
    recipient_account_id: UUID
    subject: str
    body: str
    proposed_role: WorkspaceRole
    invitation_status: InvitationStatus
    read: bool
    sent_at: DateTimeWithZ | None = None
    created_at: DateTimeWithZ


class InvitationDecisionResponse(BaseModel):
    """Invitation after accept/decline, with the membership on accept."""

    invitation: InvitationResponse
    membership: MembershipResponse | None = None
