"""Workspace API routes.

Workspace lifecycle, membership management, invitations and custom
mail sent from a workspace. Mutations hand the events they produce to
the notification fan-out after the change is persisted; a failed
notification never fails the request.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from teamwork.api.adapters import InboxAdapter, WorkspaceAdapter
from teamwork.api.dependencies import (
    get_actor_id,
    get_fan_out,
    get_invitations,
    get_ledger,
    get_mailbox,
)
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.mail import MailResponse, SendMailRequest
from teamwork.api.models.workspace import (
    CreateWorkspaceRequest,
    InvitationResponse,
    InviteRequest,
    MemberResponse,
    MembershipResponse,
    UpdateRoleRequest,
    UpdateWorkspaceRequest,
    WorkspaceDetailsResponse,
    WorkspaceResponse,
    WorkspaceSummaryResponse,
)
from teamwork.application.services import (
    InvitationService,
    MailboxService,
    MembershipLedgerService,
    NotificationFanOutService,
)
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/workspaces", tags=["workspaces"])


@router.post(
    "",
    response_model=WorkspaceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a workspace",
)
async def create_workspace(
    body: CreateWorkspaceRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
) -> WorkspaceResponse:
    """Create a workspace owned by the caller."""
    try:
        result = await ledger.create_workspace(
            actor_id,
            name=body.name,
            short_description=body.short_description,
            description=body.description,
            target_date=body.target_date,
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.to_response(result.workspace)


@router.get(
    "",
    response_model=list[WorkspaceSummaryResponse],
    summary="List the caller's workspaces",
)
async def list_workspaces(
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
) -> list[WorkspaceSummaryResponse]:
    summaries = await ledger.list_workspaces(actor_id)
    return [WorkspaceAdapter.summary(s) for s in summaries]


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceDetailsResponse,
    responses=ERROR_RESPONSES,
    summary="Get workspace details",
)
async def get_workspace(
    workspace_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
) -> WorkspaceDetailsResponse:
    """Workspace with the caller's role, member count and task counts."""
    try:
        details = await ledger.get_workspace_details(actor_id, workspace_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.details(details)


@router.patch(
    "/{workspace_id}",
    response_model=WorkspaceResponse,
    responses=ERROR_RESPONSES,
    summary="Update workspace details",
)
async def update_workspace(
    workspace_id: UUID,
    body: UpdateWorkspaceRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> WorkspaceResponse:
    """Owner only. Members are notified when anything changed."""
    try:
        result = await ledger.update_workspace(
            actor_id, workspace_id, **body.model_dump(exclude_unset=True)
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return WorkspaceAdapter.to_response(result.workspace)


@router.delete(
    "/{workspace_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete a workspace",
)
async def delete_workspace(
    workspace_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> Response:
    """Delete the workspace with its tasks, issues, comments and memberships."""
    try:
        result = await ledger.delete_workspace(actor_id, workspace_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Membership


@router.get(
    "/{workspace_id}/members",
    response_model=list[MemberResponse],
    responses=ERROR_RESPONSES,
    summary="List workspace members",
)
async def list_members(
    workspace_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
) -> list[MemberResponse]:
    try:
        members = await ledger.get_members(actor_id, workspace_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return [WorkspaceAdapter.member(m) for m in members]


@router.delete(
    "/{workspace_id}/members/{account_id}",
    response_model=MembershipResponse,
    responses=ERROR_RESPONSES,
    summary="Remove a member",
)
async def remove_member(
    workspace_id: UUID,
    account_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> MembershipResponse:
    """Admin or owner. The owner can never be removed.

    The removed account is pruned from every task assignee list in the
    workspace.
    """
    try:
        result = await ledger.remove_member(actor_id, workspace_id, account_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return WorkspaceAdapter.membership(result.membership, result)


@router.post(
    "/{workspace_id}/leave",
    response_model=MembershipResponse,
    responses=ERROR_RESPONSES,
    summary="Leave a workspace",
)
async def leave_workspace(
    workspace_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> MembershipResponse:
    """Any non-owner member may leave."""
    try:
        result = await ledger.leave_workspace(actor_id, workspace_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return WorkspaceAdapter.membership(result.membership, result)


@router.put(
    "/{workspace_id}/members/{account_id}/role",
    response_model=MembershipResponse,
    responses=ERROR_RESPONSES,
    summary="Change a member's role",
)
async def update_role(
    workspace_id: UUID,
    account_id: UUID,
    body: UpdateRoleRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    ledger: MembershipLedgerService = Depends(get_ledger),
) -> MembershipResponse:
    """Owner only. Setting the current role again reports ``changed: false``."""
    try:
        result = await ledger.update_role(actor_id, workspace_id, account_id, body.role)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.membership(result.membership, result)


# Invitations and mail


@router.post(
    "/{workspace_id}/invitations",
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Invite an account by email",
)
async def invite_member(
    workspace_id: UUID,
    body: InviteRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    invitations: InvitationService = Depends(get_invitations),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> InvitationResponse:
    """Owner only. The invitee receives the invitation mail and a notification."""
    try:
        result = await invitations.invite(actor_id, workspace_id, body.email, body.role)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return WorkspaceAdapter.invitation(result.invitation)


@router.post(
    "/{workspace_id}/mail",
    response_model=MailResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Send a custom mail",
)
async def send_mail(
    workspace_id: UUID,
    body: SendMailRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> MailResponse:
    try:
        result = await mailbox.send_custom_mail(
            actor_id, workspace_id, body.recipient_email, body.subject, body.body
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.mail(result.mail)
