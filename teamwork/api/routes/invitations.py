"""Invitation API routes: the recipient's side of the workflow."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from teamwork.api.adapters import WorkspaceAdapter
from teamwork.api.dependencies import get_actor_id, get_invitations
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.workspace import (
    InvitationDecisionResponse,
    InvitationResponse,
)
from teamwork.application.services import InvitationService
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/invitations", tags=["invitations"])


@router.get(
    "/{invitation_id}",
    response_model=InvitationResponse,
    responses=ERROR_RESPONSES,
    summary="Get an invitation",
)
async def get_invitation(
    invitation_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    invitations: InvitationService = Depends(get_invitations),
) -> InvitationResponse:
    try:
        invitation = await invitations.get(actor_id, invitation_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.invitation(invitation)


@router.post(
    "/{invitation_id}/accept",
    response_model=InvitationDecisionResponse,
    responses=ERROR_RESPONSES,
    summary="Accept an invitation",
)
async def accept_invitation(
    invitation_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    invitations: InvitationService = Depends(get_invitations),
) -> InvitationDecisionResponse:
    """Recipient only. Joins the workspace with the proposed role.

    A decided invitation answers 409 ``already-decided``.
    """
    try:
        result = await invitations.accept(actor_id, invitation_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.decision(result)


@router.post(
    "/{invitation_id}/decline",
    response_model=InvitationDecisionResponse,
    responses=ERROR_RESPONSES,
    summary="Decline an invitation",
)
async def decline_invitation(
    invitation_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    invitations: InvitationService = Depends(get_invitations),
) -> InvitationDecisionResponse:
    try:
        result = await invitations.decline(actor_id, invitation_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return WorkspaceAdapter.decision(result)
