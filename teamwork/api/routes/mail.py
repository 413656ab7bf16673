"""Mailbox API routes for sent and received mail."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from teamwork.api.adapters import InboxAdapter
from teamwork.api.dependencies import get_actor_id, get_mailbox
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.mail import MailResponse, MarkReadRequest, UpdateMailRequest
from teamwork.application.services import MailboxService
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/mail", tags=["mail"])


@router.get("/sent", response_model=list[MailResponse], summary="List sent mail")
async def list_sent(
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> list[MailResponse]:
    return [InboxAdapter.mail(m) for m in await mailbox.list_sent(actor_id)]


@router.get("/received", response_model=list[MailResponse], summary="List received mail")
async def list_received(
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> list[MailResponse]:
    return [InboxAdapter.mail(m) for m in await mailbox.list_received(actor_id)]


@router.get(
    "/{mail_id}",
    response_model=MailResponse,
    responses=ERROR_RESPONSES,
    summary="Get a mail",
)
async def get_mail(
    mail_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> MailResponse:
    try:
        mail = await mailbox.get(actor_id, mail_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.mail(mail)


@router.patch(
    "/{mail_id}",
    response_model=MailResponse,
    responses=ERROR_RESPONSES,
    summary="Edit a custom mail",
)
async def update_mail(
    mail_id: UUID,
    body: UpdateMailRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> MailResponse:
    """Sender only; invitation mail cannot be edited."""
    try:
        mail = await mailbox.update_custom_mail(
            actor_id, mail_id, subject=body.subject, body=body.body
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.mail(mail)


@router.put(
    "/{mail_id}/read",
    response_model=MailResponse,
    responses=ERROR_RESPONSES,
    summary="Mark a mail read or unread",
)
async def mark_mail_read(
    mail_id: UUID,
    body: MarkReadRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> MailResponse:
    try:
        mail = await mailbox.mark_read(actor_id, mail_id, body.read)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.mail(mail)


@router.delete(
    "/{mail_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete a mail",
)
async def delete_mail(
    mail_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    mailbox: MailboxService = Depends(get_mailbox),
) -> Response:
    try:
        await mailbox.delete_mail(actor_id, mail_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
