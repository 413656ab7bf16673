"""Notification inbox API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from teamwork.api.adapters import InboxAdapter
from teamwork.api.dependencies import get_actor_id, get_inbox
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.mail import (
    MarkAllReadResponse,
    NotificationPageResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from teamwork.application.services import NotificationInboxService
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationPageResponse,
    responses=ERROR_RESPONSES,
    summary="List the caller's notifications",
)
async def list_notifications(
    request: Request,
    limit: int | None = Query(default=None, description="Page size, 1..100"),
    offset: int = Query(default=0),
    unread_only: bool = Query(default=False),
    actor_id: UUID = Depends(get_actor_id),
    inbox: NotificationInboxService = Depends(get_inbox),
) -> NotificationPageResponse:
    """Newest first."""
    try:
        page = await inbox.list_notifications(
            actor_id, limit=limit, offset=offset, unread_only=unread_only
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.page(page)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Count unread notifications",
)
async def unread_count(
    actor_id: UUID = Depends(get_actor_id),
    inbox: NotificationInboxService = Depends(get_inbox),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await inbox.unread_count(actor_id))


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark every notification read",
)
async def mark_all_read(
    actor_id: UUID = Depends(get_actor_id),
    inbox: NotificationInboxService = Depends(get_inbox),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(marked=await inbox.mark_all_read(actor_id))


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses=ERROR_RESPONSES,
    summary="Mark a notification read",
)
async def mark_read(
    notification_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    inbox: NotificationInboxService = Depends(get_inbox),
) -> NotificationResponse:
    try:
        notification = await inbox.mark_read(actor_id, notification_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return InboxAdapter.notification(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete a notification",
)
async def delete_notification(
    notification_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    inbox: NotificationInboxService = Depends(get_inbox),
) -> Response:
    try:
        await inbox.delete(actor_id, notification_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
