"""Notification inbox: a recipient's view of their notifications."""

from __future__ import annotations

from uuid import UUID

from structlog import get_logger

from teamwork.application.dtos import NotificationPage
from teamwork.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from teamwork.domain.errors import InvalidInputError, NotificationNotFoundError
from teamwork.domain.models.notification import Notification

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class NotificationInboxService:
    """Lists, marks and deletes notifications owned by the caller.

    A notification that belongs to somebody else is reported as not
    found, so ids of other accounts' notifications are not disclosed.
    """

    def __init__(
        self,
        notifications: NotificationRepositoryProtocol,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._notifications = notifications
        self._page_size = page_size

    async def list_notifications(
        self,
        actor_id: UUID,
        limit: int | None = None,
        offset: int = 0,
        unread_only: bool = False,
    ) -> NotificationPage:
        """Return one page of the actor's notifications, newest first.

        Raises:
            InvalidInputError: ``limit`` outside 1..100 or negative ``offset``.
        """
        limit = self._page_size if limit is None else limit
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise InvalidInputError("limit", f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if offset < 0:
            raise InvalidInputError("offset", "offset must not be negative")

        notifications = await self._notifications.list_for_recipient(
            actor_id, limit=limit, offset=offset, unread_only=unread_only
        )
        total = await self._notifications.count_for_recipient(
            actor_id, unread_only=unread_only
        )
        unread = await self._notifications.count_for_recipient(actor_id, unread_only=True)
        return NotificationPage(
            notifications=notifications,
            total=total,
            unread_count=unread,
            limit=limit,
            offset=offset,
        )

    async def unread_count(self, actor_id: UUID) -> int:
        return await self._notifications.count_for_recipient(actor_id, unread_only=True)

    async def _owned(self, actor_id: UUID, notification_id: UUID) -> Notification:
        notification = await self._notifications.get(notification_id)
        if notification is None or notification.recipient_account_id != actor_id:
            raise NotificationNotFoundError(notification_id)
        return notification

    async def mark_read(self, actor_id: UUID, notification_id: UUID) -> Notification:
        await self._owned(actor_id, notification_id)
        return await self._notifications.mark_read(notification_id)

    async def mark_all_read(self, actor_id: UUID) -> int:
        count = await self._notifications.mark_all_read(actor_id)
        logger.info("notifications_marked_read", account_id=str(actor_id), count=count)
        return count

    async def delete(self, actor_id: UUID, notification_id: UUID) -> None:
        await self._owned(actor_id, notification_id)
        await self._notifications.delete(notification_id)
        logger.info(
            "notification_deleted",
            account_id=str(actor_id),
            notification_id=str(notification_id),
        )
