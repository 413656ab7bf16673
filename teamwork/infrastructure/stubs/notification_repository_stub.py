"""In-memory stub for NotificationRepositoryProtocol.

Supports per-recipient write failure injection so the fan-out
dispatcher's per-recipient isolation can be exercised.
"""

from __future__ import annotations

from uuid import UUID

from teamwork.domain.errors import NotificationNotFoundError
from teamwork.domain.models.notification import Notification


class NotificationRepositoryStub:
    """In-memory implementation of NotificationRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._notifications: dict[UUID, Notification] = {}
        self._failing_recipients: set[UUID] = set()

    async def save(self, notification: Notification) -> None:
        if notification.recipient_account_id in self._failing_recipients:
            raise ConnectionError(
                f"Simulated write failure for {notification.recipient_account_id}"
            )
        self._notifications[notification.id] = notification

    async def get(self, notification_id: UUID) -> Notification | None:
        return self._notifications.get(notification_id)

    def _for_recipient(
        self, recipient_account_id: UUID, unread_only: bool
    ) -> list[Notification]:
        return [
            n
            for n in self._notifications.values()
            if n.recipient_account_id == recipient_account_id
            and not (unread_only and n.read)
        ]

    async def list_for_recipient(
        self,
        recipient_account_id: UUID,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False,
    ) -> list[Notification]:
        notifications = self._for_recipient(recipient_account_id, unread_only)
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def count_for_recipient(
        self, recipient_account_id: UUID, unread_only: bool = False
    ) -> int:
        return len(self._for_recipient(recipient_account_id, unread_only))

    async def mark_read(self, notification_id: UUID) -> Notification:
        current = self._notifications.get(notification_id)
        if current is None:
            raise NotificationNotFoundError(notification_id)
        updated = current.with_read(True)
        self._notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, recipient_account_id: UUID) -> int:
        unread = self._for_recipient(recipient_account_id, unread_only=True)
        for notification in unread:
            self._notifications[notification.id] = notification.with_read(True)
        return len(unread)

    async def delete(self, notification_id: UUID) -> bool:
        return self._notifications.pop(notification_id, None) is not None

    # Test helper methods

    def fail_writes_for(self, *recipient_account_ids: UUID) -> None:
        """Make ``save`` raise for the given recipients."""
        self._failing_recipients.update(recipient_account_ids)

    def all_for(self, recipient_account_id: UUID) -> list[Notification]:
        return self._for_recipient(recipient_account_id, unread_only=False)

    def all(self) -> list[Notification]:
        return list(self._notifications.values())

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._notifications.clear()
        self._failing_recipients.clear()
