"""Notification repository port."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.notification import Notification


class NotificationRepositoryProtocol(Protocol):
    """Protocol for notification persistence.

    Each ``save`` is an independent row write; the fan-out dispatcher
    issues them concurrently.
    """

    @abstractmethod
    async def save(self, notification: Notification) -> None:
        ...

    @abstractmethod
    async def get(self, notification_id: UUID) -> Notification | None:
        ...

    @abstractmethod
    async def list_for_recipient(
        self,
        recipient_account_id: UUID,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False,
    ) -> list[Notification]:
        """List a recipient's notifications, newest first."""
        ...

    @abstractmethod
    async def count_for_recipient(
        self, recipient_account_id: UUID, unread_only: bool = False
    ) -> int:
        ...

    @abstractmethod
    async def mark_read(self, notification_id: UUID) -> Notification:
        """Set ``read`` on one notification and return it."""
        ...

    @abstractmethod
    async def mark_all_read(self, recipient_account_id: UUID) -> int:
        """Mark every unread notification of a recipient. Returns the count."""
        ...

    @abstractmethod
    async def delete(self, notification_id: UUID) -> bool:
        ...
