"""In-memory stub for MailRepositoryProtocol.

Simulates the mail table including the compare-and-set used for
invitation decisions. The CAS runs under a lock so concurrent
accept/decline calls on one invitation are serialized: exactly one
wins, the rest see AlreadyDecidedError.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from teamwork.domain.errors import AlreadyDecidedError, MailNotFoundError
from teamwork.domain.models.mail import InvitationMessage, InvitationStatus, Mail


class MailRepositoryStub:
    """In-memory implementation of MailRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._mails: dict[UUID, Mail] = {}
        self._cas_lock = asyncio.Lock()

    async def get(self, mail_id: UUID) -> Mail | None:
        return self._mails.get(mail_id)

    async def save(self, mail: Mail) -> None:
        self._mails[mail.id] = mail

    async def delete(self, mail_id: UUID) -> bool:
        return self._mails.pop(mail_id, None) is not None

    async def list_sent(self, account_id: UUID) -> list[Mail]:
        mails = [m for m in self._mails.values() if m.sender_account_id == account_id]
        return sorted(mails, key=lambda m: m.created_at, reverse=True)

    async def list_received(self, account_id: UUID) -> list[Mail]:
        mails = [m for m in self._mails.values() if m.recipient_account_id == account_id]
        return sorted(mails, key=lambda m: m.created_at, reverse=True)

    async def find_pending_invitation(
        self, workspace_id: UUID, recipient_account_id: UUID
    ) -> InvitationMessage | None:
        for mail in self._mails.values():
            if (
                isinstance(mail, InvitationMessage)
                and mail.workspace_id == workspace_id
                and mail.recipient_account_id == recipient_account_id
                and mail.invitation_status is InvitationStatus.PENDING
            ):
                return mail
        return None

    async def decide_invitation_cas(
        self,
        invitation_id: UUID,
        expected: InvitationStatus,
        new: InvitationStatus,
    ) -> InvitationMessage:
        """Atomically move an invitation from ``expected`` to ``new``.

        Raises:
            MailNotFoundError: No invitation with this id.
            AlreadyDecidedError: Current status is not ``expected``.
        """
        async with self._cas_lock:
            mail = self._mails.get(invitation_id)
            if not isinstance(mail, InvitationMessage):
                raise MailNotFoundError(invitation_id)
            if mail.invitation_status is not expected:
                raise AlreadyDecidedError(invitation_id, mail.invitation_status.value)
            decided = mail.with_decision(new)
            self._mails[invitation_id] = decided
            return decided

    async def revert_invitation(
        self, invitation_id: UUID, previous: InvitationMessage
    ) -> None:
        async with self._cas_lock:
            self._mails[invitation_id] = previous

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._mails.clear()

    def count(self) -> int:
        return len(self._mails)
