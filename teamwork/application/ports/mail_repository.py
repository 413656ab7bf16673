"""Mail repository port.

Constraints:
- Invitation decisions are a single conditional write
  (``decide_invitation_cas``); read-then-write is not safe under
  concurrent accept/decline calls
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.mail import InvitationMessage, InvitationStatus, Mail


class MailRepositoryProtocol(Protocol):
    """Protocol for mail persistence."""

    @abstractmethod
    async def get(self, mail_id: UUID) -> Mail | None:
        """Get a mail (or invitation) by id."""
        ...

    @abstractmethod
    async def save(self, mail: Mail) -> None:
        """Insert or replace a mail."""
        ...

    @abstractmethod
    async def delete(self, mail_id: UUID) -> bool:
        """Delete a mail. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def list_sent(self, account_id: UUID) -> list[Mail]:
        """List mails sent by an account, newest first."""
        ...

    @abstractmethod
    async def list_received(self, account_id: UUID) -> list[Mail]:
        """List mails received by an account, newest first."""
        ...

    @abstractmethod
    async def find_pending_invitation(
        self, workspace_id: UUID, recipient_account_id: UUID
    ) -> InvitationMessage | None:
        """Get the pending invitation for (workspace, recipient), if any."""
        ...

    @abstractmethod
    async def decide_invitation_cas(
        self,
        invitation_id: UUID,
        expected: InvitationStatus,
        new: InvitationStatus,
    ) -> InvitationMessage:
        """Atomically move an invitation from ``expected`` to ``new``.

        The decided invitation is marked read and stamped with sent_at.

        Returns:
            The updated invitation.

        Raises:
            MailNotFoundError: No invitation with this id.
            AlreadyDecidedError: Status was not ``expected``.
        """
        ...

    @abstractmethod
    async def revert_invitation(
        self, invitation_id: UUID, previous: InvitationMessage
    ) -> None:
        """Restore an invitation to a previously read snapshot.

        Used only as a compensation when the step after a decision fails.
        """
        ...
