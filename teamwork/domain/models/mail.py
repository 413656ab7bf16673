"""Mail and invitation domain models.

A Mail is the persisted record of an in-app message. Outbound delivery
is a separate fire-and-forget collaborator; only the record lives here.

InvitationMessage State Machine:
    PENDING -> ACCEPTED
    PENDING -> DECLINED

    ACCEPTED and DECLINED are terminal. A second accept/decline on a
    decided invitation is rejected, never silently ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from teamwork.domain.models.workspace import INVITABLE_ROLES, WorkspaceRole


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class MailType(Enum):
    """Kind of mail record."""

    WELCOME = "welcome"
    NOTIFICATION = "notification"
    REMINDER = "reminder"
    CUSTOM = "custom"
    INVITE = "invite"


class InvitationStatus(Enum):
    """Status of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


INVITE_SUBJECT_TEMPLATE = "Invitation to join project {name}"
INVITE_BODY_TEMPLATE = (
    'You have been invited to join the project "{name}" as a {role}. '
    "Please accept the invitation to become a member."
)


@dataclass(frozen=True, eq=True)
class Mail:
    """A persisted in-app message.

    Attributes:
        id: Unique mail identifier.
        sender_account_id: Author.
        recipient_account_id: Addressee.
        subject: Subject line.
        body: Message body.
        mail_type: Kind of mail.
        workspace_id: Workspace the mail is about, if any.
        read: Whether the recipient has read it.
        sent_at: When it was handed to delivery or decided (invitations).
        error_message: Last delivery error, if any.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    sender_account_id: UUID
    recipient_account_id: UUID
    subject: str
    body: str
    mail_type: MailType = field(default=MailType.CUSTOM)
    workspace_id: UUID | None = field(default=None)
    read: bool = field(default=False)
    sent_at: datetime | None = field(default=None)
    error_message: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def with_read(self, read: bool = True) -> Mail:
        return replace(self, read=read)

    def with_content(self, subject: str | None, body: str | None) -> Mail:
        return replace(
            self,
            subject=self.subject if subject is None else subject,
            body=self.body if body is None else body,
        )


@dataclass(frozen=True, eq=True)
class InvitationMessage(Mail):
    """A Mail of type INVITE offering membership in a workspace.

    Attributes:
        proposed_role: Role granted on acceptance (ADMIN or MEMBER).
        invitation_status: PENDING until accepted or declined.
    """

    mail_type: MailType = field(default=MailType.INVITE)
    proposed_role: WorkspaceRole = field(default=WorkspaceRole.MEMBER)
    invitation_status: InvitationStatus = field(default=InvitationStatus.PENDING)

    def __post_init__(self) -> None:
        """Validate invitation fields."""
        if self.mail_type is not MailType.INVITE:
            raise ValueError("InvitationMessage must have mail_type INVITE")
        if self.workspace_id is None:
            raise ValueError("InvitationMessage requires a workspace_id")
        if self.proposed_role not in INVITABLE_ROLES:
            raise ValueError(f"Cannot invite with role {self.proposed_role.value}")

    def with_decision(self, status: InvitationStatus) -> InvitationMessage:
        """Return a decided copy, marked read and stamped with ``sent_at``."""
        return replace(self, invitation_status=status, read=True, sent_at=_utc_now())
