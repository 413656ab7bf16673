"""Mailbox: custom in-app mail between workspace members.

Invitations are mails too; they are created and decided by the
invitation workflow and only read or deleted here.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import MailResult
from teamwork.application.ports.account_repository import AccountRepositoryProtocol
from teamwork.application.ports.mail_dispatcher import MailDispatcherProtocol
from teamwork.application.ports.mail_repository import MailRepositoryProtocol
from teamwork.application.services.access_gate import AccessGate
from teamwork.domain.errors import (
    ForbiddenError,
    InvalidInputError,
    MailNotFoundError,
    RecipientNotFoundError,
    require_text,
)
from teamwork.domain.models.account import normalize_email
from teamwork.domain.models.mail import Mail, MailType

logger = get_logger(__name__)


class MailboxService:
    """Sends, lists and manages custom mail."""

    def __init__(
        self,
        mails: MailRepositoryProtocol,
        accounts: AccountRepositoryProtocol,
        gate: AccessGate,
        dispatcher: MailDispatcherProtocol | None = None,
    ) -> None:
        self._mails = mails
        self._accounts = accounts
        self._gate = gate
        self._dispatcher = dispatcher

    async def send_custom_mail(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        recipient_email: str,
        subject: str,
        body: str,
    ) -> MailResult:
        """Send a custom mail in the context of a workspace. Members only.

        Raises:
            InvalidInputError: Subject or body is blank.
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not a member.
            RecipientNotFoundError: No account has this email.
        """
        subject = require_text("subject", subject)
        body = require_text("body", body)
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_member("send mail")

        recipient = await self._accounts.get_by_email(normalize_email(recipient_email))
        if recipient is None:
            raise RecipientNotFoundError(recipient_email)

        mail = Mail(
            id=uuid4(),
            sender_account_id=actor_id,
            recipient_account_id=recipient.id,
            subject=subject,
            body=body,
            mail_type=MailType.CUSTOM,
            workspace_id=workspace_id,
        )
        await self._mails.save(mail)
        logger.info(
            "mail_sent",
            mail_id=str(mail.id),
            sender_id=str(actor_id),
            recipient_id=str(recipient.id),
        )

        if self._dispatcher is not None:
            try:
                await self._dispatcher.dispatch(mail, recipient)
            except Exception as exc:
                logger.warning(
                    "mail_dispatch_failed",
                    mail_id=str(mail.id),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
        return MailResult(mail=mail)

    async def list_sent(self, actor_id: UUID) -> list[Mail]:
        return await self._mails.list_sent(actor_id)

    async def list_received(self, actor_id: UUID) -> list[Mail]:
        return await self._mails.list_received(actor_id)

    async def _get(self, mail_id: UUID) -> Mail:
        mail = await self._mails.get(mail_id)
        if mail is None:
            raise MailNotFoundError(mail_id)
        return mail

    async def get(self, actor_id: UUID, mail_id: UUID) -> Mail:
        """Get a mail visible to its sender or recipient."""
        mail = await self._get(mail_id)
        if actor_id not in (mail.sender_account_id, mail.recipient_account_id):
            raise ForbiddenError(actor_id, "view mail", "sender_or_recipient")
        return mail

    async def mark_read(self, actor_id: UUID, mail_id: UUID, read: bool = True) -> Mail:
        """Toggle the read flag. Recipient only."""
        mail = await self._get(mail_id)
        if mail.recipient_account_id != actor_id:
            raise ForbiddenError(actor_id, "mark mail read", "recipient")
        updated = mail.with_read(read)
        await self._mails.save(updated)
        return updated

    async def update_custom_mail(
        self,
        actor_id: UUID,
        mail_id: UUID,
        subject: str | None = None,
        body: str | None = None,
    ) -> Mail:
        """Edit subject/body of a custom mail. Sender only.

        Raises:
            MailNotFoundError: Mail does not exist.
            ForbiddenError: Actor is not the sender.
            InvalidInputError: Mail is not a custom mail, or a field is blank.
        """
        mail = await self._get(mail_id)
        if mail.sender_account_id != actor_id:
            raise ForbiddenError(actor_id, "update mail", "sender")
        if mail.mail_type is not MailType.CUSTOM:
            raise InvalidInputError("mail_type", "Only custom mails can be edited")
        if subject is not None:
            subject = require_text("subject", subject)
        if body is not None:
            body = require_text("body", body)
        updated = mail.with_content(subject, body)
        await self._mails.save(updated)
        logger.info("mail_updated", mail_id=str(mail_id))
        return updated

    async def delete_mail(self, actor_id: UUID, mail_id: UUID) -> None:
        """Delete a mail. Sender or recipient."""
        mail = await self._get(mail_id)
        if actor_id not in (mail.sender_account_id, mail.recipient_account_id):
            raise ForbiddenError(actor_id, "delete mail", "sender_or_recipient")
        await self._mails.delete(mail_id)
        logger.info("mail_deleted", mail_id=str(mail_id), actor_id=str(actor_id))
