"""Invitation workflow: onboarding members through accept/decline.

State Machine:
    pending -> accepted
    pending -> declined

Decisions are a single compare-and-set on the mail repository. A
second accept or decline on a decided invitation raises
AlreadyDecidedError; it is never a silent no-op.

Accept Flow:
    1. CAS pending -> accepted (marks read, stamps sent_at)
    2. Membership ledger ``add_member`` with the proposed role
    If step 2 fails the invitation is reverted to its pending snapshot
    and the ledger error propagates unchanged.

Outbound delivery of the invitation mail is fire-and-forget: dispatch
errors are logged and never undo the persisted invitation.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import InvitationResult
from teamwork.application.ports.account_repository import AccountRepositoryProtocol
from teamwork.application.ports.mail_dispatcher import MailDispatcherProtocol
from teamwork.application.ports.mail_repository import MailRepositoryProtocol
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.services.access_gate import AccessGate
from teamwork.application.services.membership_ledger_service import (
    MembershipLedgerService,
)
from teamwork.application.services.workspace_locks import WorkspaceLocks
from teamwork.domain.errors import (
    AlreadyDecidedError,
    AlreadyMemberError,
    CannotInviteAsOwnerError,
    ForbiddenError,
    InvitationPendingError,
    MailNotFoundError,
    RecipientNotFoundError,
)
from teamwork.domain.events import ProjectInviteEvent
from teamwork.domain.models.account import Account, normalize_email
from teamwork.domain.models.mail import (
    INVITE_BODY_TEMPLATE,
    INVITE_SUBJECT_TEMPLATE,
    InvitationMessage,
    InvitationStatus,
)
from teamwork.domain.models.workspace import WorkspaceRole
from teamwork.domain.primitives import AtomicOperationContext

logger = get_logger(__name__)


class InvitationService:
    """Creates invitations and applies the recipient's decision."""

    def __init__(
        self,
        mails: MailRepositoryProtocol,
        accounts: AccountRepositoryProtocol,
        memberships: MembershipRepositoryProtocol,
        ledger: MembershipLedgerService,
        gate: AccessGate,
        dispatcher: MailDispatcherProtocol | None = None,
        locks: WorkspaceLocks | None = None,
    ) -> None:
        self._mails = mails
        self._accounts = accounts
        self._memberships = memberships
        self._ledger = ledger
        self._gate = gate
        self._dispatcher = dispatcher
        self._locks = locks or WorkspaceLocks()

    async def invite(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        recipient_email: str,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
    ) -> InvitationResult:
        """Invite the account registered under ``recipient_email``.

        Args:
            actor_id: The sender; must own the workspace.
            workspace_id: Workspace to join.
            recipient_email: Email of an existing account.
            role: Proposed role, ADMIN or MEMBER.

        Returns:
            InvitationResult with a ProjectInvite event for the invitee.

        Raises:
            CannotInviteAsOwnerError: ``role`` is OWNER.
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not the owner.
            RecipientNotFoundError: No account has this email.
            AlreadyMemberError: Recipient is already a member.
            InvitationPendingError: Recipient already holds a pending
                invitation to this workspace.
        """
        if role is WorkspaceRole.OWNER:
            raise CannotInviteAsOwnerError()

        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_owner("invite member")
        log = logger.bind(actor_id=str(actor_id), workspace_id=str(workspace_id))

        recipient = await self._accounts.get_by_email(normalize_email(recipient_email))
        if recipient is None:
            log.info("invite_recipient_not_found")
            raise RecipientNotFoundError(recipient_email)

        workspace = context.workspace
        async with self._locks.for_workspace(workspace_id):
            if await self._memberships.get(workspace_id, recipient.id) is not None:
                raise AlreadyMemberError(workspace_id, recipient.id)
            pending = await self._mails.find_pending_invitation(workspace_id, recipient.id)
            if pending is not None:
                log.info("invitation_already_pending", invitation_id=str(pending.id))
                raise InvitationPendingError(workspace_id, pending.id)

            invitation = InvitationMessage(
                id=uuid4(),
                sender_account_id=actor_id,
                recipient_account_id=recipient.id,
                subject=INVITE_SUBJECT_TEMPLATE.format(name=workspace.name),
                body=INVITE_BODY_TEMPLATE.format(name=workspace.name, role=role.value),
                workspace_id=workspace_id,
                proposed_role=role,
            )
            await self._mails.save(invitation)
        log.info(
            "invitation_created",
            invitation_id=str(invitation.id),
            recipient_id=str(recipient.id),
            role=role.value,
        )

        await self._dispatch(invitation, recipient)

        event = ProjectInviteEvent(
            actor_id=actor_id,
            workspace_id=workspace_id,
            workspace_name=workspace.name,
            invitee_id=recipient.id,
            invitation_id=invitation.id,
        )
        return InvitationResult(invitation=invitation, events=[event])

    async def _dispatch(self, invitation: InvitationMessage, recipient: Account) -> None:
        if self._dispatcher is None:
            return
        try:
            await self._dispatcher.dispatch(invitation, recipient)
        except Exception as exc:
            logger.warning(
                "mail_dispatch_failed",
                mail_id=str(invitation.id),
                error=str(exc),
                error_type=type(exc).__name__,
            )

    async def _pending_for(self, actor_id: UUID, invitation_id: UUID) -> InvitationMessage:
        mail = await self._mails.get(invitation_id)
        if not isinstance(mail, InvitationMessage):
            raise MailNotFoundError(invitation_id)
        if mail.recipient_account_id != actor_id:
            logger.info(
                "access_denied",
                account_id=str(actor_id),
                invitation_id=str(invitation_id),
                action="decide invitation",
                required="recipient",
            )
            raise ForbiddenError(actor_id, "decide invitation", "recipient")
        if mail.invitation_status is not InvitationStatus.PENDING:
            raise AlreadyDecidedError(invitation_id, mail.invitation_status.value)
        return mail

    async def accept(self, actor_id: UUID, invitation_id: UUID) -> InvitationResult:
        """Accept an invitation and join the workspace.

        Raises:
            MailNotFoundError: No invitation with this id.
            ForbiddenError: Actor is not the recipient.
            AlreadyDecidedError: Invitation is not pending (also when a
                concurrent decision won the CAS).
            AlreadyMemberError: The ledger rejected the join; the
                invitation stays pending.
        """
        pending = await self._pending_for(actor_id, invitation_id)
        assert pending.workspace_id is not None
        log = logger.bind(
            invitation_id=str(invitation_id),
            actor_id=str(actor_id),
            workspace_id=str(pending.workspace_id),
        )

        async with AtomicOperationContext("invitation_accept") as ctx:
            accepted = await self._mails.decide_invitation_cas(
                invitation_id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
            )
            ctx.add_rollback(lambda: self._mails.revert_invitation(invitation_id, pending))
            joined = await self._ledger.add_member(
                pending.workspace_id, actor_id, pending.proposed_role
            )

        log.info("invitation_accepted", role=pending.proposed_role.value)
        return InvitationResult(invitation=accepted, membership=joined.membership)

    async def decline(self, actor_id: UUID, invitation_id: UUID) -> InvitationResult:
        """Decline an invitation. No membership is created.

        Raises:
            MailNotFoundError: No invitation with this id.
            ForbiddenError: Actor is not the recipient.
            AlreadyDecidedError: Invitation is not pending.
        """
        await self._pending_for(actor_id, invitation_id)
        declined = await self._mails.decide_invitation_cas(
            invitation_id, InvitationStatus.PENDING, InvitationStatus.DECLINED
        )
        logger.info(
            "invitation_declined",
            invitation_id=str(invitation_id),
            actor_id=str(actor_id),
        )
        return InvitationResult(invitation=declined)

    async def get(self, actor_id: UUID, invitation_id: UUID) -> InvitationMessage:
        """Get an invitation visible to its sender or recipient."""
        mail = await self._mails.get(invitation_id)
        if not isinstance(mail, InvitationMessage):
            raise MailNotFoundError(invitation_id)
        if actor_id not in (mail.sender_account_id, mail.recipient_account_id):
            raise ForbiddenError(actor_id, "view invitation", "sender_or_recipient")
        return mail
