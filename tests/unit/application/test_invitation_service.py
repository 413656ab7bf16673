"""Unit tests for InvitationService.

Covers the invite preconditions, the accept/decline state machine,
concurrent decisions and fire-and-forget outbound delivery.
"""

import asyncio
from uuid import uuid4

import pytest

from teamwork.domain.errors import (
    AlreadyDecidedError,
    AlreadyMemberError,
    CannotInviteAsOwnerError,
    ForbiddenError,
    InvitationPendingError,
    MailNotFoundError,
    RecipientNotFoundError,
    WorkspaceNotFoundError,
)
from teamwork.domain.events import ProjectInviteEvent
from teamwork.domain.models.mail import InvitationStatus, MailType
from teamwork.domain.models.workspace import WorkspaceRole


async def _invite(crew, role=WorkspaceRole.MEMBER):
    return await crew.container.invitations.invite(
        crew.owner.id, crew.workspace_id, crew.outsider.email, role
    )


class TestInvite:
    """Tests for invite."""

    @pytest.mark.asyncio
    async def test_invitation_is_pending_mail(self, crew) -> None:
        result = await _invite(crew, WorkspaceRole.ADMIN)

        invitation = result.invitation
        assert invitation.mail_type is MailType.INVITE
        assert invitation.invitation_status is InvitationStatus.PENDING
        assert invitation.proposed_role is WorkspaceRole.ADMIN
        assert invitation.recipient_account_id == crew.outsider.id
        assert "Apollo" in invitation.subject
        [event] = result.events
        assert isinstance(event, ProjectInviteEvent)
        assert event.invitee_id == crew.outsider.id

    @pytest.mark.asyncio
    async def test_email_lookup_ignores_case(self, crew) -> None:
        result = await crew.container.invitations.invite(
            crew.owner.id, crew.workspace_id, "  OTTO@Example.com "
        )
        assert result.invitation.recipient_account_id == crew.outsider.id

    @pytest.mark.asyncio
    async def test_invitation_is_dispatched(self, crew) -> None:
        result = await _invite(crew)
        [sent] = crew.container.dispatcher.dispatched
        assert sent.mail.id == result.invitation.id
        assert sent.recipient_email == crew.outsider.email

    @pytest.mark.asyncio
    async def test_dispatch_failure_keeps_invitation(self, crew) -> None:
        crew.container.dispatcher.fail_with(ConnectionError("smtp down"))
        result = await _invite(crew)
        assert await crew.container.mails.get(result.invitation.id) is not None

    @pytest.mark.asyncio
    async def test_owner_role_cannot_be_offered(self, crew) -> None:
        with pytest.raises(CannotInviteAsOwnerError):
            await _invite(crew, WorkspaceRole.OWNER)

    @pytest.mark.asyncio
    async def test_admin_cannot_invite(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.invitations.invite(
                crew.admin.id, crew.workspace_id, crew.outsider.email
            )

    @pytest.mark.asyncio
    async def test_unknown_recipient(self, crew) -> None:
        with pytest.raises(RecipientNotFoundError):
            await crew.container.invitations.invite(
                crew.owner.id, crew.workspace_id, "nobody@example.com"
            )

    @pytest.mark.asyncio
    async def test_existing_member_cannot_be_invited(self, crew) -> None:
        with pytest.raises(AlreadyMemberError):
            await crew.container.invitations.invite(
                crew.owner.id, crew.workspace_id, crew.member.email
            )

    @pytest.mark.asyncio
    async def test_missing_workspace(self, crew) -> None:
        with pytest.raises(WorkspaceNotFoundError):
            await crew.container.invitations.invite(
                crew.owner.id, uuid4(), crew.outsider.email
            )

    @pytest.mark.asyncio
    async def test_second_pending_invitation_is_rejected(self, crew) -> None:
        first = (await _invite(crew)).invitation

        with pytest.raises(InvitationPendingError) as exc_info:
            await _invite(crew, WorkspaceRole.ADMIN)

        assert exc_info.value.invitation_id == first.id
        received = await crew.container.mails.list_received(crew.outsider.id)
        assert [m.id for m in received] == [first.id]

    @pytest.mark.asyncio
    async def test_declined_recipient_can_be_invited_again(self, crew) -> None:
        first = (await _invite(crew)).invitation
        await crew.container.invitations.decline(crew.outsider.id, first.id)

        second = (await _invite(crew)).invitation

        assert second.id != first.id
        assert second.invitation_status is InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_concurrent_invites_create_one_invitation(self, crew) -> None:
        results = await asyncio.gather(
            _invite(crew), _invite(crew), return_exceptions=True
        )

        created = [r for r in results if not isinstance(r, BaseException)]
        rejected = [r for r in results if isinstance(r, InvitationPendingError)]
        assert len(created) == 1
        assert len(rejected) == 1


class TestDecisions:
    """Tests for accept and decline."""

    @pytest.mark.asyncio
    async def test_accept_joins_with_proposed_role(self, crew) -> None:
        invitation = (await _invite(crew, WorkspaceRole.ADMIN)).invitation

        result = await crew.container.invitations.accept(crew.outsider.id, invitation.id)

        assert result.invitation.invitation_status is InvitationStatus.ACCEPTED
        assert result.invitation.read
        assert result.membership is not None
        assert result.membership.role is WorkspaceRole.ADMIN
        assert await crew.container.gate.is_admin_or_owner(
            crew.outsider.id, crew.workspace_id
        )

    @pytest.mark.asyncio
    async def test_decline_creates_no_membership(self, crew) -> None:
        invitation = (await _invite(crew)).invitation

        result = await crew.container.invitations.decline(crew.outsider.id, invitation.id)

        assert result.invitation.invitation_status is InvitationStatus.DECLINED
        assert result.membership is None
        assert not await crew.container.gate.is_member(crew.outsider.id, crew.workspace_id)

    @pytest.mark.asyncio
    async def test_second_decision_is_rejected(self, crew) -> None:
        invitations = crew.container.invitations
        invitation = (await _invite(crew)).invitation
        await invitations.decline(crew.outsider.id, invitation.id)

        with pytest.raises(AlreadyDecidedError):
            await invitations.accept(crew.outsider.id, invitation.id)
        with pytest.raises(AlreadyDecidedError):
            await invitations.decline(crew.outsider.id, invitation.id)

    @pytest.mark.asyncio
    async def test_only_recipient_decides(self, crew) -> None:
        invitation = (await _invite(crew)).invitation
        with pytest.raises(ForbiddenError):
            await crew.container.invitations.accept(crew.owner.id, invitation.id)

    @pytest.mark.asyncio
    async def test_custom_mail_is_not_an_invitation(self, crew) -> None:
        mail = (
            await crew.container.mailbox.send_custom_mail(
                crew.owner.id, crew.workspace_id, crew.member.email, "Hi", "Hello"
            )
        ).mail
        with pytest.raises(MailNotFoundError):
            await crew.container.invitations.accept(crew.member.id, mail.id)

    @pytest.mark.asyncio
    async def test_concurrent_accepts_join_once(self, crew) -> None:
        invitations = crew.container.invitations
        invitation = (await _invite(crew)).invitation

        results = await asyncio.gather(
            invitations.accept(crew.outsider.id, invitation.id),
            invitations.accept(crew.outsider.id, invitation.id),
            return_exceptions=True,
        )

        accepted = [r for r in results if not isinstance(r, BaseException)]
        rejected = [r for r in results if isinstance(r, AlreadyDecidedError)]
        assert len(accepted) == 1
        assert len(rejected) == 1
        members = await crew.container.memberships.list_for_workspace(crew.workspace_id)
        assert [m.account_id for m in members].count(crew.outsider.id) == 1

    @pytest.mark.asyncio
    async def test_failed_join_leaves_invitation_pending(self, crew) -> None:
        c = crew.container
        invitation = (await _invite(crew)).invitation
        await c.ledger.add_member(crew.workspace_id, crew.outsider.id)

        with pytest.raises(AlreadyMemberError):
            await c.invitations.accept(crew.outsider.id, invitation.id)

        stored = await c.mails.get(invitation.id)
        assert stored.invitation_status is InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_sender_and_recipient_can_view(self, crew) -> None:
        invitations = crew.container.invitations
        invitation = (await _invite(crew)).invitation
        assert (await invitations.get(crew.owner.id, invitation.id)).id == invitation.id
        assert (await invitations.get(crew.outsider.id, invitation.id)).id == invitation.id
        with pytest.raises(ForbiddenError):
            await invitations.get(crew.member.id, invitation.id)
