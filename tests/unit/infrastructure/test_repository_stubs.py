"""Unit tests for the in-memory repository stubs."""

from uuid import uuid4

import pytest

from teamwork.domain.errors import AlreadyDecidedError, AlreadyMemberError
from teamwork.domain.models.mail import InvitationMessage, InvitationStatus
from teamwork.domain.models.task import Task
from teamwork.domain.models.workspace import Membership, WorkspaceRole
from teamwork.infrastructure.stubs import (
    MailRepositoryStub,
    MembershipRepositoryStub,
    TaskRepositoryStub,
)


class TestMembershipRepositoryStub:
    @pytest.mark.asyncio
    async def test_unique_key_enforced(self) -> None:
        repo = MembershipRepositoryStub()
        membership = Membership(
            workspace_id=uuid4(), account_id=uuid4(), role=WorkspaceRole.MEMBER
        )
        await repo.add(membership)
        with pytest.raises(AlreadyMemberError):
            await repo.add(membership)

    @pytest.mark.asyncio
    async def test_both_directions(self) -> None:
        repo = MembershipRepositoryStub()
        workspace_id, account_id = uuid4(), uuid4()
        await repo.add(
            Membership(workspace_id=workspace_id, account_id=account_id, role=WorkspaceRole.ADMIN)
        )
        assert [m.account_id for m in await repo.list_for_workspace(workspace_id)] == [account_id]
        assert [m.workspace_id for m in await repo.list_for_account(account_id)] == [workspace_id]
        assert repo.count_for_workspace(workspace_id) == 1


class TestMailRepositoryStub:
    @pytest.mark.asyncio
    async def test_cas_moves_pending_once(self) -> None:
        repo = MailRepositoryStub()
        invitation = InvitationMessage(
            id=uuid4(),
            sender_account_id=uuid4(),
            recipient_account_id=uuid4(),
            subject="Join",
            body="Please",
            workspace_id=uuid4(),
        )
        await repo.save(invitation)

        decided = await repo.decide_invitation_cas(
            invitation.id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
        )
        assert decided.invitation_status is InvitationStatus.ACCEPTED
        with pytest.raises(AlreadyDecidedError):
            await repo.decide_invitation_cas(
                invitation.id, InvitationStatus.PENDING, InvitationStatus.DECLINED
            )

        await repo.revert_invitation(invitation.id, invitation)
        restored = await repo.get(invitation.id)
        assert restored.invitation_status is InvitationStatus.PENDING


class TestTaskRepositoryStub:
    @pytest.mark.asyncio
    async def test_delete_failure_injection(self) -> None:
        repo = TaskRepositoryStub()
        task = Task(id=uuid4(), workspace_id=uuid4(), title="T")
        await repo.save(task)
        repo.fail_deletes_with(RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await repo.delete(task.id)
        repo.fail_deletes_with(None)
        assert await repo.delete(task.id)
