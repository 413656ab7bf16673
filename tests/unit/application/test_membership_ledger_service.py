"""Unit tests for MembershipLedgerService.

Covers the owner invariant, membership uniqueness, assignee pruning
and all-or-nothing workspace deletion.
"""

from uuid import uuid4

import pytest

from teamwork.domain.errors import (
    AccountNotFoundError,
    AlreadyMemberError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    ForbiddenError,
    InvalidInputError,
    NotMemberError,
    WorkspaceDeleteError,
    WorkspaceNotFoundError,
)
from teamwork.domain.events import ProjectRemovedEvent, ProjectUpdateEvent
from teamwork.domain.models.task import TaskStatus
from teamwork.domain.models.workspace import WorkspaceRole, WorkspaceStatus


class TestCreateWorkspace:
    """Tests for create_workspace."""

    @pytest.mark.asyncio
    async def test_creator_becomes_the_single_owner(self, container, account_factory) -> None:
        owner = account_factory("olive")
        result = await container.ledger.create_workspace(owner.id, name="  Apollo  ")

        assert result.workspace.name == "Apollo"
        assert result.workspace.owner_account_id == owner.id
        members = await container.ledger.get_members(owner.id, result.workspace.id)
        assert [(m.account_id, m.role) for m in members] == [(owner.id, WorkspaceRole.OWNER)]

    @pytest.mark.asyncio
    async def test_blank_name_is_invalid(self, container, account_factory) -> None:
        owner = account_factory("olive")
        with pytest.raises(InvalidInputError):
            await container.ledger.create_workspace(owner.id, name="   ")

    @pytest.mark.asyncio
    async def test_unknown_account_cannot_create(self, container) -> None:
        with pytest.raises(AccountNotFoundError):
            await container.ledger.create_workspace(uuid4(), name="Ghost")


class TestAddMember:
    """Tests for add_member."""

    @pytest.mark.asyncio
    async def test_duplicate_join_is_rejected(self, crew) -> None:
        with pytest.raises(AlreadyMemberError):
            await crew.container.ledger.add_member(crew.workspace_id, crew.member.id)

    @pytest.mark.asyncio
    async def test_owner_role_is_never_added(self, crew) -> None:
        with pytest.raises(InvalidInputError):
            await crew.container.ledger.add_member(
                crew.workspace_id, crew.outsider.id, WorkspaceRole.OWNER
            )

    @pytest.mark.asyncio
    async def test_missing_workspace(self, crew) -> None:
        with pytest.raises(WorkspaceNotFoundError):
            await crew.container.ledger.add_member(uuid4(), crew.outsider.id)

    @pytest.mark.asyncio
    async def test_membership_shows_up_in_both_directions(self, crew) -> None:
        ledger = crew.container.ledger
        await ledger.add_member(crew.workspace_id, crew.outsider.id)

        summaries = await ledger.list_workspaces(crew.outsider.id)
        members = await ledger.get_members(crew.owner.id, crew.workspace_id)

        assert [s.workspace.id for s in summaries] == [crew.workspace_id]
        assert summaries[0].role is WorkspaceRole.MEMBER
        assert crew.outsider.id in {m.account_id for m in members}


class TestRemoveMember:
    """Tests for remove_member and leave_workspace."""

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, crew) -> None:
        with pytest.raises(CannotRemoveOwnerError):
            await crew.container.ledger.remove_member(
                crew.admin.id, crew.workspace_id, crew.owner.id
            )

    @pytest.mark.asyncio
    async def test_owner_cannot_leave(self, crew) -> None:
        with pytest.raises(CannotRemoveOwnerError):
            await crew.container.ledger.leave_workspace(crew.owner.id, crew.workspace_id)

    @pytest.mark.asyncio
    async def test_member_cannot_remove_others(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.ledger.remove_member(
                crew.member.id, crew.workspace_id, crew.admin.id
            )

    @pytest.mark.asyncio
    async def test_removing_a_non_member(self, crew) -> None:
        with pytest.raises(NotMemberError):
            await crew.container.ledger.remove_member(
                crew.owner.id, crew.workspace_id, crew.outsider.id
            )

    @pytest.mark.asyncio
    async def test_removal_prunes_assignments_and_emits_event(self, crew) -> None:
        c = crew.container
        task = (
            await c.task_lifecycle.create(
                crew.owner.id,
                crew.workspace_id,
                "Write docs",
                assigned_to=[crew.member.id, crew.admin.id],
            )
        ).task

        result = await c.ledger.remove_member(crew.admin.id, crew.workspace_id, crew.member.id)

        assert result.pruned_task_ids == [task.id]
        refreshed = await c.tasks.get(task.id)
        assert refreshed is not None and refreshed.assigned_to == (crew.admin.id,)
        assert await c.memberships.get(crew.workspace_id, crew.member.id) is None
        [event] = result.events
        assert isinstance(event, ProjectRemovedEvent)
        assert event.removed_account_id == crew.member.id

    @pytest.mark.asyncio
    async def test_failed_prune_restores_membership_and_assignments(self, crew) -> None:
        c = crew.container
        for title in ("Write docs", "Review docs"):
            await c.task_lifecycle.create(
                crew.owner.id,
                crew.workspace_id,
                title,
                assigned_to=[crew.member.id, crew.admin.id],
            )
        c.tasks.fail_saves_with(OSError("store offline"), after=1)

        with pytest.raises(OSError):
            await c.ledger.remove_member(crew.admin.id, crew.workspace_id, crew.member.id)

        restored = await c.memberships.get(crew.workspace_id, crew.member.id)
        assert restored is not None and restored.role is WorkspaceRole.MEMBER
        for task in await c.tasks.list_for_workspace(crew.workspace_id):
            assert task.assigned_to == (crew.member.id, crew.admin.id)

    @pytest.mark.asyncio
    async def test_member_can_leave(self, crew) -> None:
        result = await crew.container.ledger.leave_workspace(crew.member.id, crew.workspace_id)
        assert result.membership.account_id == crew.member.id
        assert await crew.container.ledger.list_workspaces(crew.member.id) == []


class TestUpdateRole:
    """Tests for update_role."""

    @pytest.mark.asyncio
    async def test_owner_promotes_member(self, crew) -> None:
        result = await crew.container.ledger.update_role(
            crew.owner.id, crew.workspace_id, crew.member.id, WorkspaceRole.ADMIN
        )
        assert result.membership.role is WorkspaceRole.ADMIN
        assert result.changed

    @pytest.mark.asyncio
    async def test_same_role_is_a_no_op(self, crew) -> None:
        result = await crew.container.ledger.update_role(
            crew.owner.id, crew.workspace_id, crew.admin.id, WorkspaceRole.ADMIN
        )
        assert not result.changed

    @pytest.mark.asyncio
    async def test_admin_cannot_change_roles(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.ledger.update_role(
                crew.admin.id, crew.workspace_id, crew.member.id, WorkspaceRole.ADMIN
            )

    @pytest.mark.asyncio
    async def test_nobody_is_promoted_to_owner(self, crew) -> None:
        with pytest.raises(CannotChangeOwnerRoleError):
            await crew.container.ledger.update_role(
                crew.owner.id, crew.workspace_id, crew.admin.id, WorkspaceRole.OWNER
            )

    @pytest.mark.asyncio
    async def test_owner_is_never_demoted(self, crew) -> None:
        with pytest.raises(CannotChangeOwnerRoleError):
            await crew.container.ledger.update_role(
                crew.owner.id, crew.workspace_id, crew.owner.id, WorkspaceRole.MEMBER
            )
        roles = [m.role for m in await crew.container.memberships.list_for_workspace(
            crew.workspace_id
        )]
        assert roles.count(WorkspaceRole.OWNER) == 1


class TestWorkspaceLifecycle:
    """Tests for update, details and delete."""

    @pytest.mark.asyncio
    async def test_update_emits_project_update_with_changed_fields(self, crew) -> None:
        result = await crew.container.ledger.update_workspace(
            crew.owner.id,
            crew.workspace_id,
            name="Apollo 2",
            status=WorkspaceStatus.ARCHIVED,
            description=None,
        )
        assert result.workspace.name == "Apollo 2"
        [event] = result.events
        assert isinstance(event, ProjectUpdateEvent)
        assert event.update_type == "name, status"

    @pytest.mark.asyncio
    async def test_unchanged_update_emits_nothing(self, crew) -> None:
        result = await crew.container.ledger.update_workspace(
            crew.owner.id, crew.workspace_id, name="Apollo"
        )
        assert result.events == []

    @pytest.mark.asyncio
    async def test_unknown_field_is_invalid(self, crew) -> None:
        with pytest.raises(InvalidInputError):
            await crew.container.ledger.update_workspace(
                crew.owner.id, crew.workspace_id, owner_account_id=crew.admin.id
            )

    @pytest.mark.asyncio
    async def test_admin_cannot_update_workspace(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.ledger.update_workspace(
                crew.admin.id, crew.workspace_id, name="Mine"
            )

    @pytest.mark.asyncio
    async def test_details_count_members_and_tasks(self, crew) -> None:
        await crew.container.task_lifecycle.create(crew.owner.id, crew.workspace_id, "A")
        details = await crew.container.ledger.get_workspace_details(
            crew.member.id, crew.workspace_id
        )
        assert details.member_count == 3
        assert details.task_counts[TaskStatus.TODO] == 1
        assert details.role is WorkspaceRole.MEMBER

    @pytest.mark.asyncio
    async def test_delete_removes_everything_and_notifies_former_members(self, crew) -> None:
        c = crew.container
        task = (await c.task_lifecycle.create(crew.owner.id, crew.workspace_id, "A")).task
        await c.comment_thread.add_comment(crew.member.id, task.id, "hello")
        await c.issue_lifecycle.create(crew.member.id, task.id, "Broken")

        result = await c.ledger.delete_workspace(crew.owner.id, crew.workspace_id)

        assert await c.workspaces.get(crew.workspace_id) is None
        assert await c.tasks.get(task.id) is None
        assert c.comments.count() == 0
        assert c.issues.count() == 0
        assert await c.memberships.list_for_workspace(crew.workspace_id) == []
        removed = {e.removed_account_id for e in result.events}
        assert removed == {crew.admin.id, crew.member.id}

    @pytest.mark.asyncio
    async def test_failed_delete_restores_memberships_and_tasks(self, crew) -> None:
        c = crew.container
        task = (await c.task_lifecycle.create(crew.owner.id, crew.workspace_id, "A")).task
        c.tasks.fail_deletes_with(OSError("store offline"))

        with pytest.raises(WorkspaceDeleteError) as exc_info:
            await c.ledger.delete_workspace(crew.owner.id, crew.workspace_id)

        assert exc_info.value.workspace_id == crew.workspace_id
        assert isinstance(exc_info.value.__cause__, OSError)

        c.tasks.fail_deletes_with(None)
        assert await c.workspaces.get(crew.workspace_id) is not None
        assert await c.tasks.get(task.id) is not None
        assert c.memberships.count_for_workspace(crew.workspace_id) == 3
