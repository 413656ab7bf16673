"""Unit tests for AccessGate role queries and reference chains."""

from uuid import uuid4

import pytest

from teamwork.domain.errors import (
    CommentNotFoundError,
    ForbiddenError,
    IssueNotFoundError,
    TaskNotFoundError,
    WorkspaceNotFoundError,
)
from teamwork.domain.models.workspace import WorkspaceRole


class TestRoleQueries:
    """Pure role reads never raise."""

    @pytest.mark.asyncio
    async def test_roles_of_each_account(self, crew) -> None:
        gate = crew.container.gate
        assert await gate.role_of(crew.owner.id, crew.workspace_id) is WorkspaceRole.OWNER
        assert await gate.role_of(crew.admin.id, crew.workspace_id) is WorkspaceRole.ADMIN
        assert await gate.role_of(crew.member.id, crew.workspace_id) is WorkspaceRole.MEMBER
        assert await gate.role_of(crew.outsider.id, crew.workspace_id) is None

    @pytest.mark.asyncio
    async def test_queries_on_missing_workspace_answer_false(self, crew) -> None:
        gate = crew.container.gate
        missing = uuid4()
        assert await gate.role_of(crew.owner.id, missing) is None
        assert not await gate.is_member(crew.owner.id, missing)
        assert not await gate.is_admin_or_owner(crew.owner.id, missing)
        assert not await gate.is_owner(crew.owner.id, missing)

    @pytest.mark.asyncio
    async def test_admin_is_not_owner(self, crew) -> None:
        gate = crew.container.gate
        assert await gate.is_admin_or_owner(crew.admin.id, crew.workspace_id)
        assert not await gate.is_owner(crew.admin.id, crew.workspace_id)


class TestChains:
    """Chain resolvers tell missing rows apart from missing rights."""

    @pytest.mark.asyncio
    async def test_missing_links_raise_not_found(self, crew) -> None:
        gate = crew.container.gate
        with pytest.raises(WorkspaceNotFoundError):
            await gate.via_workspace(crew.owner.id, uuid4())
        with pytest.raises(TaskNotFoundError):
            await gate.via_task(crew.owner.id, uuid4())
        with pytest.raises(IssueNotFoundError):
            await gate.via_issue(crew.owner.id, uuid4())
        with pytest.raises(CommentNotFoundError):
            await gate.via_comment(crew.owner.id, uuid4())

    @pytest.mark.asyncio
    async def test_comment_chain_resolves_workspace(self, crew) -> None:
        c = crew.container
        task = (await c.task_lifecycle.create(crew.owner.id, crew.workspace_id, "T")).task
        comment = (await c.comment_thread.add_comment(crew.member.id, task.id, "hi")).comment

        context = await c.gate.via_comment(crew.member.id, comment.id)

        assert context.workspace.id == crew.workspace_id
        assert context.task is not None and context.task.id == task.id
        assert context.comment == comment
        assert context.role is WorkspaceRole.MEMBER

    @pytest.mark.asyncio
    async def test_outsider_context_is_refused(self, crew) -> None:
        context = await crew.container.gate.via_workspace(crew.outsider.id, crew.workspace_id)
        assert not context.is_member
        with pytest.raises(ForbiddenError):
            context.require_member("view workspace")
