"""Access gate: who may do what inside a workspace.

Every mutating operation resolves an AccessContext through this gate
before touching state.

Two kinds of queries:
- ``role_of`` / ``is_member`` / ``is_admin_or_owner`` / ``is_owner``
  are pure reads that answer None/False for anything missing and never
  raise.
- ``via_workspace`` / ``via_task`` / ``via_issue`` / ``via_comment``
  walk the reference chain (Comment -> Task -> Workspace, Issue ->
  Task -> Workspace) and return a typed AccessContext. A missing link
  raises the matching NotFoundError, so callers can tell 404 apart
  from the 403 raised by ``AccessContext.require_*``.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from structlog import get_logger

from teamwork.application.ports.comment_repository import CommentRepositoryProtocol
from teamwork.application.ports.issue_repository import IssueRepositoryProtocol
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.application.ports.workspace_repository import WorkspaceRepositoryProtocol
from teamwork.domain.errors import (
    CommentNotFoundError,
    ForbiddenError,
    IssueNotFoundError,
    TaskNotFoundError,
    WorkspaceNotFoundError,
)
from teamwork.domain.models.comment import Comment
from teamwork.domain.models.issue import Issue
from teamwork.domain.models.task import Task
from teamwork.domain.models.workspace import Workspace, WorkspaceRole

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccessContext:
    """Resolved authorization context for one caller and one workspace.

    Attributes:
        account_id: The caller.
        workspace: The workspace at the end of the reference chain.
        role: Caller's role, or None when not a member.
        task: Resolved task, for task/issue/comment chains.
        issue: Resolved issue, for issue chains.
        comment: Resolved comment, for comment chains.
    """

    account_id: UUID
    workspace: Workspace
    role: WorkspaceRole | None
    task: Task | None = None
    issue: Issue | None = None
    comment: Comment | None = None

    @property
    def is_member(self) -> bool:
        return self.role is not None

    @property
    def is_admin_or_owner(self) -> bool:
        return self.role is not None and self.role.is_admin_or_owner()

    @property
    def is_owner(self) -> bool:
        return self.role is WorkspaceRole.OWNER

    def _refuse(self, action: str, required: str) -> ForbiddenError:
        logger.info(
            "access_denied",
            account_id=str(self.account_id),
            workspace_id=str(self.workspace.id),
            role=self.role.value if self.role else None,
            action=action,
            required=required,
        )
        return ForbiddenError(self.account_id, action, required)

    def require_member(self, action: str) -> AccessContext:
        """Raise ForbiddenError unless the caller is a member."""
        if not self.is_member:
            raise self._refuse(action, "member")
        return self

    def require_admin_or_owner(self, action: str) -> AccessContext:
        """Raise ForbiddenError unless the caller is an admin or the owner."""
        if not self.is_admin_or_owner:
            raise self._refuse(action, "admin_or_owner")
        return self

    def require_owner(self, action: str) -> AccessContext:
        """Raise ForbiddenError unless the caller owns the workspace."""
        if not self.is_owner:
            raise self._refuse(action, "owner")
        return self


class AccessGate:
    """Resolves roles and authorization contexts.

    Side effects: none. Every method is a read.
    """

    def __init__(
        self,
        workspaces: WorkspaceRepositoryProtocol,
        memberships: MembershipRepositoryProtocol,
        tasks: TaskRepositoryProtocol,
        issues: IssueRepositoryProtocol,
        comments: CommentRepositoryProtocol,
    ) -> None:
        self._workspaces = workspaces
        self._memberships = memberships
        self._tasks = tasks
        self._issues = issues
        self._comments = comments

    # Pure role queries (never raise for missing rows)

    async def role_of(self, account_id: UUID, workspace_id: UUID) -> WorkspaceRole | None:
        """Role of ``account_id`` in ``workspace_id``, or None if not a member."""
        membership = await self._memberships.get(workspace_id, account_id)
        return membership.role if membership else None

    async def is_member(self, account_id: UUID, workspace_id: UUID) -> bool:
        return await self.role_of(account_id, workspace_id) is not None

    async def is_admin_or_owner(self, account_id: UUID, workspace_id: UUID) -> bool:
        role = await self.role_of(account_id, workspace_id)
        return role is not None and role.is_admin_or_owner()

    async def is_owner(self, account_id: UUID, workspace_id: UUID) -> bool:
        return await self.role_of(account_id, workspace_id) is WorkspaceRole.OWNER

    # Chain resolvers (raise NotFound for missing links)

    async def via_workspace(self, account_id: UUID, workspace_id: UUID) -> AccessContext:
        """Resolve the caller's context in a workspace.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
        """
        workspace = await self._workspaces.get(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        role = await self.role_of(account_id, workspace_id)
        return AccessContext(account_id=account_id, workspace=workspace, role=role)

    async def via_task(self, account_id: UUID, task_id: UUID) -> AccessContext:
        """Resolve Task -> Workspace.

        Raises:
            TaskNotFoundError: Task does not exist.
            WorkspaceNotFoundError: Task references a missing workspace.
        """
        task = await self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        context = await self.via_workspace(account_id, task.workspace_id)
        return AccessContext(
            account_id=account_id,
            workspace=context.workspace,
            role=context.role,
            task=task,
        )

    async def via_issue(self, account_id: UUID, issue_id: UUID) -> AccessContext:
        """Resolve Issue -> Task -> Workspace.

        Raises:
            IssueNotFoundError: Issue does not exist.
            TaskNotFoundError: Issue references a missing task.
            WorkspaceNotFoundError: Task references a missing workspace.
        """
        issue = await self._issues.get(issue_id)
        if issue is None:
            raise IssueNotFoundError(issue_id)
        context = await self.via_task(account_id, issue.task_id)
        return AccessContext(
            account_id=account_id,
            workspace=context.workspace,
            role=context.role,
            task=context.task,
            issue=issue,
        )

    async def via_comment(self, account_id: UUID, comment_id: UUID) -> AccessContext:
        """Resolve Comment -> Task -> Workspace.

        Raises:
            CommentNotFoundError: Comment does not exist.
            TaskNotFoundError: Comment references a missing task.
            WorkspaceNotFoundError: Task references a missing workspace.
        """
        comment = await self._comments.get(comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        context = await self.via_task(account_id, comment.task_id)
        return AccessContext(
            account_id=account_id,
            workspace=context.workspace,
            role=context.role,
            task=context.task,
            comment=comment,
        )
