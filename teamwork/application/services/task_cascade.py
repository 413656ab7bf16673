"""All-or-nothing deletion of a task and its children.

Order: issues, then comments, then the task row. The workspace's task
list is derived from task rows, so removing the row is what removes
the reference. Each step registers a compensating re-save on the
caller's AtomicOperationContext; a failure anywhere restores every
child already deleted.
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from teamwork.application.ports.comment_repository import CommentRepositoryProtocol
from teamwork.application.ports.issue_repository import IssueRepositoryProtocol
from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.domain.models.comment import Comment
from teamwork.domain.models.issue import Issue
from teamwork.domain.models.task import Task
from teamwork.domain.primitives import AtomicOperationContext, RollbackHandler

logger = get_logger(__name__)


@dataclass(frozen=True)
class CascadeSummary:
    """What a cascade removed."""

    task: Task
    issues_deleted: int
    comments_deleted: int


class TaskCascade:
    """Deletes a task with its issues and comments inside an atomic context."""

    def __init__(
        self,
        tasks: TaskRepositoryProtocol,
        issues: IssueRepositoryProtocol,
        comments: CommentRepositoryProtocol,
    ) -> None:
        self._tasks = tasks
        self._issues = issues
        self._comments = comments

    async def delete(self, task: Task, ctx: AtomicOperationContext) -> CascadeSummary:
        """Delete ``task`` and its children, registering compensations on ``ctx``.

        Args:
            task: The task to remove.
            ctx: Open atomic context owned by the caller.

        Returns:
            CascadeSummary with counts of removed children.
        """
        issues = await self._issues.list_for_task(task.id)
        for issue in issues:
            await self._issues.delete(issue.id)
            ctx.add_rollback(self._restore_issue(issue))

        comments = await self._comments.list_for_task(task.id)
        for comment in comments:
            await self._comments.delete(comment.id)
            ctx.add_rollback(self._restore_comment(comment))

        await self._tasks.delete(task.id)
        ctx.add_rollback(self._restore_task(task))

        logger.debug(
            "task_cascade_deleted",
            task_id=str(task.id),
            issues_deleted=len(issues),
            comments_deleted=len(comments),
        )
        return CascadeSummary(
            task=task,
            issues_deleted=len(issues),
            comments_deleted=len(comments),
        )

    def _restore_issue(self, issue: Issue) -> RollbackHandler:
        return lambda: self._issues.save(issue)

    def _restore_comment(self, comment: Comment) -> RollbackHandler:
        return lambda: self._comments.save(comment)

    def _restore_task(self, task: Task) -> RollbackHandler:
        return lambda: self._tasks.save(task)
