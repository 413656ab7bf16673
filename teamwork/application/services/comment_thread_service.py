"""Comment thread on a task.

Authorization:
    add, list -> any workspace member
    edit, delete -> the comment author only

Emitted Events:
    CommentAdded on add (task assignees and workspace owner are notified)
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import CommentResult
from teamwork.application.ports.comment_repository import CommentRepositoryProtocol
from teamwork.application.services.access_gate import AccessContext, AccessGate
from teamwork.domain.errors import ForbiddenError, require_text
from teamwork.domain.events import CommentAddedEvent
from teamwork.domain.models.comment import Comment

logger = get_logger(__name__)


class CommentThreadService:
    """Adds, edits and removes comments on tasks."""

    def __init__(self, comments: CommentRepositoryProtocol, gate: AccessGate) -> None:
        self._comments = comments
        self._gate = gate

    async def add_comment(
        self,
        actor_id: UUID,
        task_id: UUID,
        content: str,
        attachments: Sequence[str] = (),
    ) -> CommentResult:
        """Add a comment to a task. Members only.

        Raises:
            InvalidInputError: Content is blank.
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not a member.
        """
        content = require_text("content", content)
        context = await self._gate.via_task(actor_id, task_id)
        context.require_member("add comment")
        assert context.task is not None

        comment = Comment(
            id=uuid4(),
            task_id=task_id,
            author_account_id=actor_id,
            content=content,
            attachments=tuple(attachments),
        )
        await self._comments.save(comment)

        logger.info(
            "comment_added",
            comment_id=str(comment.id),
            task_id=str(task_id),
            actor_id=str(actor_id),
        )
        event = CommentAddedEvent(
            actor_id=actor_id,
            workspace_id=context.workspace.id,
            workspace_name=context.workspace.name,
            task_id=task_id,
            task_title=context.task.title,
            comment_id=comment.id,
            assignees=context.task.assigned_to,
        )
        return CommentResult(comment=comment, events=[event])

    async def list_comments(self, actor_id: UUID, task_id: UUID) -> list[Comment]:
        """List a task's comments in creation order. Members only."""
        context = await self._gate.via_task(actor_id, task_id)
        context.require_member("list comments")
        return await self._comments.list_for_task(task_id)

    def _require_author(self, context: AccessContext, action: str) -> Comment:
        comment = context.comment
        assert comment is not None
        if comment.author_account_id != context.account_id:
            logger.info(
                "access_denied",
                account_id=str(context.account_id),
                comment_id=str(comment.id),
                action=action,
                required="author",
            )
            raise ForbiddenError(context.account_id, action, "author")
        return comment

    async def update_comment(self, actor_id: UUID, comment_id: UUID, content: str) -> Comment:
        """Edit a comment's content. Author only.

        Raises:
            InvalidInputError: Content is blank.
            CommentNotFoundError: Comment does not exist.
            ForbiddenError: Actor is not the author.
        """
        content = require_text("content", content)
        context = await self._gate.via_comment(actor_id, comment_id)
        comment = self._require_author(context, "edit comment")
        updated = comment.with_content(content)
        await self._comments.save(updated)
        logger.info("comment_updated", comment_id=str(comment_id))
        return updated

    async def delete_comment(self, actor_id: UUID, comment_id: UUID) -> None:
        """Delete a comment. Author only."""
        context = await self._gate.via_comment(actor_id, comment_id)
        self._require_author(context, "delete comment")
        await self._comments.delete(comment_id)
        logger.info("comment_deleted", comment_id=str(comment_id))
