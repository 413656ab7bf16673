"""Unit tests for CommentThreadService."""

import pytest

from teamwork.domain.errors import (
    CommentNotFoundError,
    ForbiddenError,
    InvalidInputError,
)
from teamwork.domain.events import CommentAddedEvent


@pytest.fixture
async def task(crew):
    result = await crew.container.task_lifecycle.create(
        crew.owner.id, crew.workspace_id, "Review copy", assigned_to=[crew.admin.id]
    )
    return result.task


class TestCommentThread:
    @pytest.mark.asyncio
    async def test_add_carries_assignees(self, crew, task) -> None:
        result = await crew.container.comment_thread.add_comment(
            crew.member.id, task.id, "Looks good", attachments=["shot.png"]
        )
        assert result.comment.attachments == ("shot.png",)
        [event] = result.events
        assert isinstance(event, CommentAddedEvent)
        assert event.assignees == (crew.admin.id,)

    @pytest.mark.asyncio
    async def test_comments_listed_in_creation_order(self, crew, task) -> None:
        thread = crew.container.comment_thread
        await thread.add_comment(crew.member.id, task.id, "first")
        await thread.add_comment(crew.admin.id, task.id, "second")
        comments = await thread.list_comments(crew.owner.id, task.id)
        assert [c.content for c in comments] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_outsider_cannot_comment(self, crew, task) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.comment_thread.add_comment(crew.outsider.id, task.id, "hi")

    @pytest.mark.asyncio
    async def test_blank_comment_is_invalid(self, crew, task) -> None:
        with pytest.raises(InvalidInputError):
            await crew.container.comment_thread.add_comment(crew.member.id, task.id, "")

    @pytest.mark.asyncio
    async def test_only_author_edits_or_deletes(self, crew, task) -> None:
        thread = crew.container.comment_thread
        comment = (await thread.add_comment(crew.member.id, task.id, "typo")).comment

        with pytest.raises(ForbiddenError):
            await thread.update_comment(crew.owner.id, comment.id, "fixed")
        with pytest.raises(ForbiddenError):
            await thread.delete_comment(crew.owner.id, comment.id)

        updated = await thread.update_comment(crew.member.id, comment.id, "fixed")
        assert updated.content == "fixed"
        await thread.delete_comment(crew.member.id, comment.id)
        with pytest.raises(CommentNotFoundError):
            await thread.update_comment(crew.member.id, comment.id, "again")
