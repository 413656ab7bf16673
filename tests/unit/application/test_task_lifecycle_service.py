"""Unit tests for TaskLifecycleService."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from teamwork.domain.errors import (
    AlreadyAssignedError,
    CascadeDeleteError,
    ForbiddenError,
    InvalidInputError,
    NotAssignedError,
    TaskNotFoundError,
)
from teamwork.domain.events import (
    TaskAssignedEvent,
    TaskCompletedEvent,
    TaskStatusChangedEvent,
)
from teamwork.domain.models.task import (
    SubmissionKind,
    TaskPriority,
    TaskStatus,
)


async def _create(crew, **kwargs):
    kwargs.setdefault("title", "Write docs")
    result = await crew.container.task_lifecycle.create(
        crew.owner.id, crew.workspace_id, **kwargs
    )
    return result.task


class TestCreate:
    """Tests for task creation."""

    @pytest.mark.asyncio
    async def test_new_task_defaults(self, crew) -> None:
        task = await _create(crew)
        assert task.status is TaskStatus.TODO
        assert task.priority is TaskPriority.NO_PRIORITY
        assert task.assigned_to == ()
        assert task.created_by == crew.owner.id

    @pytest.mark.asyncio
    async def test_assignees_are_deduplicated_and_notified(self, crew) -> None:
        result = await crew.container.task_lifecycle.create(
            crew.admin.id,
            crew.workspace_id,
            "Plan sprint",
            assigned_to=[crew.member.id, crew.admin.id, crew.member.id],
        )
        assert result.task.assigned_to == (crew.member.id, crew.admin.id)
        assert [type(e) for e in result.events] == [TaskAssignedEvent]
        assert result.events[0].assignee_id == crew.member.id

    @pytest.mark.asyncio
    async def test_member_cannot_create(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.create(
                crew.member.id, crew.workspace_id, "Sneaky"
            )

    @pytest.mark.asyncio
    async def test_non_member_assignee_is_invalid(self, crew) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await _create(crew, assigned_to=[crew.outsider.id])
        assert exc_info.value.field == "assigned_to"

    @pytest.mark.asyncio
    async def test_blank_title_is_invalid(self, crew) -> None:
        with pytest.raises(InvalidInputError):
            await _create(crew, title="  ")


class TestUpdateAndAssign:
    """Tests for update and assign."""

    @pytest.mark.asyncio
    async def test_status_to_done_emits_changed_and_completed(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.member.id])
        result = await crew.container.task_lifecycle.update(
            crew.admin.id, task.id, status=TaskStatus.DONE
        )
        assert [type(e) for e in result.events] == [
            TaskStatusChangedEvent,
            TaskCompletedEvent,
        ]
        assert result.events[0].old_status is TaskStatus.TODO

    @pytest.mark.asyncio
    async def test_only_new_assignees_are_notified(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.member.id])
        result = await crew.container.task_lifecycle.update(
            crew.owner.id, task.id, assigned_to=[crew.member.id, crew.admin.id]
        )
        assert [e.assignee_id for e in result.events] == [crew.admin.id]

    @pytest.mark.asyncio
    async def test_due_date_can_be_cleared(self, crew) -> None:
        due = datetime.now(timezone.utc) + timedelta(days=3)
        task = await _create(crew, due_date=due)
        result = await crew.container.task_lifecycle.update(
            crew.owner.id, task.id, due_date=None
        )
        assert result.task.due_date is None

    @pytest.mark.asyncio
    async def test_member_cannot_update(self, crew) -> None:
        task = await _create(crew)
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.update(
                crew.member.id, task.id, title="Mine"
            )

    @pytest.mark.asyncio
    async def test_assign_twice_conflicts(self, crew) -> None:
        task = await _create(crew)
        lifecycle = crew.container.task_lifecycle
        result = await lifecycle.assign(crew.owner.id, task.id, crew.member.id)
        assert result.task.assigned_to == (crew.member.id,)
        with pytest.raises(AlreadyAssignedError):
            await lifecycle.assign(crew.owner.id, task.id, crew.member.id)

    @pytest.mark.asyncio
    async def test_missing_task(self, crew) -> None:
        with pytest.raises(TaskNotFoundError):
            await crew.container.task_lifecycle.update(crew.owner.id, uuid4(), title="x")


class TestSubmitAndReject:
    """Tests for the submission workflow."""

    @pytest.mark.asyncio
    async def test_member_submits_unassigned_task(self, crew) -> None:
        task = await _create(crew)
        result = await crew.container.task_lifecycle.submit(
            crew.member.id, task.id, "all done", attachments=["report.pdf"]
        )
        assert result.task.status is TaskStatus.DONE
        assert result.task.submission is not None
        assert result.task.submission.kind is SubmissionKind.SUBMISSION
        assert result.task.submission.by_account_id == crew.member.id
        assert result.task.submission.attachments == ("report.pdf",)
        assert [type(e) for e in result.events] == [
            TaskStatusChangedEvent,
            TaskCompletedEvent,
        ]

    @pytest.mark.asyncio
    async def test_member_cannot_submit_someone_elses_task(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.admin.id])
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.submit(crew.member.id, task.id)

    @pytest.mark.asyncio
    async def test_outsider_cannot_submit(self, crew) -> None:
        task = await _create(crew)
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.submit(crew.outsider.id, task.id)

    @pytest.mark.asyncio
    async def test_reject_sends_task_back(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.member.id])
        lifecycle = crew.container.task_lifecycle
        await lifecycle.submit(crew.member.id, task.id, "done")

        result = await lifecycle.reject(crew.admin.id, task.id, "needs tests")

        assert result.task.status is TaskStatus.IN_PROGRESS
        assert result.task.submission is not None
        assert result.task.submission.kind is SubmissionKind.REJECTION
        [event] = result.events
        assert isinstance(event, TaskStatusChangedEvent)
        assert event.old_status is TaskStatus.DONE

    @pytest.mark.asyncio
    async def test_reject_requires_message(self, crew) -> None:
        task = await _create(crew)
        with pytest.raises(InvalidInputError):
            await crew.container.task_lifecycle.reject(crew.owner.id, task.id, "   ")

    @pytest.mark.asyncio
    async def test_resubmitting_done_task_emits_nothing(self, crew) -> None:
        task = await _create(crew)
        lifecycle = crew.container.task_lifecycle
        await lifecycle.submit(crew.owner.id, task.id)
        result = await lifecycle.submit(crew.owner.id, task.id)
        assert result.events == []


class TestDelete:
    """Tests for cascade deletion."""

    @pytest.mark.asyncio
    async def test_delete_removes_children(self, crew) -> None:
        c = crew.container
        task = await _create(crew)
        await c.comment_thread.add_comment(crew.member.id, task.id, "first")
        await c.comment_thread.add_comment(crew.admin.id, task.id, "second")
        await c.issue_lifecycle.create(crew.member.id, task.id, "Broken")

        result = await c.task_lifecycle.delete(crew.admin.id, task.id)

        assert (result.issues_deleted, result.comments_deleted) == (1, 2)
        assert await c.tasks.get(task.id) is None
        assert c.comments.count() == 0
        assert c.issues.count() == 0

    @pytest.mark.asyncio
    async def test_failed_delete_restores_children(self, crew) -> None:
        c = crew.container
        task = await _create(crew)
        await c.comment_thread.add_comment(crew.member.id, task.id, "keep me")
        await c.issue_lifecycle.create(crew.member.id, task.id, "keep me too")
        c.tasks.fail_deletes_with(OSError("disk full"))

        with pytest.raises(CascadeDeleteError):
            await c.task_lifecycle.delete(crew.owner.id, task.id)

        assert await c.tasks.get(task.id) is not None
        assert c.comments.count() == 1
        assert c.issues.count() == 1

    @pytest.mark.asyncio
    async def test_member_cannot_delete(self, crew) -> None:
        task = await _create(crew)
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.delete(crew.member.id, task.id)


class TestReads:
    """Tests for list operations."""

    @pytest.mark.asyncio
    async def test_open_only_hides_done(self, crew) -> None:
        lifecycle = crew.container.task_lifecycle
        done = await _create(crew, title="Done")
        open_task = await _create(crew, title="Open")
        await lifecycle.submit(crew.owner.id, done.id)

        tasks = await lifecycle.list_for_workspace(
            crew.member.id, crew.workspace_id, open_only=True
        )
        assert [t.id for t in tasks] == [open_task.id]

    @pytest.mark.asyncio
    async def test_outsider_cannot_list(self, crew) -> None:
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.list_for_workspace(
                crew.outsider.id, crew.workspace_id
            )

    @pytest.mark.asyncio
    async def test_list_assigned_filters(self, crew) -> None:
        now = datetime.now(timezone.utc)
        urgent = await _create(
            crew,
            title="Urgent",
            priority=TaskPriority.URGENT,
            assigned_to=[crew.member.id],
            due_date=now + timedelta(days=1),
        )
        await _create(
            crew,
            title="Later",
            priority=TaskPriority.LOW,
            assigned_to=[crew.member.id],
            due_date=now + timedelta(days=30),
        )
        await _create(crew, title="Not mine", assigned_to=[crew.admin.id])
        lifecycle = crew.container.task_lifecycle

        assert len(await lifecycle.list_assigned(crew.member.id)) == 2
        by_priority = await lifecycle.list_assigned(
            crew.member.id, priorities=[TaskPriority.URGENT]
        )
        assert [t.id for t in by_priority] == [urgent.id]
        due_soon = await lifecycle.list_assigned(
            crew.member.id, due_before=now + timedelta(days=7)
        )
        assert [t.id for t in due_soon] == [urgent.id]
        assert await lifecycle.list_assigned(
            crew.member.id, statuses=[TaskStatus.DONE]
        ) == []


class TestUnassign:
    """Tests for unassign."""

    @pytest.mark.asyncio
    async def test_admin_removes_one_assignee(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.member.id, crew.admin.id])

        result = await crew.container.task_lifecycle.unassign(
            crew.admin.id, task.id, crew.member.id
        )

        assert result.task.assigned_to == (crew.admin.id,)
        assert result.events == []
        stored = await crew.container.tasks.get(task.id)
        assert stored.assigned_to == (crew.admin.id,)

    @pytest.mark.asyncio
    async def test_unassigning_a_non_assignee_conflicts(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.admin.id])
        with pytest.raises(NotAssignedError) as exc_info:
            await crew.container.task_lifecycle.unassign(
                crew.owner.id, task.id, crew.member.id
            )
        assert exc_info.value.account_id == crew.member.id

    @pytest.mark.asyncio
    async def test_member_cannot_unassign(self, crew) -> None:
        task = await _create(crew, assigned_to=[crew.member.id])
        with pytest.raises(ForbiddenError):
            await crew.container.task_lifecycle.unassign(
                crew.member.id, task.id, crew.member.id
            )


@pytest.fixture
def yielding_task_reads(crew, monkeypatch):
    """Make every task read suspend once so concurrent writers interleave."""
    tasks = crew.container.tasks
    read = tasks.get

    async def get(task_id):
        await asyncio.sleep(0)
        return await read(task_id)

    monkeypatch.setattr(tasks, "get", get)
    return crew


class TestConcurrentWrites:
    """Writers on one workspace never save over each other's changes."""

    @pytest.mark.asyncio
    async def test_concurrent_assigns_keep_both_assignees(self, yielding_task_reads) -> None:
        crew = yielding_task_reads
        lifecycle = crew.container.task_lifecycle
        task = await _create(crew)

        first, second = await asyncio.gather(
            lifecycle.assign(crew.owner.id, task.id, crew.admin.id),
            lifecycle.assign(crew.owner.id, task.id, crew.member.id),
        )

        stored = await crew.container.tasks.get(task.id)
        assert set(stored.assigned_to) == {crew.admin.id, crew.member.id}
        notified = {e.assignee_id for e in [*first.events, *second.events]}
        assert notified == set(stored.assigned_to)

    @pytest.mark.asyncio
    async def test_update_does_not_restore_a_removed_member(
        self, yielding_task_reads
    ) -> None:
        crew = yielding_task_reads
        c = crew.container
        task = await _create(crew, assigned_to=[crew.member.id, crew.admin.id])

        updated, removal = await asyncio.gather(
            c.task_lifecycle.update(crew.owner.id, task.id, title="Rewrite docs"),
            c.ledger.remove_member(crew.owner.id, crew.workspace_id, crew.member.id),
        )

        assert removal.pruned_task_ids == [task.id]
        stored = await c.tasks.get(task.id)
        assert stored.title == "Rewrite docs"
        assert stored.assigned_to == (crew.admin.id,)
        assert updated.task == stored

    @pytest.mark.asyncio
    async def test_update_keeps_a_concurrent_submission(self, yielding_task_reads) -> None:
        crew = yielding_task_reads
        lifecycle = crew.container.task_lifecycle
        task = await _create(crew, assigned_to=[crew.member.id])

        await asyncio.gather(
            lifecycle.submit(crew.member.id, task.id, "done"),
            lifecycle.update(crew.owner.id, task.id, title="Docs v2"),
        )

        stored = await crew.container.tasks.get(task.id)
        assert stored.title == "Docs v2"
        assert stored.status is TaskStatus.DONE
        assert stored.submission is not None
        assert stored.submission.by_account_id == crew.member.id
