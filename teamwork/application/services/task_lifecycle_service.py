"""Task lifecycle: creation, updates, submission workflow and deletion.

State Machine:
    todo -> in-progress -> {done, cancelled}

    ``update`` lets an admin/owner overwrite status directly. ``submit``
    and ``reject`` are the only operations that change status *and*
    record a submission record.

Authorization:
    create, update, assign, unassign, delete -> admin or owner
    submit, reject -> admin/owner, OR any member when the task is
                      unassigned, OR an assignee
    reads -> any member

Emitted Events:
    TaskAssigned       one per newly added assignee, never for the actor
    TaskStatusChanged  whenever status actually changes
    TaskCompleted      when status moves into done from another status
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import TaskDeletionResult, TaskResult
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.application.services.access_gate import AccessContext, AccessGate
from teamwork.application.services.task_cascade import TaskCascade
from teamwork.application.services.workspace_locks import WorkspaceLocks
from teamwork.domain.errors import (
    AlreadyAssignedError,
    CascadeDeleteError,
    ForbiddenError,
    InvalidInputError,
    NotAssignedError,
    TaskNotFoundError,
    require_text,
)
from teamwork.domain.events import (
    DomainEvent,
    TaskAssignedEvent,
    TaskCompletedEvent,
    TaskStatusChangedEvent,
)
from teamwork.domain.models.task import (
    SubmissionKind,
    SubmissionRecord,
    Task,
    TaskPriority,
    TaskStatus,
    ordered_unique,
)
from teamwork.domain.primitives import AtomicOperationContext

logger = get_logger(__name__)

# Sentinel for "field not provided" in update(); None is a valid due_date.
_UNSET: object = object()


class TaskLifecycleService:
    """Owns task state transitions, assignment and submission records.

    Example:
        >>> service = TaskLifecycleService(
        ...     tasks=tasks, memberships=memberships, gate=gate, cascade=cascade
        ... )
        >>> result = await service.create(owner_id, workspace_id, "Write docs")
        >>> result = await service.submit(member_id, result.task.id, "done")
        >>> [type(e).__name__ for e in result.events]
        ['TaskStatusChangedEvent', 'TaskCompletedEvent']
    """

    def __init__(
        self,
        tasks: TaskRepositoryProtocol,
        memberships: MembershipRepositoryProtocol,
        gate: AccessGate,
        cascade: TaskCascade,
        locks: WorkspaceLocks | None = None,
    ) -> None:
        """Initialize the task lifecycle service.

        Args:
            tasks: Task persistence.
            memberships: Membership lookup for assignee validation.
            gate: Access gate used to authorize every operation.
            cascade: Cascade used by delete.
            locks: Per-workspace locks shared with the membership ledger.
        """
        self._tasks = tasks
        self._memberships = memberships
        self._gate = gate
        self._cascade = cascade
        self._locks = locks or WorkspaceLocks()

    # Helpers

    async def _validate_assignees(
        self, workspace_id: UUID, assignees: Iterable[UUID]
    ) -> tuple[UUID, ...]:
        """Return assignees as an ordered set, all of them workspace members.

        Raises:
            InvalidInputError: An assignee is not a member.
        """
        normalized = ordered_unique(assignees)
        for account_id in normalized:
            if await self._memberships.get(workspace_id, account_id) is None:
                raise InvalidInputError(
                    "assigned_to",
                    f"Account {account_id} is not a member of workspace {workspace_id}",
                )
        return normalized

    @staticmethod
    def _assigned_events(
        context: AccessContext,
        task: Task,
        added: Iterable[UUID],
    ) -> list[DomainEvent]:
        return [
            TaskAssignedEvent(
                actor_id=context.account_id,
                workspace_id=context.workspace.id,
                workspace_name=context.workspace.name,
                task_id=task.id,
                task_title=task.title,
                assignee_id=assignee,
            )
            for assignee in added
            if assignee != context.account_id
        ]

    @staticmethod
    def _status_events(
        context: AccessContext,
        task: Task,
        old_status: TaskStatus,
    ) -> list[DomainEvent]:
        if task.status is old_status:
            return []
        events: list[DomainEvent] = [
            TaskStatusChangedEvent(
                actor_id=context.account_id,
                workspace_id=context.workspace.id,
                workspace_name=context.workspace.name,
                task_id=task.id,
                task_title=task.title,
                old_status=old_status,
                new_status=task.status,
                assignees=task.assigned_to,
            )
        ]
        if task.status is TaskStatus.DONE:
            events.append(
                TaskCompletedEvent(
                    actor_id=context.account_id,
                    workspace_id=context.workspace.id,
                    workspace_name=context.workspace.name,
                    task_id=task.id,
                    task_title=task.title,
                    assignees=task.assigned_to,
                )
            )
        return events

    async def _task_context(self, actor_id: UUID, task_id: UUID) -> tuple[AccessContext, Task]:
        context = await self._gate.via_task(actor_id, task_id)
        assert context.task is not None
        return context, context.task

    async def _locked_task(self, task_id: UUID) -> Task:
        """Re-read a task; call only while holding its workspace lock."""
        task = await self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    # Mutations

    async def create(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        title: str,
        description: str = "",
        priority: TaskPriority = TaskPriority.NO_PRIORITY,
        assigned_to: Sequence[UUID] = (),
        tags: Sequence[str] = (),
        due_date: datetime | None = None,
    ) -> TaskResult:
        """Create a task in status todo. Admin or owner only.

        Args:
            actor_id: The caller.
            workspace_id: Workspace the task belongs to.
            title: Required title.
            description: Optional description.
            priority: Defaults to NO_PRIORITY.
            assigned_to: Initial assignees; must all be members.
            tags: Free-form labels.
            due_date: Optional deadline.

        Returns:
            TaskResult with one TaskAssigned event per assignee other than the actor.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            InvalidInputError: Blank title or non-member assignee.
        """
        log = logger.bind(actor_id=str(actor_id), workspace_id=str(workspace_id))
        title = require_text("title", title)

        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_admin_or_owner("create task")

        async with self._locks.for_workspace(workspace_id):
            assignees = await self._validate_assignees(workspace_id, assigned_to)
            task = Task(
                id=uuid4(),
                workspace_id=workspace_id,
                title=title,
                description=description,
                status=TaskStatus.TODO,
                priority=priority,
                assigned_to=assignees,
                tags=tuple(tags),
                due_date=due_date,
                created_by=actor_id,
            )
            await self._tasks.save(task)

        log.info("task_created", task_id=str(task.id), assignee_count=len(assignees))
        return TaskResult(task=task, events=self._assigned_events(context, task, assignees))

    async def update(
        self,
        actor_id: UUID,
        task_id: UUID,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        assigned_to: Sequence[UUID] | None = None,
        tags: Sequence[str] | None = None,
        due_date: datetime | None | object = _UNSET,
    ) -> TaskResult:
        """Replace the provided fields of a task. Admin or owner only.

        Fields left as None (or unset, for ``due_date``) are untouched.
        ``due_date=None`` clears the deadline. Changes apply to the task
        as stored once the workspace lock is held, so a concurrent
        member removal or assignment is never overwritten.

        Raises:
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            InvalidInputError: Blank title or non-member assignee.
        """
        context, located = await self._task_context(actor_id, task_id)
        context.require_admin_or_owner("update task")

        changes: dict[str, object] = {}
        if title is not None:
            changes["title"] = require_text("title", title)
        if description is not None:
            changes["description"] = description
        if status is not None:
            changes["status"] = status
        if priority is not None:
            changes["priority"] = priority
        if tags is not None:
            changes["tags"] = tuple(tags)
        if due_date is not _UNSET:
            changes["due_date"] = due_date

        async with self._locks.for_workspace(located.workspace_id):
            current = await self._locked_task(task_id)
            added: tuple[UUID, ...] = ()
            if assigned_to is not None:
                assignees = await self._validate_assignees(current.workspace_id, assigned_to)
                changes["assigned_to"] = assignees
                added = tuple(a for a in assignees if a not in current.assigned_to)
            updated = current.with_changes(**changes) if changes else current
            if changes:
                await self._tasks.save(updated)

        events = self._assigned_events(context, updated, added)
        events += self._status_events(context, updated, current.status)
        logger.info(
            "task_updated",
            task_id=str(task_id),
            actor_id=str(actor_id),
            fields=sorted(changes),
            event_count=len(events),
        )
        return TaskResult(task=updated, events=events)

    async def assign(self, actor_id: UUID, task_id: UUID, account_id: UUID) -> TaskResult:
        """Add one assignee. Admin or owner only.

        Raises:
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            AlreadyAssignedError: Account is already an assignee.
            InvalidInputError: Account is not a member.
        """
        context, located = await self._task_context(actor_id, task_id)
        context.require_admin_or_owner("assign task")

        async with self._locks.for_workspace(located.workspace_id):
            current = await self._locked_task(task_id)
            if current.is_assigned_to(account_id):
                raise AlreadyAssignedError(task_id, account_id)
            await self._validate_assignees(current.workspace_id, [account_id])
            updated = current.with_changes(assigned_to=(*current.assigned_to, account_id))
            await self._tasks.save(updated)

        logger.info("task_assigned", task_id=str(task_id), account_id=str(account_id))
        return TaskResult(
            task=updated, events=self._assigned_events(context, updated, [account_id])
        )

    async def unassign(self, actor_id: UUID, task_id: UUID, account_id: UUID) -> TaskResult:
        """Remove one assignee. Admin or owner only; emits nothing.

        Raises:
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            NotAssignedError: Account is not an assignee.
        """
        context, located = await self._task_context(actor_id, task_id)
        context.require_admin_or_owner("unassign task")

        async with self._locks.for_workspace(located.workspace_id):
            current = await self._locked_task(task_id)
            if not current.is_assigned_to(account_id):
                raise NotAssignedError(task_id, account_id)
            updated = current.without_assignee(account_id)
            await self._tasks.save(updated)

        logger.info("task_unassigned", task_id=str(task_id), account_id=str(account_id))
        return TaskResult(task=updated, events=[])

    def _may_work_on(self, context: AccessContext, task: Task) -> bool:
        if context.is_admin_or_owner:
            return True
        if task.is_unassigned and context.is_member:
            return True
        return task.is_assigned_to(context.account_id)

    async def _record(
        self,
        actor_id: UUID,
        task_id: UUID,
        kind: SubmissionKind,
        message: str,
        attachments: Sequence[str],
    ) -> TaskResult:
        context, located = await self._task_context(actor_id, task_id)
        action = "submit task" if kind is SubmissionKind.SUBMISSION else "reject task"
        log = logger.bind(task_id=str(task_id), actor_id=str(actor_id), kind=kind.value)

        new_status = (
            TaskStatus.DONE if kind is SubmissionKind.SUBMISSION else TaskStatus.IN_PROGRESS
        )
        record = SubmissionRecord(
            by_account_id=actor_id,
            kind=kind,
            message=message,
            attachments=tuple(attachments),
        )

        async with self._locks.for_workspace(located.workspace_id):
            current = await self._locked_task(task_id)
            if not self._may_work_on(context, current):
                log.warning("task_submission_refused")
                raise ForbiddenError(actor_id, action, "admin_or_owner_or_assignee")
            updated = current.with_submission(new_status, record)
            await self._tasks.save(updated)

        log.info(
            "task_submission_recorded",
            old_status=current.status.value,
            new_status=new_status.value,
        )
        return TaskResult(
            task=updated, events=self._status_events(context, updated, current.status)
        )

    async def submit(
        self,
        actor_id: UUID,
        task_id: UUID,
        message: str = "",
        attachments: Sequence[str] = (),
    ) -> TaskResult:
        """Mark a task done and record who submitted it.

        Raises:
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is neither admin/owner, nor an assignee,
                nor a member picking up an unassigned task.
        """
        return await self._record(
            actor_id, task_id, SubmissionKind.SUBMISSION, message, attachments
        )

    async def reject(
        self,
        actor_id: UUID,
        task_id: UUID,
        message: str,
        attachments: Sequence[str] = (),
    ) -> TaskResult:
        """Send a task back to in-progress with a rejection record.

        Raises:
            InvalidInputError: Message is blank.
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Same rule as submit.
        """
        message = require_text("message", message)
        return await self._record(
            actor_id, task_id, SubmissionKind.REJECTION, message, attachments
        )

    async def delete(self, actor_id: UUID, task_id: UUID) -> TaskDeletionResult:
        """Delete a task with its issues and comments. Admin or owner only.

        All-or-nothing: if any step fails the deleted children are
        restored and a single CascadeDeleteError is raised.

        Raises:
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            CascadeDeleteError: A step failed and was rolled back.
        """
        context, located = await self._task_context(actor_id, task_id)
        context.require_admin_or_owner("delete task")
        log = logger.bind(task_id=str(task_id), actor_id=str(actor_id))

        async with self._locks.for_workspace(located.workspace_id):
            task = await self._locked_task(task_id)
            try:
                async with AtomicOperationContext("task_cascade_delete") as ctx:
                    summary = await self._cascade.delete(task, ctx)
            except Exception as exc:
                log.error("task_delete_failed", error=str(exc), error_type=type(exc).__name__)
                raise CascadeDeleteError(task_id, str(exc)) from exc

        log.info(
            "task_deleted",
            issues_deleted=summary.issues_deleted,
            comments_deleted=summary.comments_deleted,
        )
        return TaskDeletionResult(
            task_id=task_id,
            issues_deleted=summary.issues_deleted,
            comments_deleted=summary.comments_deleted,
        )

    # Reads

    async def get(self, actor_id: UUID, task_id: UUID) -> Task:
        """Get a task. Members only."""
        context, task = await self._task_context(actor_id, task_id)
        context.require_member("view task")
        return task

    async def list_for_workspace(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        open_only: bool = False,
    ) -> list[Task]:
        """List a workspace's tasks; ``open_only`` drops done tasks. Members only."""
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_member("list tasks")
        tasks = await self._tasks.list_for_workspace(workspace_id)
        if open_only:
            tasks = [t for t in tasks if t.status is not TaskStatus.DONE]
        return tasks

    async def list_assigned(
        self,
        actor_id: UUID,
        statuses: Sequence[TaskStatus] | None = None,
        priorities: Sequence[TaskPriority] | None = None,
        due_after: datetime | None = None,
        due_before: datetime | None = None,
    ) -> list[Task]:
        """Tasks assigned to the actor, optionally filtered."""
        tasks = await self._tasks.list_for_assignee(actor_id)
        if statuses:
            tasks = [t for t in tasks if t.status in statuses]
        if priorities:
            tasks = [t for t in tasks if t.priority in priorities]
        if due_after is not None:
            tasks = [t for t in tasks if t.due_date is not None and t.due_date >= due_after]
        if due_before is not None:
            tasks = [t for t in tasks if t.due_date is not None and t.due_date <= due_before]
        return tasks
