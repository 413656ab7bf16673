"""Issue lifecycle: problems reported against a task.

Authorization:
    create, change_status, reads -> any workspace member
    update, delete -> the issue owner (reporter) only

Transitions are validated by an injected IssueTransitionPolicy.
The default is permissive (any status to any other); the strict
linear policy rejects skips with InvalidStateTransitionError.

Emitted Events:
    IssueCreated   on create (owner and admins notified)
    IssueResolved  when status moves into resolved and the actor is
                   not the issue owner
"""

from __future__ import annotations

from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import IssueResult
from teamwork.application.ports.issue_repository import IssueRepositoryProtocol
from teamwork.application.services.access_gate import AccessContext, AccessGate
from teamwork.domain.errors import (
    ForbiddenError,
    InvalidStateTransitionError,
    require_text,
)
from teamwork.domain.events import DomainEvent, IssueCreatedEvent, IssueResolvedEvent
from teamwork.domain.models.issue import (
    Issue,
    IssueStatus,
    IssueTransitionPolicy,
    PermissiveIssueTransitionPolicy,
)

logger = get_logger(__name__)


class IssueLifecycleService:
    """Creates issues and moves them through the configured policy.

    Example:
        >>> service = IssueLifecycleService(issues, gate, StrictIssueTransitionPolicy)
        >>> result = await service.create(member_id, task_id, "Broken link")
        >>> await service.change_status(admin_id, result.issue.id, IssueStatus.IN_PROGRESS)
    """

    def __init__(
        self,
        issues: IssueRepositoryProtocol,
        gate: AccessGate,
        policy: IssueTransitionPolicy = PermissiveIssueTransitionPolicy,
    ) -> None:
        self._issues = issues
        self._gate = gate
        self._policy = policy

    @property
    def policy(self) -> IssueTransitionPolicy:
        return self._policy

    async def create(
        self,
        actor_id: UUID,
        task_id: UUID,
        title: str,
        description: str = "",
    ) -> IssueResult:
        """Report an issue on a task. Members only.

        Raises:
            InvalidInputError: Title is blank.
            TaskNotFoundError: Task does not exist.
            ForbiddenError: Actor is not a member.
        """
        title = require_text("title", title)
        context = await self._gate.via_task(actor_id, task_id)
        context.require_member("create issue")
        assert context.task is not None

        issue = Issue(
            id=uuid4(),
            task_id=task_id,
            owner_account_id=actor_id,
            title=title,
            description=description,
            status=IssueStatus.OPEN,
            last_status_changed_by=actor_id,
        )
        await self._issues.save(issue)

        logger.info(
            "issue_created",
            issue_id=str(issue.id),
            task_id=str(task_id),
            actor_id=str(actor_id),
        )
        event = IssueCreatedEvent(
            actor_id=actor_id,
            workspace_id=context.workspace.id,
            workspace_name=context.workspace.name,
            task_id=task_id,
            task_title=context.task.title,
            issue_id=issue.id,
        )
        return IssueResult(issue=issue, events=[event])

    async def change_status(
        self,
        actor_id: UUID,
        issue_id: UUID,
        status: IssueStatus,
    ) -> IssueResult:
        """Move an issue to ``status``. Members only.

        Raises:
            IssueNotFoundError: Issue does not exist.
            ForbiddenError: Actor is not a member.
            InvalidStateTransitionError: The policy rejects the transition.
        """
        context = await self._gate.via_issue(actor_id, issue_id)
        context.require_member("change issue status")
        assert context.issue is not None and context.task is not None
        current = context.issue
        log = logger.bind(
            issue_id=str(issue_id),
            actor_id=str(actor_id),
            from_status=current.status.value,
            to_status=status.value,
            policy=self._policy.name,
        )

        if not self._policy.allows(current.status, status):
            log.warning("issue_transition_rejected")
            raise InvalidStateTransitionError(issue_id, current.status.value, status.value)

        updated = current.with_status(status, actor_id)
        await self._issues.save(updated)
        log.info("issue_status_changed")

        events: list[DomainEvent] = []
        if (
            status is IssueStatus.RESOLVED
            and current.status is not IssueStatus.RESOLVED
            and current.owner_account_id != actor_id
        ):
            events.append(
                IssueResolvedEvent(
                    actor_id=actor_id,
                    workspace_id=context.workspace.id,
                    workspace_name=context.workspace.name,
                    task_id=context.task.id,
                    task_title=context.task.title,
                    issue_id=issue_id,
                    issue_owner_id=current.owner_account_id,
                )
            )
        return IssueResult(issue=updated, events=events)

    def _require_owner(self, context: AccessContext, action: str) -> Issue:
        issue = context.issue
        assert issue is not None
        if issue.owner_account_id != context.account_id:
            logger.info(
                "access_denied",
                account_id=str(context.account_id),
                issue_id=str(issue.id),
                action=action,
                required="issue_owner",
            )
            raise ForbiddenError(context.account_id, action, "issue_owner")
        return issue

    async def update(
        self,
        actor_id: UUID,
        issue_id: UUID,
        title: str | None = None,
        description: str | None = None,
    ) -> Issue:
        """Edit title/description. Issue owner only."""
        context = await self._gate.via_issue(actor_id, issue_id)
        issue = self._require_owner(context, "update issue")
        if title is not None:
            title = require_text("title", title)
        updated = issue.with_details(title, description)
        await self._issues.save(updated)
        logger.info("issue_updated", issue_id=str(issue_id))
        return updated

    async def delete(self, actor_id: UUID, issue_id: UUID) -> None:
        """Delete an issue. Issue owner only."""
        context = await self._gate.via_issue(actor_id, issue_id)
        self._require_owner(context, "delete issue")
        await self._issues.delete(issue_id)
        logger.info("issue_deleted", issue_id=str(issue_id))

    async def get(self, actor_id: UUID, issue_id: UUID) -> Issue:
        context = await self._gate.via_issue(actor_id, issue_id)
        context.require_member("view issue")
        assert context.issue is not None
        return context.issue

    async def list_for_task(self, actor_id: UUID, task_id: UUID) -> list[Issue]:
        context = await self._gate.via_task(actor_id, task_id)
        context.require_member("list issues")
        return await self._issues.list_for_task(task_id)
