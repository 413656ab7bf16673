"""Bootstrap wiring for TeamWork services.

Builds every application service over one shared set of repositories.
The default wiring uses the in-memory stubs; tests replace the whole
container with ``set_container`` or start fresh with ``reset_container``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from teamwork.application.services import (
    AccessGate,
    CommentThreadService,
    DeadlineSweepService,
    InvitationService,
    IssueLifecycleService,
    MailboxService,
    MembershipLedgerService,
    NotificationFanOutService,
    NotificationInboxService,
    TaskCascade,
    TaskLifecycleService,
    WorkspaceLocks,
)
from teamwork.config import TeamworkConfig
from teamwork.domain.models.issue import ISSUE_POLICIES
from teamwork.infrastructure.monitoring import MetricsCollector
from teamwork.infrastructure.stubs import (
    AccountRepositoryStub,
    CommentRepositoryStub,
    IssueRepositoryStub,
    MailDispatcherStub,
    MailRepositoryStub,
    MembershipRepositoryStub,
    NotificationRepositoryStub,
    TaskRepositoryStub,
    WorkspaceRepositoryStub,
)


@dataclass
class ServiceContainer:
    """Repositories and services sharing one wiring."""

    config: TeamworkConfig
    metrics: MetricsCollector
    accounts: AccountRepositoryStub
    workspaces: WorkspaceRepositoryStub
    memberships: MembershipRepositoryStub
    tasks: TaskRepositoryStub
    issues: IssueRepositoryStub
    comments: CommentRepositoryStub
    mails: MailRepositoryStub
    notifications: NotificationRepositoryStub
    dispatcher: MailDispatcherStub
    gate: AccessGate
    ledger: MembershipLedgerService
    task_lifecycle: TaskLifecycleService
    issue_lifecycle: IssueLifecycleService
    comment_thread: CommentThreadService
    invitations: InvitationService
    mailbox: MailboxService
    fan_out: NotificationFanOutService
    inbox: NotificationInboxService
    deadline_sweep: DeadlineSweepService


def build_container(
    config: TeamworkConfig | None = None,
    metrics: MetricsCollector | None = None,
) -> ServiceContainer:
    """Wire every service over fresh in-memory stubs.

    Args:
        config: Runtime configuration; read from the environment when omitted.
        metrics: Collector for every series; one labelled from ``config`` when omitted.
    """
    config = config or TeamworkConfig.from_environment()
    metrics = metrics or MetricsCollector(
        service=config.service_name, environment=config.environment
    )

    accounts = AccountRepositoryStub()
    workspaces = WorkspaceRepositoryStub()
    memberships = MembershipRepositoryStub()
    tasks = TaskRepositoryStub()
    issues = IssueRepositoryStub()
    comments = CommentRepositoryStub()
    mails = MailRepositoryStub()
    notifications = NotificationRepositoryStub()
    dispatcher = MailDispatcherStub()

    locks = WorkspaceLocks()
    gate = AccessGate(workspaces, memberships, tasks, issues, comments)
    cascade = TaskCascade(tasks, issues, comments)
    ledger = MembershipLedgerService(
        workspaces=workspaces,
        memberships=memberships,
        accounts=accounts,
        tasks=tasks,
        gate=gate,
        cascade=cascade,
        locks=locks,
    )

    return ServiceContainer(
        config=config,
        metrics=metrics,
        accounts=accounts,
        workspaces=workspaces,
        memberships=memberships,
        tasks=tasks,
        issues=issues,
        comments=comments,
        mails=mails,
        notifications=notifications,
        dispatcher=dispatcher,
        gate=gate,
        ledger=ledger,
        task_lifecycle=TaskLifecycleService(
            tasks=tasks,
            memberships=memberships,
            gate=gate,
            cascade=cascade,
            locks=locks,
        ),
        issue_lifecycle=IssueLifecycleService(
            issues=issues,
            gate=gate,
            policy=ISSUE_POLICIES[config.issue_policy],
        ),
        comment_thread=CommentThreadService(comments=comments, gate=gate),
        invitations=InvitationService(
            mails=mails,
            accounts=accounts,
            memberships=memberships,
            ledger=ledger,
            gate=gate,
            dispatcher=dispatcher,
            locks=locks,
        ),
        mailbox=MailboxService(
            mails=mails, accounts=accounts, gate=gate, dispatcher=dispatcher
        ),
        fan_out=NotificationFanOutService(
            notifications=notifications,
            memberships=memberships,
            metrics=metrics,
        ),
        inbox=NotificationInboxService(
            notifications=notifications,
            page_size=config.notification_page_size,
        ),
        deadline_sweep=DeadlineSweepService(
            tasks=tasks,
            workspaces=workspaces,
            window=timedelta(hours=config.deadline_window_hours),
        ),
    )


_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the process-wide service container."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Set custom container (testing/override)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset container singleton (testing cleanup)."""
    global _container
    _container = None
