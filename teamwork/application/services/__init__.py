"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with repository ports.

Available services:
- AccessGate: Role lookups and reference-chain authorization
- MembershipLedgerService: Workspaces, memberships and the owner invariant
- TaskLifecycleService: Task state machine, assignment and submissions
- TaskCascade: All-or-nothing deletion of a task with its children
- IssueLifecycleService: Issues under an injectable transition policy
- CommentThreadService: Comments on tasks
- InvitationService: Invite / accept / decline workflow
- MailboxService: Custom in-app mail
- NotificationFanOutService: Events to per-recipient notifications
- NotificationInboxService: A recipient's notification inbox
- DeadlineSweepService: Reminders for tasks due soon
"""

from teamwork.application.services.access_gate import AccessContext, AccessGate
from teamwork.application.services.comment_thread_service import CommentThreadService
from teamwork.application.services.deadline_sweep_service import DeadlineSweepService
from teamwork.application.services.invitation_service import InvitationService
from teamwork.application.services.issue_lifecycle_service import (
    IssueLifecycleService,
)
from teamwork.application.services.mailbox_service import MailboxService
from teamwork.application.services.membership_ledger_service import (
    MembershipLedgerService,
)
from teamwork.application.services.notification_fan_out_service import (
    NotificationFanOutService,
)
from teamwork.application.services.notification_inbox_service import (
    NotificationInboxService,
)
from teamwork.application.services.task_cascade import CascadeSummary, TaskCascade
from teamwork.application.services.task_lifecycle_service import TaskLifecycleService
from teamwork.application.services.workspace_locks import WorkspaceLocks

__all__: list[str] = [
    "AccessContext",
    "AccessGate",
    "CascadeSummary",
    "CommentThreadService",
    "DeadlineSweepService",
    "InvitationService",
    "IssueLifecycleService",
    "MailboxService",
    "MembershipLedgerService",
    "NotificationFanOutService",
    "NotificationInboxService",
    "TaskCascade",
    "TaskLifecycleService",
    "WorkspaceLocks",
]
