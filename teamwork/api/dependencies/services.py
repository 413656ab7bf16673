"""Service dependencies for the TeamWork API.

Every getter resolves from the process-wide ServiceContainer, so tests
swap the whole object graph with ``set_container``.
"""

from teamwork.application.services import (
    CommentThreadService,
    InvitationService,
    IssueLifecycleService,
    MailboxService,
    MembershipLedgerService,
    NotificationFanOutService,
    NotificationInboxService,
    TaskLifecycleService,
)
from teamwork.bootstrap.services import get_container


def get_ledger() -> MembershipLedgerService:
    return get_container().ledger


def get_task_lifecycle() -> TaskLifecycleService:
    return get_container().task_lifecycle


def get_issue_lifecycle() -> IssueLifecycleService:
    return get_container().issue_lifecycle


def get_comment_thread() -> CommentThreadService:
    return get_container().comment_thread


def get_invitations() -> InvitationService:
    return get_container().invitations


def get_mailbox() -> MailboxService:
    return get_container().mailbox


def get_inbox() -> NotificationInboxService:
    return get_container().inbox


def get_fan_out() -> NotificationFanOutService:
    return get_container().fan_out
