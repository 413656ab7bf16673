"""Domain models for TeamWork."""

from teamwork.domain.models.account import Account, AccountSettings, normalize_email
from teamwork.domain.models.comment import Comment
from teamwork.domain.models.issue import (
    ISSUE_POLICIES,
    Issue,
    IssueStatus,
    IssueTransitionPolicy,
    PermissiveIssueTransitionPolicy,
    StrictIssueTransitionPolicy,
    TableIssueTransitionPolicy,
)
from teamwork.domain.models.mail import (
    INVITE_BODY_TEMPLATE,
    INVITE_SUBJECT_TEMPLATE,
    InvitationMessage,
    InvitationStatus,
    Mail,
    MailType,
)
from teamwork.domain.models.notification import (
    Notification,
    NotificationReferences,
    NotificationType,
)
from teamwork.domain.models.task import (
    SubmissionKind,
    SubmissionRecord,
    Task,
    TaskPriority,
    TaskStatus,
    ordered_unique,
)
from teamwork.domain.models.workspace import (
    INVITABLE_ROLES,
    Membership,
    Workspace,
    WorkspaceRole,
    WorkspaceStatus,
)

__all__: list[str] = [
    # Account
    "Account",
    "AccountSettings",
    "normalize_email",
    # Workspace
    "Workspace",
    "WorkspaceRole",
    "WorkspaceStatus",
    "Membership",
    "INVITABLE_ROLES",
    # Task
    "Task",
    "TaskStatus",
    "TaskPriority",
    "SubmissionKind",
    "SubmissionRecord",
    "ordered_unique",
    # Issue
    "Issue",
    "IssueStatus",
    "IssueTransitionPolicy",
    "TableIssueTransitionPolicy",
    "PermissiveIssueTransitionPolicy",
    "StrictIssueTransitionPolicy",
    "ISSUE_POLICIES",
    # Comment
    "Comment",
    # Mail
    "Mail",
    "MailType",
    "InvitationMessage",
    "InvitationStatus",
    "INVITE_SUBJECT_TEMPLATE",
    "INVITE_BODY_TEMPLATE",
    # Notification
    "Notification",
    "NotificationType",
    "NotificationReferences",
]
