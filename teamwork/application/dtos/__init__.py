"""Application DTOs returned by services and mapped to API models by routes."""

from teamwork.application.dtos.results import (
    CommentResult,
    FanOutReport,
    InvitationResult,
    IssueResult,
    MailResult,
    MembershipResult,
    MemberView,
    NotificationPage,
    TaskDeletionResult,
    TaskResult,
    WorkspaceDetails,
    WorkspaceResult,
    WorkspaceSummary,
)

__all__: list[str] = [
    "WorkspaceResult",
    "WorkspaceSummary",
    "WorkspaceDetails",
    "MembershipResult",
    "MemberView",
    "TaskResult",
    "TaskDeletionResult",
    "IssueResult",
    "CommentResult",
    "InvitationResult",
    "MailResult",
    "FanOutReport",
    "NotificationPage",
]
