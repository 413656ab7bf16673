"""Application ports (abstract interfaces to infrastructure)."""

from teamwork.application.ports.account_repository import AccountRepositoryProtocol
from teamwork.application.ports.comment_repository import CommentRepositoryProtocol
from teamwork.application.ports.fan_out_metrics import FanOutMetricsProtocol
from teamwork.application.ports.issue_repository import IssueRepositoryProtocol
from teamwork.application.ports.mail_dispatcher import MailDispatcherProtocol
from teamwork.application.ports.mail_repository import MailRepositoryProtocol
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.application.ports.workspace_repository import WorkspaceRepositoryProtocol

__all__: list[str] = [
    "AccountRepositoryProtocol",
    "WorkspaceRepositoryProtocol",
    "MembershipRepositoryProtocol",
    "TaskRepositoryProtocol",
    "IssueRepositoryProtocol",
    "CommentRepositoryProtocol",
    "MailRepositoryProtocol",
    "NotificationRepositoryProtocol",
    "MailDispatcherProtocol",
    "FanOutMetricsProtocol",
]
