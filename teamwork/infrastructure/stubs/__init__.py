"""In-memory infrastructure stubs.

These implement the application ports for development and testing.
They are the default wiring in ``teamwork.bootstrap``.
"""

from teamwork.infrastructure.stubs.account_repository_stub import AccountRepositoryStub
from teamwork.infrastructure.stubs.comment_repository_stub import CommentRepositoryStub
from teamwork.infrastructure.stubs.issue_repository_stub import IssueRepositoryStub
from teamwork.infrastructure.stubs.mail_dispatcher_stub import (
    DispatchedMail,
    MailDispatcherStub,
)
from teamwork.infrastructure.stubs.mail_repository_stub import MailRepositoryStub
from teamwork.infrastructure.stubs.membership_repository_stub import (
    MembershipRepositoryStub,
)
from teamwork.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from teamwork.infrastructure.stubs.task_repository_stub import TaskRepositoryStub
from teamwork.infrastructure.stubs.workspace_repository_stub import (
    WorkspaceRepositoryStub,
)

__all__: list[str] = [
    "AccountRepositoryStub",
    "WorkspaceRepositoryStub",
    "MembershipRepositoryStub",
    "TaskRepositoryStub",
    "IssueRepositoryStub",
    "CommentRepositoryStub",
    "MailRepositoryStub",
    "NotificationRepositoryStub",
    "MailDispatcherStub",
    "DispatchedMail",
]
