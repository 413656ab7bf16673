"""Not-found domain errors.

A NotFoundError means the referenced id has no backing row. It is kept
distinct from ForbiddenError so callers can tell "does not exist" (404)
apart from "exists but you may not touch it" (403).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from teamwork.domain.exceptions import TeamworkError


class NotFoundError(TeamworkError):
    """Base error for entities with no backing row.

    HTTP Status: 404 Not Found

    Attributes:
        entity: Entity kind, e.g. ``"task"``.
        entity_id: The id that could not be resolved.
    """

    status_code = 404
    problem_type = "not-found"
    title = "Not Found"
    entity = "entity"

    def __init__(self, entity_id: UUID | str, message: str | None = None) -> None:
        self.entity_id = entity_id
        super().__init__(message or f"{self.entity.capitalize()} {entity_id} not found")

    def problem_extensions(self) -> dict[str, Any]:
        return {f"{self.entity}_id": self.entity_id}


class AccountNotFoundError(NotFoundError):
    """Raised when an account id does not resolve."""

    problem_type = "account:not-found"
    title = "Account Not Found"
    entity = "account"


class WorkspaceNotFoundError(NotFoundError):
    """Raised when a workspace id does not resolve."""

    problem_type = "workspace:not-found"
    title = "Workspace Not Found"
    entity = "workspace"


class TaskNotFoundError(NotFoundError):
    """Raised when a task id does not resolve."""

    problem_type = "task:not-found"
    title = "Task Not Found"
    entity = "task"


class IssueNotFoundError(NotFoundError):
    """Raised when an issue id does not resolve."""

    problem_type = "issue:not-found"
    title = "Issue Not Found"
    entity = "issue"


class CommentNotFoundError(NotFoundError):
    """Raised when a comment id does not resolve."""

    problem_type = "comment:not-found"
    title = "Comment Not Found"
    entity = "comment"


class MailNotFoundError(NotFoundError):
    """Raised when a mail (or invitation) id does not resolve."""

    problem_type = "mail:not-found"
    title = "Mail Not Found"
    entity = "mail"


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification does not exist for the requesting recipient.

    Notifications owned by another account are reported as not found
    rather than forbidden so their existence is not disclosed.
    """

    problem_type = "notification:not-found"
    title = "Notification Not Found"
    entity = "notification"


class RecipientNotFoundError(NotFoundError):
    """Raised when an invitation targets an email with no account.

    Attributes:
        email: The email address that matched no account.
    """

    problem_type = "invitation:recipient-not-found"
    title = "Recipient Not Found"
    entity = "recipient"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(email, f"No account is registered for {email}")

    def problem_extensions(self) -> dict[str, Any]:
        return {"email": self.email}


class NotMemberError(NotFoundError):
    """Raised when a membership row for (workspace, account) is absent.

    Classified as not-found: the membership being addressed has no
    backing row.

    Attributes:
        workspace_id: The workspace that was queried.
        account_id: The account that has no membership.
    """

    problem_type = "membership:not-member"
    title = "Not A Member"
    entity = "membership"

    def __init__(self, workspace_id: UUID, account_id: UUID) -> None:
        self.workspace_id = workspace_id
        self.account_id = account_id
        super().__init__(
            account_id,
            f"Account {account_id} is not a member of workspace {workspace_id}",
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {"workspace_id": self.workspace_id, "account_id": self.account_id}
