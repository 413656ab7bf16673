"""Domain errors for TeamWork.

Error categories map one-to-one to HTTP status classes:
- NotFoundError (404): the id has no backing row
- ForbiddenError (403): the row exists, the caller lacks the relationship
- ConflictError (409): an invariant would be violated
- InvalidInputError (422): a required field is missing or an enum is invalid
"""

from teamwork.domain.errors.conflict import (
    AlreadyAssignedError,
    AlreadyDecidedError,
    AlreadyMemberError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    CascadeDeleteError,
    ConcurrentModificationError,
    ConflictError,
    InvalidStateTransitionError,
    InvitationPendingError,
    NotAssignedError,
    WorkspaceDeleteError,
)
from teamwork.domain.errors.forbidden import ForbiddenError
from teamwork.domain.errors.not_found import (
    AccountNotFoundError,
    CommentNotFoundError,
    IssueNotFoundError,
    MailNotFoundError,
    NotFoundError,
    NotificationNotFoundError,
    NotMemberError,
    RecipientNotFoundError,
    TaskNotFoundError,
    WorkspaceNotFoundError,
)
from teamwork.domain.errors.validation import (
    CannotInviteAsOwnerError,
    InvalidInputError,
    require_text,
)

__all__: list[str] = [
    # Not found
    "NotFoundError",
    "AccountNotFoundError",
    "WorkspaceNotFoundError",
    "TaskNotFoundError",
    "IssueNotFoundError",
    "CommentNotFoundError",
    "MailNotFoundError",
    "NotificationNotFoundError",
    "RecipientNotFoundError",
    "NotMemberError",
    # Forbidden
    "ForbiddenError",
    # Conflict
    "ConflictError",
    "AlreadyMemberError",
    "CannotRemoveOwnerError",
    "CannotChangeOwnerRoleError",
    "AlreadyDecidedError",
    "AlreadyAssignedError",
    "ConcurrentModificationError",
    "InvalidStateTransitionError",
    "CascadeDeleteError",
    "InvitationPendingError",
    "NotAssignedError",
    "WorkspaceDeleteError",
    # Validation
    "InvalidInputError",
    "CannotInviteAsOwnerError",
    "require_text",
]
