"""Authorization errors raised by the access gate."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from teamwork.domain.exceptions import TeamworkError


class ForbiddenError(TeamworkError):
    """Raised when the entity exists but the caller lacks the required role.

    HTTP Status: 403 Forbidden

    Attributes:
        account_id: The caller that was refused.
        action: Short name of the refused operation.
        required: Relationship the caller would need, e.g. ``"admin_or_owner"``.
    """

    status_code = 403
    problem_type = "access:forbidden"
    title = "Forbidden"

    def __init__(
        self,
        account_id: UUID,
        action: str,
        required: str | None = None,
    ) -> None:
        self.account_id = account_id
        self.action = action
        self.required = required
        message = f"Account {account_id} may not {action}"
        if required:
            message = f"{message} (requires {required})"
        super().__init__(message)

    def problem_extensions(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "action": self.action,
            "required": self.required,
        }
