"""Input validation errors.

HTTP Status: 422 Unprocessable Entity
"""

from __future__ import annotations

from typing import Any

from teamwork.domain.exceptions import TeamworkError


class InvalidInputError(TeamworkError):
    """Raised for a missing required field or an invalid enum value.

    Attributes:
        field: Name of the offending field.
    """

    status_code = 422
    problem_type = "invalid-input"
    title = "Invalid Input"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)

    def problem_extensions(self) -> dict[str, Any]:
        return {"field": self.field}


class CannotInviteAsOwnerError(InvalidInputError):
    """Raised when an invitation proposes the owner role."""

    problem_type = "invitation:cannot-invite-as-owner"
    title = "Cannot Invite As Owner"

    def __init__(self) -> None:
        super().__init__("role", "Invitations may only propose the admin or member role")


def require_text(field: str, value: str | None) -> str:
    """Return ``value`` stripped, raising InvalidInputError when blank."""
    if value is None or not value.strip():
        raise InvalidInputError(field, f"{field} is required")
    return value.strip()
