"""Base exception classes for the TeamWork domain layer."""

from __future__ import annotations

from typing import Any

PROBLEM_TYPE_PREFIX = "urn:teamwork"


class TeamworkError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application:
    the HTTP shell maps every subclass to a problem document through
    ``to_rfc7807_dict`` without knowing the concrete type.

    Class Attributes:
        status_code: HTTP status the error category maps to.
        problem_type: Suffix of the RFC 7807 ``type`` URN.
        title: Short human-readable summary of the error category.
    """

    status_code: int = 500
    problem_type: str = "internal-error"
    title: str = "Internal Error"

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)

    def problem_extensions(self) -> dict[str, Any]:
        """Extra members added to the problem document.

        Subclasses override this to expose the ids involved.
        """
        return {}

    def to_rfc7807_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details format.

        Returns:
            Dictionary with type, title, status, detail and any
            error-specific extension members.
        """
        problem: dict[str, Any] = {
            "type": f"{PROBLEM_TYPE_PREFIX}:{self.problem_type}",
            "title": self.title,
            "status": self.status_code,
            "detail": str(self),
        }
        for key, value in self.problem_extensions().items():
            problem[key] = str(value) if value is not None else None
        return problem
