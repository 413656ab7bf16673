"""In-memory stub for IssueRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from teamwork.domain.models.issue import Issue


class IssueRepositoryStub:
    """In-memory implementation of IssueRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._issues: dict[UUID, Issue] = {}

    async def get(self, issue_id: UUID) -> Issue | None:
        return self._issues.get(issue_id)

    async def save(self, issue: Issue) -> None:
        self._issues[issue.id] = issue

    async def delete(self, issue_id: UUID) -> bool:
        return self._issues.pop(issue_id, None) is not None

    async def list_for_task(self, task_id: UUID) -> list[Issue]:
        return [i for i in self._issues.values() if i.task_id == task_id]

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._issues.clear()

    def count(self) -> int:
        return len(self._issues)
