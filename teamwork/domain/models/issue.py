"""Issue domain model and transition policies.

Issues are problems reported against a task. The reference behavior
lets any status move to any other status; a stricter linear machine is
available. The policy is injected into the issue lifecycle service so
either can be used without code changes.

Transition Tables:
    Permissive: any status -> any other status
    Strict: OPEN -> IN_PROGRESS -> RESOLVED -> CLOSED (no skipping)
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class IssueStatus(Enum):
    """Status of an issue."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


TransitionTable = dict[IssueStatus, frozenset[IssueStatus]]

PERMISSIVE_TRANSITIONS: TransitionTable = {
    status: frozenset(IssueStatus) - {status} for status in IssueStatus
}

STRICT_TRANSITIONS: TransitionTable = {
    IssueStatus.OPEN: frozenset({IssueStatus.IN_PROGRESS}),
    IssueStatus.IN_PROGRESS: frozenset({IssueStatus.RESOLVED}),
    IssueStatus.RESOLVED: frozenset({IssueStatus.CLOSED}),
    IssueStatus.CLOSED: frozenset(),
}


class IssueTransitionPolicy(Protocol):
    """Decides which issue status changes are allowed."""

    name: str

    @abstractmethod
    def allows(self, current: IssueStatus, target: IssueStatus) -> bool:
        """Return True if ``current -> target`` is permitted.

        Setting the current status again is always allowed and treated
        as a status touch (it still records who changed it last).
        """
        ...


@dataclass(frozen=True)
class TableIssueTransitionPolicy:
    """Transition policy backed by a transition table."""

    name: str
    table: TransitionTable

    def allows(self, current: IssueStatus, target: IssueStatus) -> bool:
        if current is target:
            return True
        return target in self.table.get(current, frozenset())


PermissiveIssueTransitionPolicy = TableIssueTransitionPolicy(
    name="permissive", table=PERMISSIVE_TRANSITIONS
)
StrictIssueTransitionPolicy = TableIssueTransitionPolicy(
    name="strict", table=STRICT_TRANSITIONS
)

ISSUE_POLICIES: dict[str, TableIssueTransitionPolicy] = {
    PermissiveIssueTransitionPolicy.name: PermissiveIssueTransitionPolicy,
    StrictIssueTransitionPolicy.name: StrictIssueTransitionPolicy,
}


@dataclass(frozen=True, eq=True)
class Issue:
    """A problem reported against a task.

    Attributes:
        id: Unique issue identifier.
        task_id: Parent task.
        owner_account_id: Reporter; the only account that may edit or delete it.
        title: Short title.
        description: Long description.
        status: Current status.
        last_status_changed_by: Account that last set the status.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    task_id: UUID
    owner_account_id: UUID
    title: str
    description: str = ""
    status: IssueStatus = field(default=IssueStatus.OPEN)
    last_status_changed_by: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def with_status(self, status: IssueStatus, changed_by: UUID) -> Issue:
        """Return a copy with the new status attributed to ``changed_by``."""
        return replace(
            self,
            status=status,
            last_status_changed_by=changed_by,
            updated_at=_utc_now(),
        )

    def with_details(self, title: str | None, description: str | None) -> Issue:
        """Return a copy with title/description replaced where provided."""
        return replace(
            self,
            title=self.title if title is None else title,
            description=self.description if description is None else description,
            updated_at=_utc_now(),
        )
