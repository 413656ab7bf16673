"""Task domain model.

State Machine:
    TODO -> IN_PROGRESS -> {DONE, CANCELLED}

    An authorized admin/owner may overwrite status directly through
    ``update``. Only the submission workflow (submit/reject) changes
    status *and* records a submission record. Rejection sends a task
    back to IN_PROGRESS for rework; CANCELLED is terminal.

Invariants:
- ``assigned_to`` is an ordered set (no duplicates, insertion order kept)
- ``assigned_to`` is a subset of the workspace members at assignment time
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class TaskStatus(Enum):
    """Status in the task lifecycle."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """CANCELLED is the only state with no further expected transitions."""
        return self is TaskStatus.CANCELLED


class TaskPriority(Enum):
    """Task priority. New tasks default to NO_PRIORITY."""

    NO_PRIORITY = "no-priority"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SubmissionKind(Enum):
    """Kind of submission record stored on a task."""

    SUBMISSION = "submission"
    REJECTION = "rejection"


@dataclass(frozen=True, eq=True)
class SubmissionRecord:
    """Who marked a task done or sent it back, and why.

    Attributes:
        by_account_id: The acting account.
        kind: SUBMISSION or REJECTION.
        message: Free-text explanation.
        attachments: Opaque attachment references (storage is external).
    """

    by_account_id: UUID
    kind: SubmissionKind
    message: str
    attachments: tuple[str, ...] = ()


def ordered_unique(account_ids: Iterable[UUID]) -> tuple[UUID, ...]:
    """Deduplicate ``account_ids`` keeping first-seen order."""
    return tuple(dict.fromkeys(account_ids))


@dataclass(frozen=True, eq=True)
class Task:
    """A unit of work inside a workspace.

    Comments and issues reference the task by id and are resolved
    through their repositories.

    Attributes:
        id: Unique task identifier.
        workspace_id: Owning workspace.
        title: Short title.
        description: Long description.
        status: Current lifecycle status.
        priority: Priority, NO_PRIORITY by default.
        assigned_to: Ordered set of assignee account ids; empty means
            open to any member.
        tags: Free-form labels.
        due_date: Optional deadline (UTC).
        submission: Last submission or rejection record.
        created_by: Account that created the task.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    workspace_id: UUID
    title: str
    description: str = ""
    status: TaskStatus = field(default=TaskStatus.TODO)
    priority: TaskPriority = field(default=TaskPriority.NO_PRIORITY)
    assigned_to: tuple[UUID, ...] = ()
    tags: tuple[str, ...] = ()
    due_date: datetime | None = field(default=None)
    submission: SubmissionRecord | None = field(default=None)
    created_by: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Normalize assignees into an ordered set."""
        object.__setattr__(self, "assigned_to", ordered_unique(self.assigned_to))

    @property
    def is_unassigned(self) -> bool:
        """True when any member may pick the task up."""
        return not self.assigned_to

    def is_assigned_to(self, account_id: UUID) -> bool:
        """Check whether ``account_id`` is an assignee."""
        return account_id in self.assigned_to

    def with_changes(self, **changes: object) -> Task:
        """Return a copy with ``changes`` applied and ``updated_at`` bumped."""
        return replace(self, **changes, updated_at=_utc_now())  # type: ignore[arg-type]

    def with_submission(
        self,
        status: TaskStatus,
        record: SubmissionRecord,
    ) -> Task:
        """Return a copy carrying ``record`` and the resulting ``status``."""
        return self.with_changes(status=status, submission=record)

    def without_assignee(self, account_id: UUID) -> Task:
        """Return a copy with ``account_id`` pruned from ``assigned_to``."""
        return self.with_changes(
            assigned_to=tuple(a for a in self.assigned_to if a != account_id)
        )
