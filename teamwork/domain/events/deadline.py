"""Deadline events emitted by the deadline sweep."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from teamwork.domain.events.base import TaskScopedEvent

DEADLINE_APPROACHING_EVENT_TYPE: str = "task.deadline_approaching"


@dataclass(frozen=True, kw_only=True)
class DeadlineApproachingEvent(TaskScopedEvent):
    """Emitted for a task due soon that is not done.

    System-triggered: ``actor_id`` is always None.

    Attributes:
        due_date: The task deadline (UTC).
        assignees: Accounts to remind.
    """

    event_type = DEADLINE_APPROACHING_EVENT_TYPE

    actor_id: UUID | None = None
    due_date: datetime
    assignees: tuple[UUID, ...] = ()
