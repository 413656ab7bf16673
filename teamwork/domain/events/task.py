"""Task lifecycle events.

- TaskAssignedEvent: an account was newly assigned to a task
- TaskStatusChangedEvent: a task's status changed
- TaskCompletedEvent: a task moved into DONE from another status
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from teamwork.domain.events.base import TaskScopedEvent
from teamwork.domain.models.task import TaskStatus

TASK_ASSIGNED_EVENT_TYPE: str = "task.assigned"
TASK_STATUS_CHANGED_EVENT_TYPE: str = "task.status_changed"
TASK_COMPLETED_EVENT_TYPE: str = "task.completed"


@dataclass(frozen=True, kw_only=True)
class TaskAssignedEvent(TaskScopedEvent):
    """Emitted once per newly added assignee (never for self-assignment).

    Attributes:
        assignee_id: The account that was assigned.
    """

    event_type = TASK_ASSIGNED_EVENT_TYPE

    assignee_id: UUID


@dataclass(frozen=True, kw_only=True)
class TaskStatusChangedEvent(TaskScopedEvent):
    """Emitted when a task's status actually changes.

    Attributes:
        old_status: Status before the change.
        new_status: Status after the change.
        assignees: Current assignees after the change.
    """

    event_type = TASK_STATUS_CHANGED_EVENT_TYPE

    old_status: TaskStatus
    new_status: TaskStatus
    assignees: tuple[UUID, ...] = ()


@dataclass(frozen=True, kw_only=True)
class TaskCompletedEvent(TaskScopedEvent):
    """Emitted when a task enters DONE from a different status.

    Attributes:
        assignees: Current assignees.
    """

    event_type = TASK_COMPLETED_EVENT_TYPE

    assignees: tuple[UUID, ...] = ()
