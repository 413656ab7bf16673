"""Domain events for TeamWork.

Every lifecycle operation returns the events it emitted; the
notification dispatcher turns them into per-recipient notifications.
"""

from teamwork.domain.events.base import (
    EVENT_SCHEMA_VERSION,
    DomainEvent,
    TaskScopedEvent,
    WorkspaceEvent,
)
from teamwork.domain.events.comment import COMMENT_ADDED_EVENT_TYPE, CommentAddedEvent
from teamwork.domain.events.deadline import (
    DEADLINE_APPROACHING_EVENT_TYPE,
    DeadlineApproachingEvent,
)
from teamwork.domain.events.issue import (
    ISSUE_CREATED_EVENT_TYPE,
    ISSUE_RESOLVED_EVENT_TYPE,
    IssueCreatedEvent,
    IssueResolvedEvent,
)
from teamwork.domain.events.task import (
    TASK_ASSIGNED_EVENT_TYPE,
    TASK_COMPLETED_EVENT_TYPE,
    TASK_STATUS_CHANGED_EVENT_TYPE,
    TaskAssignedEvent,
    TaskCompletedEvent,
    TaskStatusChangedEvent,
)
from teamwork.domain.events.workspace import (
    PROJECT_INVITE_EVENT_TYPE,
    PROJECT_REMOVED_EVENT_TYPE,
    PROJECT_UPDATE_EVENT_TYPE,
    ProjectInviteEvent,
    ProjectRemovedEvent,
    ProjectUpdateEvent,
)

__all__: list[str] = [
    "EVENT_SCHEMA_VERSION",
    "DomainEvent",
    "WorkspaceEvent",
    "TaskScopedEvent",
    # Task
    "TaskAssignedEvent",
    "TaskStatusChangedEvent",
    "TaskCompletedEvent",
    "TASK_ASSIGNED_EVENT_TYPE",
    "TASK_STATUS_CHANGED_EVENT_TYPE",
    "TASK_COMPLETED_EVENT_TYPE",
    # Comment
    "CommentAddedEvent",
    "COMMENT_ADDED_EVENT_TYPE",
    # Issue
    "IssueCreatedEvent",
    "IssueResolvedEvent",
    "ISSUE_CREATED_EVENT_TYPE",
    "ISSUE_RESOLVED_EVENT_TYPE",
    # Workspace
    "ProjectInviteEvent",
    "ProjectUpdateEvent",
    "ProjectRemovedEvent",
    "PROJECT_INVITE_EVENT_TYPE",
    "PROJECT_UPDATE_EVENT_TYPE",
    "PROJECT_REMOVED_EVENT_TYPE",
    # Deadline
    "DeadlineApproachingEvent",
    "DEADLINE_APPROACHING_EVENT_TYPE",
]
