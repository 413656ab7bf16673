"""Task, comment and issue request/response models."""

from uuid import UUID

from pydantic import BaseModel, Field

from teamwork.api.models.common import DateTimeWithZ
from teamwork.domain.models.issue import IssueStatus
from teamwork.domain.models.task import SubmissionKind, TaskPriority, TaskStatus


class CreateTaskRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    priority: TaskPriority = TaskPriority.NO_PRIORITY
    assigned_to: list[UUID] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    due_date: DateTimeWithZ | None = None


class UpdateTaskRequest(BaseModel):
    """Partial task update.

    Only fields present in the request body are applied. Sending
    ``"due_date": null`` clears the deadline.
    """

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: list[UUID] | None = None
    tags: list[str] | None = None
    due_date: DateTimeWithZ | None = None


class AssignRequest(BaseModel):
    account_id: UUID


class SubmitTaskRequest(BaseModel):
    message: str = ""
    attachments: list[str] = Field(default_factory=list)


class RejectTaskRequest(BaseModel):
    message: str = Field(..., min_length=1)
    attachments: list[str] = Field(default_factory=list)


class SubmissionResponse(BaseModel):
    by_account_id: UUID
    kind: SubmissionKind
    message: str
    attachments: list[str]


class TaskResponse(BaseModel):
    id: UUID
    workspace_id: UUID
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assigned_to: list[UUID]
    tags: list[str]
    due_date: DateTimeWithZ | None = None
    submission: SubmissionResponse | None = None
    created_by: UUID | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class TaskDeletionResponse(BaseModel):
    task_id: UUID
    issues_deleted: int = Field(..., ge=0)
    comments_deleted: int = Field(..., ge=0)


class CreateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1)
    attachments: list[str] = Field(default_factory=list)


class UpdateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    id: UUID
    task_id: UUID
    author_account_id: UUID
    content: str
    attachments: list[str]
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class CreateIssueRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""


class UpdateIssueRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None


class IssueStatusRequest(BaseModel):
    status: IssueStatus


class IssueResponse(BaseModel):
    id: UUID
    task_id: UUID
    owner_account_id: UUID
    title: str
    description: str
    status: IssueStatus
    last_status_changed_by: UUID | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ
