"""Task API routes.

Two routers: ``workspace_router`` for tasks addressed through their
workspace (create, list) and ``router`` for tasks addressed by id,
including their comment thread and issues.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from teamwork.api.adapters import TaskAdapter
from teamwork.api.dependencies import (
    get_actor_id,
    get_comment_thread,
    get_fan_out,
    get_issue_lifecycle,
    get_task_lifecycle,
)
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.task import (
    AssignRequest,
    CommentResponse,
    CreateCommentRequest,
    CreateIssueRequest,
    CreateTaskRequest,
    IssueResponse,
    RejectTaskRequest,
    SubmitTaskRequest,
    TaskDeletionResponse,
    TaskResponse,
    UpdateTaskRequest,
)
from teamwork.application.services import (
    CommentThreadService,
    IssueLifecycleService,
    NotificationFanOutService,
    TaskLifecycleService,
)
from teamwork.domain.exceptions import TeamworkError
from teamwork.domain.models.task import TaskPriority, TaskStatus

workspace_router = APIRouter(prefix="/v1/workspaces", tags=["tasks"])
router = APIRouter(prefix="/v1/tasks", tags=["tasks"])


@workspace_router.post(
    "/{workspace_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a task",
)
async def create_task(
    workspace_id: UUID,
    body: CreateTaskRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> TaskResponse:
    """Admin or owner. Every assignee must be a workspace member."""
    try:
        result = await tasks.create(
            actor_id,
            workspace_id,
            title=body.title,
            description=body.description,
            priority=body.priority,
            assigned_to=body.assigned_to,
            tags=body.tags,
            due_date=body.due_date,
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.to_response(result.task)


@workspace_router.get(
    "/{workspace_id}/tasks",
    response_model=list[TaskResponse],
    responses=ERROR_RESPONSES,
    summary="List workspace tasks",
)
async def list_workspace_tasks(
    workspace_id: UUID,
    request: Request,
    open_only: bool = Query(default=False, description="Exclude done tasks"),
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
) -> list[TaskResponse]:
    try:
        found = await tasks.list_for_workspace(actor_id, workspace_id, open_only=open_only)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return [TaskAdapter.to_response(t) for t in found]


# Declared before /{task_id} so "assigned" is not parsed as an id.
@router.get(
    "/assigned",
    response_model=list[TaskResponse],
    summary="List tasks assigned to the caller",
)
async def list_assigned_tasks(
    status_filter: list[TaskStatus] | None = Query(default=None, alias="status"),
    priority: list[TaskPriority] | None = Query(default=None),
    due_after: datetime | None = Query(default=None),
    due_before: datetime | None = Query(default=None),
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
) -> list[TaskResponse]:
    """Tasks across all workspaces, filtered by status, priority and due window."""
    found = await tasks.list_assigned(
        actor_id,
        statuses=status_filter,
        priorities=priority,
        due_after=due_after,
        due_before=due_before,
    )
    return [TaskAdapter.to_response(t) for t in found]


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Get a task",
)
async def get_task(
    task_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
) -> TaskResponse:
    try:
        task = await tasks.get(actor_id, task_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.to_response(task)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Update a task",
)
async def update_task(
    task_id: UUID,
    body: UpdateTaskRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> TaskResponse:
    """Admin or owner. An explicit ``due_date: null`` clears the due date."""
    changes: dict[str, Any] = body.model_dump(exclude_unset=True, exclude={"due_date"})
    if "due_date" in body.model_fields_set:
        changes["due_date"] = body.due_date
    try:
        result = await tasks.update(actor_id, task_id, **changes)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.to_response(result.task)


@router.delete(
    "/{task_id}",
    response_model=TaskDeletionResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a task with its issues and comments",
)
async def delete_task(
    task_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
) -> TaskDeletionResponse:
    try:
        result = await tasks.delete(actor_id, task_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.deletion(result)


@router.post(
    "/{task_id}/assignees",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Assign a member to a task",
)
async def assign_task(
    task_id: UUID,
    body: AssignRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> TaskResponse:
    try:
        result = await tasks.assign(actor_id, task_id, body.account_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.to_response(result.task)


@router.delete(
    "/{task_id}/assignees/{account_id}",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Remove an assignee from a task",
)
async def unassign_task(
    task_id: UUID,
    account_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
) -> TaskResponse:
    try:
        result = await tasks.unassign(actor_id, task_id, account_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.to_response(result.task)


@router.post(
    "/{task_id}/submit",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Submit work on a task",
)
async def submit_task(
    task_id: UUID,
    body: SubmitTaskRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> TaskResponse:
    """Assignees, or any member while the task is unassigned; moves it to done."""
    try:
        result = await tasks.submit(actor_id, task_id, body.message, body.attachments)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.to_response(result.task)


@router.post(
    "/{task_id}/reject",
    response_model=TaskResponse,
    responses=ERROR_RESPONSES,
    summary="Reject a task",
)
async def reject_task(
    task_id: UUID,
    body: RejectTaskRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    tasks: TaskLifecycleService = Depends(get_task_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> TaskResponse:
    try:
        result = await tasks.reject(actor_id, task_id, body.message, body.attachments)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.to_response(result.task)


# Comment thread


@router.post(
    "/{task_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Comment on a task",
)
async def add_comment(
    task_id: UUID,
    body: CreateCommentRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    comments: CommentThreadService = Depends(get_comment_thread),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> CommentResponse:
    try:
        result = await comments.add_comment(
            actor_id, task_id, body.content, body.attachments
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.comment(result.comment)


@router.get(
    "/{task_id}/comments",
    response_model=list[CommentResponse],
    responses=ERROR_RESPONSES,
    summary="List task comments",
)
async def list_comments(
    task_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    comments: CommentThreadService = Depends(get_comment_thread),
) -> list[CommentResponse]:
    try:
        found = await comments.list_comments(actor_id, task_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return [TaskAdapter.comment(c) for c in found]


# Issues


@router.post(
    "/{task_id}/issues",
    response_model=IssueResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Raise an issue on a task",
)
async def create_issue(
    task_id: UUID,
    body: CreateIssueRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> IssueResponse:
    try:
        result = await issues.create(actor_id, task_id, body.title, body.description)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.issue(result.issue)


@router.get(
    "/{task_id}/issues",
    response_model=list[IssueResponse],
    responses=ERROR_RESPONSES,
    summary="List task issues",
)
async def list_issues(
    task_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
) -> list[IssueResponse]:
    try:
        found = await issues.list_for_task(actor_id, task_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return [TaskAdapter.issue(i) for i in found]
