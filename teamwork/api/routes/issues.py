"""Issue API routes.

Status changes go through the configured transition policy; an
illegal transition is a 409 ``invalid-state-transition`` problem.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from teamwork.api.adapters import TaskAdapter
from teamwork.api.dependencies import get_actor_id, get_fan_out, get_issue_lifecycle
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.task import (
    IssueResponse,
    IssueStatusRequest,
    UpdateIssueRequest,
)
from teamwork.application.services import (
    IssueLifecycleService,
    NotificationFanOutService,
)
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/issues", tags=["issues"])


@router.get(
    "/{issue_id}",
    response_model=IssueResponse,
    responses=ERROR_RESPONSES,
    summary="Get an issue",
)
async def get_issue(
    issue_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
) -> IssueResponse:
    try:
        issue = await issues.get(actor_id, issue_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.issue(issue)


@router.patch(
    "/{issue_id}",
    response_model=IssueResponse,
    responses=ERROR_RESPONSES,
    summary="Edit an issue",
)
async def update_issue(
    issue_id: UUID,
    body: UpdateIssueRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
) -> IssueResponse:
    """Owner of the issue only."""
    try:
        issue = await issues.update(
            actor_id, issue_id, title=body.title, description=body.description
        )
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.issue(issue)


@router.post(
    "/{issue_id}/status",
    response_model=IssueResponse,
    responses=ERROR_RESPONSES,
    summary="Change issue status",
)
async def change_issue_status(
    issue_id: UUID,
    body: IssueStatusRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
    fan_out: NotificationFanOutService = Depends(get_fan_out),
) -> IssueResponse:
    """Any member. The issue owner is notified when someone else resolves it."""
    try:
        result = await issues.change_status(actor_id, issue_id, body.status)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    await fan_out.dispatch(result.events)
    return TaskAdapter.issue(result.issue)


@router.delete(
    "/{issue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete an issue",
)
async def delete_issue(
    issue_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    issues: IssueLifecycleService = Depends(get_issue_lifecycle),
) -> Response:
    try:
        await issues.delete(actor_id, issue_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
