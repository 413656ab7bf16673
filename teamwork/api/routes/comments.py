"""Comment API routes. Comments are edited and deleted by their author only."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from teamwork.api.adapters import TaskAdapter
from teamwork.api.dependencies import get_actor_id, get_comment_thread
from teamwork.api.errors import problem_exception
from teamwork.api.models.common import ERROR_RESPONSES
from teamwork.api.models.task import CommentResponse, UpdateCommentRequest
from teamwork.application.services import CommentThreadService
from teamwork.domain.exceptions import TeamworkError

router = APIRouter(prefix="/v1/comments", tags=["comments"])


@router.patch(
    "/{comment_id}",
    response_model=CommentResponse,
    responses=ERROR_RESPONSES,
    summary="Edit a comment",
)
async def update_comment(
    comment_id: UUID,
    body: UpdateCommentRequest,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    comments: CommentThreadService = Depends(get_comment_thread),
) -> CommentResponse:
    try:
        comment = await comments.update_comment(actor_id, comment_id, body.content)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return TaskAdapter.comment(comment)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: UUID,
    request: Request,
    actor_id: UUID = Depends(get_actor_id),
    comments: CommentThreadService = Depends(get_comment_thread),
) -> Response:
    try:
        await comments.delete_comment(actor_id, comment_id)
    except TeamworkError as exc:
        raise problem_exception(exc, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
