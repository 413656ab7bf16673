"""Shared API model types."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class ProblemDetail(BaseModel):
    """RFC 7807 problem document returned for every domain error.

    Additional members (ids, field names) vary per error type.
    """

    type: str = Field(..., description="Problem type URN")
    title: str
    status: int
    detail: str
    instance: str | None = None

    model_config = {"extra": "allow"}


class ErrorResponse(BaseModel):
    """Error body: the problem document under ``detail``."""

    detail: ProblemDetail


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    403: {"model": ErrorResponse, "description": "Caller lacks the required role"},
    404: {"model": ErrorResponse, "description": "Referenced entity not found"},
    409: {"model": ErrorResponse, "description": "Invariant would be violated"},
    422: {"model": ErrorResponse, "description": "Invalid input"},
}
