"""API request/response models (Pydantic v2)."""

from teamwork.api.models.common import (
    ERROR_RESPONSES,
    DateTimeWithZ,
    ErrorResponse,
    ProblemDetail,
)
from teamwork.api.models.health import HealthResponse

__all__: list[str] = [
    "DateTimeWithZ",
    "ERROR_RESPONSES",
    "ErrorResponse",
    "HealthResponse",
    "ProblemDetail",
]
