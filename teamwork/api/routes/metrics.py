"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Response

from teamwork.bootstrap.services import get_container
from teamwork.infrastructure.monitoring import METRICS_CONTENT_TYPE

router = APIRouter(prefix="/v1", tags=["metrics"])


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    response_class=Response,
    responses={200: {"description": "Exposition format", "content": {"text/plain": {}}}},
)
async def get_metrics() -> Response:
    """Render every TeamWork series of the active container."""
    return Response(
        content=get_container().metrics.render(),
        media_type=METRICS_CONTENT_TYPE,
    )
