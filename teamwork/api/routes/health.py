"""Liveness endpoint."""

from fastapi import APIRouter, Request

from teamwork import __version__
from teamwork.api.models.health import HealthResponse
from teamwork.bootstrap.services import get_container

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report version, uptime and whether the deadline worker is running."""
    container = get_container()
    worker = getattr(request.app.state, "deadline_worker", None)
    return HealthResponse(
        version=__version__,
        environment=container.config.environment,
        uptime_seconds=round(container.metrics.uptime_seconds(), 3),
        deadline_worker_running=bool(worker is not None and worker.running),
    )
