"""FastAPI application entry point for TeamWork."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from teamwork import __version__
from teamwork.api.middleware import LoggingMiddleware, MetricsMiddleware
from teamwork.api.routes import (
    comments_router,
    health_router,
    invitations_router,
    issues_router,
    mail_router,
    metrics_router,
    notifications_router,
    tasks_router,
    workspace_tasks_router,
    workspaces_router,
)
from teamwork.bootstrap.logging import configure_logging
from teamwork.bootstrap.services import get_container
from teamwork.workers import DeadlineWorker


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, record the start and run the deadline worker."""
    container = get_container()
    configure_logging(container.config)

    container.metrics.record_startup()

    worker = DeadlineWorker(
        container.deadline_sweep,
        container.fan_out,
        container.config.deadline_sweep_interval_seconds,
        metrics=container.metrics,
    )
    await worker.start()
    app.state.deadline_worker = worker
    try:
        yield
    finally:
        await worker.stop()


app = FastAPI(
    title="TeamWork API",
    description="Collaborative workspaces, tasks, issues and invitations",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(workspaces_router)
app.include_router(workspace_tasks_router)
app.include_router(tasks_router)
app.include_router(comments_router)
app.include_router(issues_router)
app.include_router(invitations_router)
app.include_router(mail_router)
app.include_router(notifications_router)
