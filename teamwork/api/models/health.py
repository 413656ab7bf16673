"""Health check response model."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    version: str
    environment: str
    uptime_seconds: float = Field(ge=0)
    deadline_worker_running: bool = Field(
        description="False when the app runs without its lifespan (tests, scripts)."
    )
