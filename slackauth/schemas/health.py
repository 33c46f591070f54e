"""Pydantic models for health endpoints."""

from typing import List
from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response model for service health checks."""

    status: str = "healthy"
    providers: List[str] = Field(default_factory=list)
