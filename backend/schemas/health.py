"""Liveness payload for the points API."""
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Process is up; says nothing about the stores."""

    status: str = "ok"
    service: str
    version: str
