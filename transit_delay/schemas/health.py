"""Pydantic schemas for service status endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str  # ISO format
