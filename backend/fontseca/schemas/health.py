"""
fontseca.dev Backend — Health Check Schema
============================================
"""

from typing import Dict

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and reverse proxy probes.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    services: Dict[str, bool] = Field(description="Whether each injected service is configured")
    uptime_seconds: float = Field(description="Seconds since service started")
