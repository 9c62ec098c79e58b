"""
Exercise Tracker — Health Check Schema
========================================

What:  Response model for GET /health.
Who:   Docker health checks, load balancers, monitoring.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
