"""Health check models."""

from pydantic import BaseModel, Field


class ComponentHealth(BaseModel):
    """Health status of a single backing service."""

    healthy: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    success: bool = True
    status: str = "ok"
    message: str = "Nexus AI Backend is running"
    version: str
    llm_configured: bool = Field(serialization_alias="llmConfigured")
    database: ComponentHealth
