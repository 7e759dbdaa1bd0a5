"""Request and response schemas for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SimulateRequest(BaseModel):
    """Body of ``POST /simulate``."""

    encounter_yaml: str = Field(description="Encounter document as YAML text")
    sample_count: int = Field(default=5, ge=0, le=100, description="Combat logs to return")
    seed: int | None = Field(default=None, description="Seed for a reproducible batch")


class ErrorResponse(BaseModel):
    """Body returned for rejected requests."""

    error: str


class HealthResponse(BaseModel):
    status: str = "ok"


__all__ = [
    "SimulateRequest",
    "ErrorResponse",
    "HealthResponse",
]
