"""HTTP API for the Tunnel Fight simulator."""

from __future__ import annotations

from tunnel_fight.api.app import create_app, main
from tunnel_fight.api.schemas import ErrorResponse, HealthResponse, SimulateRequest


__all__ = [
    "create_app",
    "main",
    "SimulateRequest",
    "ErrorResponse",
    "HealthResponse",
]
