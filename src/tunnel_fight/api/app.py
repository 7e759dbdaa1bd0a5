"""FastAPI application for the Tunnel Fight simulator.

Endpoints:
    GET    /health      Liveness check
    POST   /simulate    Run a simulation batch for an encounter

Encounter problems (bad YAML, schema violations) are reported as
400 responses with an ``{"error": "..."}`` body.
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tunnel_fight.api.schemas import ErrorResponse, HealthResponse, SimulateRequest
from tunnel_fight.core.config import Settings, get_settings
from tunnel_fight.core.exceptions import TunnelFightError
from tunnel_fight.core.logging import configure_logging, get_logger
from tunnel_fight.simulation.loader import load_encounter
from tunnel_fight.simulation.runner import SimulationResult, run_simulation


logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings override (uses the global settings if None).

    Returns:
        FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Monte Carlo combat resolver for two rosters on a six-zone battle line.",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TunnelFightError)
    async def handle_domain_error(request: Request, exc: TunnelFightError) -> JSONResponse:
        logger.warning("Request rejected", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.post(
        "/simulate",
        response_model=SimulationResult,
        responses={400: {"model": ErrorResponse, "description": "Invalid encounter"}},
        tags=["Simulation"],
        summary="Simulate an encounter",
    )
    def simulate(request: SimulateRequest) -> SimulationResult:
        """Run the encounter's iterations and return stats plus sample logs.

        Runs in the worker threadpool since a batch is CPU-bound.
        """
        encounter = load_encounter(request.encounter_yaml, source="request")
        return run_simulation(
            encounter,
            seed=request.seed,
            sample_count=request.sample_count,
            settings=settings,
        )

    return app


def main() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Tunnel Fight server starting", host=settings.api.host, port=settings.api.port)
    uvicorn.run(create_app(settings), host=settings.api.host, port=settings.api.port)


__all__ = [
    "create_app",
    "main",
]
