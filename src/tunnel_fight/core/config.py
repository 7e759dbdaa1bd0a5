"""Configuration management for the Tunnel Fight simulator.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from tunnel_fight.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.simulation.max_rounds
    100

Environment Variables:
    TUNNEL_FIGHT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TUNNEL_FIGHT_LOG_JSON: Emit JSON logs instead of console output
    TUNNEL_FIGHT_SIM_MAX_ROUNDS: Round cap for a single battle
    TUNNEL_FIGHT_SIM_MAX_ITERATIONS: Upper bound on battles per simulation
    TUNNEL_FIGHT_API_PORT: HTTP port for the API server
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tunnel_fight.core.exceptions import ConfigurationError


class SimulationSettings(BaseSettings):
    """Configuration for batch simulation.

    Attributes:
        max_rounds: Round cap for one battle; reaching it is a draw.
        default_iterations: Battles to run when an encounter does not say.
        max_iterations: Hard upper bound on battles per simulation request.
        sample_count: Number of full combat logs returned with the stats.
        default_seed: Seed used when a caller supplies none (None = entropy).
    """

    model_config = SettingsConfigDict(
        env_prefix="TUNNEL_FIGHT_SIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_rounds: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Round cap for a single battle",
    )
    default_iterations: int = Field(
        default=30_000,
        ge=0,
        description="Battles to run when the encounter omits iterations",
    )
    max_iterations: int = Field(
        default=100_000,
        ge=1,
        description="Upper bound on battles per simulation",
    )
    sample_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Combat logs returned alongside statistics",
    )
    default_seed: int | None = Field(
        default=None,
        description="Seed used when none is supplied",
    )

    @model_validator(mode="after")
    def validate_iteration_bounds(self) -> "SimulationSettings":
        """Ensure the default iteration count respects the cap.

        Raises:
            ConfigurationError: If default_iterations > max_iterations.
        """
        if self.default_iterations > self.max_iterations:
            raise ConfigurationError(
                f"default_iterations ({self.default_iterations}) must not exceed "
                f"max_iterations ({self.max_iterations})",
                config_key="default_iterations",
            )
        return self


class ApiSettings(BaseSettings):
    """Configuration for the HTTP API.

    Attributes:
        host: Interface to bind.
        port: TCP port to listen on.
        cors_origins: Origins allowed by the CORS middleware.
    """

    model_config = SettingsConfigDict(
        env_prefix="TUNNEL_FIGHT_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON-formatted logs.
        simulation: Batch simulation settings.
        api: HTTP API settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TUNNEL_FIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Tunnel Fight", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(default=False, description="Emit JSON logs")

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for testing or when environment variables have
    changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "SimulationSettings",
    "ApiSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
