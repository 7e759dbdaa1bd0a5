"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        TunnelFightError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        EncounterError: Encounter documents that cannot be loaded.
        GameEngineError, DiceParseError, CombatError, SchedulingError.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        batch_context: Bind fields to the log entries of one batch.
"""

from __future__ import annotations

from tunnel_fight.core.config import (
    ApiSettings,
    Settings,
    SimulationSettings,
    clear_settings_cache,
    get_settings,
)
from tunnel_fight.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceParseError,
    EncounterError,
    GameEngineError,
    SchedulingError,
    TunnelFightError,
)
from tunnel_fight.core.logging import (
    batch_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "TunnelFightError",
    "ConfigurationError",
    "EncounterError",
    "GameEngineError",
    "DiceParseError",
    "CombatError",
    "SchedulingError",
    # Configuration
    "Settings",
    "SimulationSettings",
    "ApiSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "batch_context",
]
