"""Custom exception hierarchy for the Tunnel Fight combat simulator.

All exceptions inherit from TunnelFightError, enabling unified error
handling at the application boundary (the HTTP layer turns any of them
into a 400 response) while preserving domain-specific context.

The engine itself is fail-soft: unknown rule text, bad HP
dice and bad initiative dice resolve to documented defaults instead of
raising. The errors below are reserved for input that cannot be given a
sensible meaning at all.

Example:
    >>> from tunnel_fight.core.exceptions import DiceParseError
    >>> raise DiceParseError("Invalid dice format", expression="2x6")
"""

from __future__ import annotations

from typing import Any


class TunnelFightError(Exception):
    """Base exception for all Tunnel Fight errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Input Exceptions
# =============================================================================


class ConfigurationError(TunnelFightError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class EncounterError(TunnelFightError):
    """Raised when an encounter description cannot be loaded.

    Covers both malformed YAML and documents that do not match the
    encounter schema (missing sides, bad damage dice, unknown enums).
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize encounter error with source context.

        Args:
            message: Human-readable error description.
            source: File path or other label of the offending document.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(TunnelFightError):
    """Base exception for all combat engine errors."""


class DiceParseError(GameEngineError):
    """Raised when dice notation cannot be parsed.

    The offending text is kept on the exception so callers that prefer a
    fallback value can log exactly what was rejected.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice parse error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        self.expression = expression
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution is asked to do something impossible.

    In practice this means a mutation entry point received an actor id
    that does not exist in the battle roster.
    """

    def __init__(
        self,
        message: str,
        *,
        actor_id: int | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            actor_id: Identifier of the actor involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if actor_id is not None:
            combined_details["actor_id"] = actor_id
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class SchedulingError(GameEngineError):
    """Raised when no turn scheduler exists for the requested initiative mode."""


__all__ = [
    # Base exception
    "TunnelFightError",
    # Configuration & input exceptions
    "ConfigurationError",
    "EncounterError",
    # Game engine exceptions
    "GameEngineError",
    "DiceParseError",
    "CombatError",
    "SchedulingError",
]
