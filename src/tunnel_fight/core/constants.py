"""Application-wide constants for the Tunnel Fight simulator.

Rules constants shared by the models and the engine. Values that users
tune per run (round cap, iteration counts) live in core.config instead.
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================

ATTACK_DIE_SIDES = 20
"""Attack rolls are a single d20 plus the attacker's bonus."""

DEFAULT_INITIATIVE_DICE = "1d20"
"""Initiative dice used when an encounter omits or mangles its own."""

MIN_HIT_POINTS = 1
"""Every actor starts a battle with at least this many hit points."""

MIN_DAMAGE = 0
"""Damage rolls never go below zero."""

# =============================================================================
# Actors & Zones
# =============================================================================

DEFAULT_SPEED = 1
"""Zones an actor may move per turn when its template omits speed."""

DEFAULT_REACH_CAPACITY = 3
"""Living actors allowed in each reach zone."""

DEFAULT_MELEE_CAPACITY = 3
"""Living actors allowed in each melee zone."""

# =============================================================================
# Simulation
# =============================================================================

DEFAULT_ITERATIONS = 30_000
"""Battles simulated when an encounter omits iterations."""

DEFAULT_MAX_ROUNDS = 100
"""Round cap after which a battle is scored as a draw."""

DEFAULT_SAMPLE_COUNT = 5
"""Leading battles returned as full combat logs."""


__all__ = [
    "ATTACK_DIE_SIDES",
    "DEFAULT_INITIATIVE_DICE",
    "MIN_HIT_POINTS",
    "MIN_DAMAGE",
    "DEFAULT_SPEED",
    "DEFAULT_REACH_CAPACITY",
    "DEFAULT_MELEE_CAPACITY",
    "DEFAULT_ITERATIONS",
    "DEFAULT_MAX_ROUNDS",
    "DEFAULT_SAMPLE_COUNT",
]
