"""Tunnel Fight - Monte Carlo combat resolver.

Two rosters fight along a single six-zone battle line. Each actor follows
an ordered rule program; turns are ordered by one of four initiative
modes; battles are repeated thousands of times to estimate win rates,
casualties and hit-point attrition.

DETERMINISM:
- Every roll, shuffle and tie-break draws from one explicitly passed rng
- A seed reproduces a whole batch, event for event

Example:
    >>> from tunnel_fight import load_encounter, run_simulation
    >>>
    >>> encounter = load_encounter(open("goblin_ambush.yaml").read())
    >>> result = run_simulation(encounter, seed=42)
    >>> print(f"Side 1 wins {result.stats.side1_win_rate:.1f}% of the time")

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic encounter schema, runtime actors and battle events.
    engine: Rule interpreter, movement, scheduling and the round loop.
    simulation: YAML loading, batch running, statistics and combat logs.
    api: FastAPI HTTP surface.
"""

from __future__ import annotations

# Core
from tunnel_fight.core.config import Settings, get_settings
from tunnel_fight.core.exceptions import EncounterError, TunnelFightError
from tunnel_fight.core.logging import configure_logging, get_logger

# Models
from tunnel_fight.models.encounter import Encounter
from tunnel_fight.models.events import CombatResult

# Engine
from tunnel_fight.engine.combat import CombatEngine, run_battle

# Simulation
from tunnel_fight.simulation.loader import load_encounter, load_encounter_file
from tunnel_fight.simulation.report import CombatLog, format_combat_log
from tunnel_fight.simulation.runner import SimulationResult, run_simulation
from tunnel_fight.simulation.stats import SimulationStats


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TunnelFightError",
    "EncounterError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Encounter",
    "CombatResult",
    # Engine
    "CombatEngine",
    "run_battle",
    # Simulation
    "load_encounter",
    "load_encounter_file",
    "run_simulation",
    "SimulationResult",
    "SimulationStats",
    "CombatLog",
    "format_combat_log",
]
