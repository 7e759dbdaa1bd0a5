"""Batch simulation for the Tunnel Fight simulator.

Submodules:
    loader: Encounter YAML loading and validation
    runner: Seeded batch execution
    stats: Aggregate statistics
    report: Readable combat logs

Example:
    >>> from tunnel_fight.simulation import load_encounter, run_simulation
    >>>
    >>> encounter = load_encounter(yaml_text)
    >>> result = run_simulation(encounter, seed=42)
    >>> print(result.stats.side1_win_rate)
"""

from __future__ import annotations

from tunnel_fight.simulation.loader import load_encounter, load_encounter_file, parse_encounter
from tunnel_fight.simulation.report import (
    ActorFinalState,
    CombatLog,
    CombatLogEntry,
    describe_event,
    format_combat_log,
)
from tunnel_fight.simulation.runner import (
    SimulationResult,
    create_rng,
    derive_rng,
    run_simulation,
    simulate,
)
from tunnel_fight.simulation.stats import SimulationStats, StatsCollector


__all__ = [
    # Loading
    "parse_encounter",
    "load_encounter",
    "load_encounter_file",
    # Running
    "SimulationResult",
    "create_rng",
    "derive_rng",
    "simulate",
    "run_simulation",
    # Statistics
    "SimulationStats",
    "StatsCollector",
    # Reports
    "CombatLogEntry",
    "ActorFinalState",
    "CombatLog",
    "describe_event",
    "format_combat_log",
]
