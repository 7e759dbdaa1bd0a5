"""Batch simulation runner.

Runs an encounter many times and aggregates the outcomes. A batch
advances one random stream sequentially through every battle, so a seed
reproduces the whole batch. Callers that want to spread battles across
workers can give each battle its own stream with derive_rng instead.
"""

from __future__ import annotations

import random
import time
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from tunnel_fight.core.config import Settings, get_settings
from tunnel_fight.core.constants import DEFAULT_MAX_ROUNDS
from tunnel_fight.core.logging import batch_context, get_logger
from tunnel_fight.engine.combat import run_battle
from tunnel_fight.engine.scheduler import create_scheduler
from tunnel_fight.simulation.report import CombatLog
from tunnel_fight.simulation.stats import SimulationStats, StatsCollector


if TYPE_CHECKING:
    from tunnel_fight.models.encounter import Encounter
    from tunnel_fight.models.events import CombatResult


logger = get_logger(__name__)


class SimulationResult(BaseModel):
    """Statistics for a batch plus a few fully logged battles."""

    model_config = ConfigDict(frozen=True)

    stats: SimulationStats
    sample_combats: list[CombatLog]


def create_rng(seed: int | None = None) -> random.Random:
    """Create the random source for a batch (OS entropy when seed is None)."""
    return random.Random(seed)


def derive_rng(seed: int, battle_index: int) -> random.Random:
    """Create an independent, reproducible stream for one battle of a batch."""
    return random.Random(f"{seed}:{battle_index}")


def simulate(
    encounter: Encounter,
    rng: random.Random,
    *,
    iterations: int,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> Iterator[CombatResult]:
    """Run battles one after another on a single random stream.

    Args:
        encounter: Encounter to simulate.
        rng: Random source shared by every battle, in order.
        iterations: Number of battles.
        max_rounds: Round cap per battle.

    Yields:
        One CombatResult per battle.
    """
    scheduler = create_scheduler(encounter.initiative)
    for _ in range(iterations):
        yield run_battle(encounter, rng, max_rounds=max_rounds, scheduler=scheduler)


def _resolve_iterations(encounter: Encounter, requested: int | None, settings: Settings) -> int:
    if requested is not None:
        iterations = requested
    elif "iterations" in encounter.model_fields_set:
        iterations = encounter.iterations
    else:
        iterations = settings.simulation.default_iterations

    cap = settings.simulation.max_iterations
    if iterations > cap:
        logger.warning("Iteration count capped", requested=iterations, cap=cap)
        return cap
    return max(iterations, 0)


def run_simulation(
    encounter: Encounter,
    *,
    seed: int | None = None,
    iterations: int | None = None,
    sample_count: int | None = None,
    max_rounds: int | None = None,
    settings: Settings | None = None,
) -> SimulationResult:
    """Simulate an encounter and summarize the batch.

    Args:
        encounter: Encounter to simulate.
        seed: Seed for the batch (falls back to the configured default seed).
        iterations: Battles to run (falls back to the encounter, then settings).
        sample_count: Battles returned as full combat logs.
        max_rounds: Round cap per battle.
        settings: Settings override (uses the global settings if None).

    Returns:
        SimulationResult with statistics and sample combat logs.

    Example:
        >>> result = run_simulation(encounter, seed=42, iterations=1000)
        >>> result.stats.side1_win_rate
        63.4
    """
    settings = settings or get_settings()
    sim = settings.simulation

    seed = seed if seed is not None else sim.default_seed
    count = _resolve_iterations(encounter, iterations, settings)
    samples = sample_count if sample_count is not None else sim.sample_count
    rounds_cap = max_rounds if max_rounds is not None else sim.max_rounds

    with batch_context(encounter=encounter.name, seed=seed):
        logger.info(
            "Simulation started",
            iterations=count,
            initiative=str(encounter.initiative.initiative_type),
        )
        started = time.perf_counter()

        collector = StatsCollector.for_encounter(encounter, sample_count=samples)
        for result in simulate(encounter, create_rng(seed), iterations=count, max_rounds=rounds_cap):
            collector.add_result(result)

        stats = collector.compute_stats()
        logger.info(
            "Simulation finished",
            iterations=stats.iterations,
            side1_win_rate=round(stats.side1_win_rate, 2),
            side2_win_rate=round(stats.side2_win_rate, 2),
            draw_rate=round(stats.draw_rate, 2),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )

    return SimulationResult(stats=stats, sample_combats=collector.sample_combats())


__all__ = [
    "SimulationResult",
    "create_rng",
    "derive_rng",
    "simulate",
    "run_simulation",
]
