"""Battle engine for the Tunnel Fight simulator.

This module resolves a single battle: deployment, turn scheduling, rule
program decisions, movement along the zone track and attack resolution.

Submodules:
    state: Mutable battle state (roster, round counter, event log)
    plans: Move and attack intentions produced by the interpreter
    rules: Rule program interpreter
    movement: Zone entry legality and stepwise movement
    scheduler: The four initiative/turn ordering variants
    combat: Round loop and attack resolution

Example:
    >>> import random
    >>> from tunnel_fight.engine import run_battle
    >>>
    >>> result = run_battle(encounter, random.Random(7))
    >>> print(result.winner, result.rounds)
"""

from __future__ import annotations

# =============================================================================
# Battle State
# =============================================================================
from tunnel_fight.engine.state import BattleState

# =============================================================================
# Decisions
# =============================================================================
from tunnel_fight.engine.plans import AttackPlan, MovePlan, MoveTarget, TurnPlan
from tunnel_fight.engine.rules import RuleContext, decide, evaluate_condition

# =============================================================================
# Movement & Scheduling
# =============================================================================
from tunnel_fight.engine.movement import MovementRules
from tunnel_fight.engine.scheduler import (
    IndividualPhaseScheduler,
    IndividualScheduler,
    Scheduler,
    SidePhaseScheduler,
    SideScheduler,
    StepKind,
    TurnStep,
    create_scheduler,
    initiative_order,
)

# =============================================================================
# Combat
# =============================================================================
from tunnel_fight.engine.combat import CombatEngine, build_roster, run_battle


__all__ = [
    # State
    "BattleState",
    # Decisions
    "MoveTarget",
    "MovePlan",
    "AttackPlan",
    "TurnPlan",
    "RuleContext",
    "evaluate_condition",
    "decide",
    # Movement & scheduling
    "MovementRules",
    "StepKind",
    "TurnStep",
    "Scheduler",
    "SideScheduler",
    "IndividualScheduler",
    "SidePhaseScheduler",
    "IndividualPhaseScheduler",
    "create_scheduler",
    "initiative_order",
    # Combat
    "CombatEngine",
    "build_roster",
    "run_battle",
]
