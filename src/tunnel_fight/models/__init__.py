"""Data models for the Tunnel Fight simulator.

This package contains the encounter schema (pydantic), the runtime actor
state, the rule-program vocabulary, and the immutable battle results.

Modules:
    enums: Sides, zones, weapon ranges, initiative modes and phases.
    zones: Track geometry and zone capacities.
    dice: Dice expressions and hit-point values.
    rules: Rule program entries compiled into typed variants.
    actors: Actor templates and per-battle actors.
    encounter: The complete encounter description.
    events: Combat events and battle results.
"""

from __future__ import annotations

from tunnel_fight.models.actors import Actor, ActorTemplate
from tunnel_fight.models.dice import (
    DiceExpression,
    HitPointValue,
    expected_hit_points,
    parse_dice,
    parse_dice_or_default,
    resolve_hit_points,
)
from tunnel_fight.models.encounter import Encounter, InitiativeConfig
from tunnel_fight.models.enums import (
    DEFAULT_PHASES,
    ZONE_TRACK,
    InitiativeType,
    Phase,
    Side,
    StartingZone,
    WeaponRange,
    Zone,
)
from tunnel_fight.models.events import (
    ActorSnapshot,
    AttackEvent,
    CombatEvent,
    CombatResult,
    DeathEvent,
    EventKind,
    MoveEvent,
)
from tunnel_fight.models.rules import (
    DEFAULT_PROGRAM,
    ActionKind,
    Condition,
    ConditionKind,
    NumericAttribute,
    RuleEntry,
    TargetKind,
    compile_condition,
    compile_target,
)
from tunnel_fight.models.zones import (
    ZoneCapacities,
    backward_zone,
    distance,
    forward_zone,
    starting_zone,
    step_toward,
)


__all__ = [
    # Enums
    "Side",
    "Zone",
    "ZONE_TRACK",
    "WeaponRange",
    "StartingZone",
    "InitiativeType",
    "Phase",
    "DEFAULT_PHASES",
    # Zones
    "ZoneCapacities",
    "distance",
    "step_toward",
    "starting_zone",
    "forward_zone",
    "backward_zone",
    # Dice
    "DiceExpression",
    "HitPointValue",
    "parse_dice",
    "parse_dice_or_default",
    "resolve_hit_points",
    "expected_hit_points",
    # Rules
    "ActionKind",
    "Condition",
    "ConditionKind",
    "NumericAttribute",
    "TargetKind",
    "RuleEntry",
    "DEFAULT_PROGRAM",
    "compile_condition",
    "compile_target",
    # Actors & encounter
    "ActorTemplate",
    "Actor",
    "Encounter",
    "InitiativeConfig",
    # Events & results
    "EventKind",
    "AttackEvent",
    "MoveEvent",
    "DeathEvent",
    "CombatEvent",
    "ActorSnapshot",
    "CombatResult",
]
