"""Intended actions produced by the rule interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tunnel_fight.models.enums import Zone


class MoveTarget(StrEnum):
    """Kinds of movement destination."""

    ACTOR = "actor"
    ZONE = "zone"
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class MovePlan:
    """Where an actor wants to go this turn.

    Attributes:
        target: Destination kind.
        actor_id: Actor to close on, for ACTOR.
        zone: Zone to reach, for ZONE.
    """

    target: MoveTarget
    actor_id: int | None = None
    zone: Zone | None = None

    @classmethod
    def toward(cls, actor_id: int) -> MovePlan:
        return cls(MoveTarget.ACTOR, actor_id=actor_id)

    @classmethod
    def to_zone(cls, zone: Zone) -> MovePlan:
        return cls(MoveTarget.ZONE, zone=zone)


@dataclass(frozen=True)
class AttackPlan:
    """Which enemy an actor wants to attack this turn."""

    target_id: int


@dataclass(frozen=True)
class TurnPlan:
    """The move and attack chosen at one decision point (either may be None)."""

    move: MovePlan | None = None
    attack: AttackPlan | None = None


__all__ = [
    "MoveTarget",
    "MovePlan",
    "AttackPlan",
    "TurnPlan",
]
