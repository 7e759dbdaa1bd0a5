"""Combat events and battle results.

Events are appended in chronological order while a battle runs; that
order is part of the observable output. A CombatResult is produced once
per battle and never modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from tunnel_fight.models.enums import Side, Zone


class EventKind(StrEnum):
    """Discriminator for combat events."""

    ATTACK = "attack"
    MOVE = "move"
    DEATH = "death"


@dataclass(frozen=True)
class AttackEvent:
    """An attack roll, hit or miss.

    Attributes:
        round: Round in which the attack happened.
        actor_id: Attacker's id.
        actor_name: Attacker's name.
        target_id: Defender's id.
        target_name: Defender's name.
        roll: d20 plus attack bonus.
        target_ac: Defender's armor class.
        hit: Whether roll met target_ac.
        damage: Damage dealt (0 on a miss).
    """

    kind: ClassVar[EventKind] = EventKind.ATTACK

    round: int
    actor_id: int
    actor_name: str
    target_id: int
    target_name: str
    roll: int
    target_ac: int
    hit: bool
    damage: int


@dataclass(frozen=True)
class MoveEvent:
    """A successful move of one or more zones."""

    kind: ClassVar[EventKind] = EventKind.MOVE

    round: int
    actor_id: int
    actor_name: str
    from_zone: Zone
    to_zone: Zone


@dataclass(frozen=True)
class DeathEvent:
    """An actor dropping to zero hit points; stamped with the victim."""

    kind: ClassVar[EventKind] = EventKind.DEATH

    round: int
    actor_id: int
    actor_name: str
    killer_id: int | None


CombatEvent = AttackEvent | MoveEvent | DeathEvent


@dataclass(frozen=True)
class ActorSnapshot:
    """Final state of one actor at the end of a battle."""

    id: int
    name: str
    side: Side
    max_hp: int
    final_hp: int
    alive: bool
    zone: Zone


@dataclass(frozen=True)
class CombatResult:
    """Outcome of one battle.

    Attributes:
        winner: Winning side, or None for a mutual wipe or a round-cap draw.
        rounds: Rounds elapsed.
        events: Every event in chronological order.
        final_state: One snapshot per actor, in roster order.
    """

    winner: Side | None
    rounds: int
    events: tuple[CombatEvent, ...]
    final_state: tuple[ActorSnapshot, ...]

    def casualties(self, side: Side) -> int:
        """Count dead actors on a side."""
        return sum(1 for a in self.final_state if a.side is side and not a.alive)

    def hp_lost(self, side: Side) -> int:
        """Sum hit points lost by a side, not counting overkill."""
        return sum(a.max_hp - max(a.final_hp, 0) for a in self.final_state if a.side is side)


__all__ = [
    "EventKind",
    "AttackEvent",
    "MoveEvent",
    "DeathEvent",
    "CombatEvent",
    "ActorSnapshot",
    "CombatResult",
]
