"""Human-readable combat logs.

Converts a CombatResult into the serializable CombatLog returned to API
clients as a sample battle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tunnel_fight.models.events import (
    ActorSnapshot,
    AttackEvent,
    CombatEvent,
    CombatResult,
    DeathEvent,
    EventKind,
    MoveEvent,
)


class CombatLogEntry(BaseModel):
    """One line of a combat log."""

    model_config = ConfigDict(frozen=True)

    round: int = Field(description="Round the event happened in")
    actor: str = Field(description="Name of the acting actor")
    description: str = Field(
        description=(
            "Event sentence, e.g. 'attacks Goblin (rolled 17 vs AC 13) - HIT for 7 damage' "
            "or 'moves from Side1 Ranged to Side1 Reach'"
        )
    )


class ActorFinalState(BaseModel):
    """An actor's state when the battle ended; hp reads 'final/max'."""

    model_config = ConfigDict(frozen=True)

    name: str
    side: str = Field(description="'Side1' or 'Side2'")
    hp: str = Field(description="'final/max' with final floored at 0, e.g. '0/7'")
    alive: bool
    zone: str = Field(
        description=(
            "Zone display name, space-separated: 'Side1 Melee', never the compact "
            "'Side1Melee'"
        )
    )


class CombatLog(BaseModel):
    """A full battle rendered for reading.

    Attributes:
        winner: Winning side name, or None for a draw.
        rounds: Rounds elapsed.
        events: Every event in chronological order.
        final_state: Every actor in roster order.
    """

    model_config = ConfigDict(frozen=True)

    winner: str | None = Field(description="'Side1', 'Side2', or null for a draw")
    rounds: int
    events: list[CombatLogEntry]
    final_state: list[ActorFinalState]


def _describe_attack(event: AttackEvent) -> str:
    prefix = f"attacks {event.target_name} (rolled {event.roll} vs AC {event.target_ac})"
    if event.hit:
        return f"{prefix} - HIT for {event.damage} damage"
    return f"{prefix} - MISS"


def _describe_move(event: MoveEvent) -> str:
    return f"moves from {event.from_zone.display_name} to {event.to_zone.display_name}"


def _describe_death(event: DeathEvent) -> str:
    return "dies!"


_DESCRIBERS: dict[EventKind, Callable[[Any], str]] = {
    EventKind.ATTACK: _describe_attack,
    EventKind.MOVE: _describe_move,
    EventKind.DEATH: _describe_death,
}


def describe_event(event: CombatEvent) -> str:
    """Render an event as a sentence whose subject is the event's actor.

    Example:
        >>> describe_event(attack)
        'attacks Goblin (rolled 17 vs AC 13) - HIT for 7 damage'
    """
    return _DESCRIBERS[event.kind](event)


def _final_state(snapshot: ActorSnapshot) -> ActorFinalState:
    return ActorFinalState(
        name=snapshot.name,
        side=snapshot.side.display_name,
        hp=f"{max(snapshot.final_hp, 0)}/{snapshot.max_hp}",
        alive=snapshot.alive,
        zone=snapshot.zone.display_name,
    )


def format_combat_log(result: CombatResult) -> CombatLog:
    """Render a battle result as a CombatLog."""
    return CombatLog(
        winner=result.winner.display_name if result.winner is not None else None,
        rounds=result.rounds,
        events=[
            CombatLogEntry(round=e.round, actor=e.actor_name, description=describe_event(e))
            for e in result.events
        ],
        final_state=[_final_state(s) for s in result.final_state],
    )


__all__ = [
    "CombatLogEntry",
    "ActorFinalState",
    "CombatLog",
    "describe_event",
    "format_combat_log",
]
