"""Battle state: the actor roster, round counter and event log.

BattleState owns every Actor of one battle in a dense list indexed by
actor id. The interpreter and schedulers read from it; only the narrow
mutation entry points below change actors or append events.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from tunnel_fight.core.exceptions import CombatError
from tunnel_fight.models.actors import Actor
from tunnel_fight.models.enums import Side, Zone
from tunnel_fight.models.events import ActorSnapshot, CombatEvent, CombatResult


class BattleState:
    """Mutable state of a single battle.

    Attributes:
        actors: The roster; ``actors[i].id == i``.
        round: Current round number (0 before the first round).
        events: Chronological event log.
    """

    def __init__(self, actors: Sequence[Actor]) -> None:
        """Initialize the battle state.

        Args:
            actors: Roster whose ids are 0..n-1 in order.

        Raises:
            CombatError: If actor ids do not match their positions.
        """
        for position, actor in enumerate(actors):
            if actor.id != position:
                raise CombatError(
                    "Actor ids must match roster positions",
                    actor_id=actor.id,
                    details={"position": position},
                )
        self._actors: list[Actor] = list(actors)
        self.round = 0
        self.events: list[CombatEvent] = []

    @property
    def actors(self) -> Sequence[Actor]:
        """Get the roster (read-only view)."""
        return tuple(self._actors)

    def get(self, actor_id: int) -> Actor:
        """Look up an actor by id.

        Raises:
            CombatError: If no actor has this id.
        """
        if not 0 <= actor_id < len(self._actors):
            raise CombatError("Unknown actor", actor_id=actor_id, round_number=self.round)
        return self._actors[actor_id]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def living(self, side: Side | None = None) -> Iterator[Actor]:
        """Iterate living actors in roster order, optionally for one side."""
        for actor in self._actors:
            if actor.is_alive and (side is None or actor.side is side):
                yield actor

    def enemies_of(self, actor: Actor) -> list[Actor]:
        """Get living actors on the other side, in roster order."""
        return list(self.living(actor.side.opposite))

    def allies_of(self, actor: Actor) -> list[Actor]:
        """Get living actors on the same side, excluding actor itself."""
        return [a for a in self.living(actor.side) if a.id != actor.id]

    def occupancy(self, zone: Zone, *, excluding: int | None = None) -> int:
        """Count living actors in a zone, optionally ignoring one actor."""
        return sum(1 for a in self.living() if a.zone is zone and a.id != excluding)

    def has_living_enemy_in(self, zone: Zone, side: Side) -> bool:
        """Check whether a living opponent of side stands in zone."""
        return any(a.zone is zone for a in self.living(side.opposite))

    def side_alive(self, side: Side) -> bool:
        """Check whether a side still has a living actor."""
        return any(True for _ in self.living(side))

    @property
    def is_over(self) -> bool:
        """Check whether either side has been wiped out."""
        return not (self.side_alive(Side.SIDE1) and self.side_alive(Side.SIDE2))

    @property
    def winner(self) -> Side | None:
        """Get the only side left standing, if exactly one is."""
        side1 = self.side_alive(Side.SIDE1)
        side2 = self.side_alive(Side.SIDE2)
        if side1 and not side2:
            return Side.SIDE1
        if side2 and not side1:
            return Side.SIDE2
        return None

    # -------------------------------------------------------------------------
    # Mutation entry points
    # -------------------------------------------------------------------------

    def apply_move(self, actor_id: int, zone: Zone) -> None:
        """Place an actor in a new zone."""
        self.get(actor_id).zone = zone

    def apply_damage(self, actor_id: int, amount: int) -> bool:
        """Subtract hit points from an actor.

        Returns:
            True if this damage killed the actor.
        """
        actor = self.get(actor_id)
        was_alive = actor.is_alive
        actor.current_hp -= amount
        return was_alive and not actor.is_alive

    def record(self, event: CombatEvent) -> None:
        """Append an event to the log."""
        self.events.append(event)

    def snapshot(self) -> tuple[ActorSnapshot, ...]:
        """Capture the final state of every actor."""
        return tuple(
            ActorSnapshot(
                id=a.id,
                name=a.name,
                side=a.side,
                max_hp=a.max_hp,
                final_hp=a.current_hp,
                alive=a.is_alive,
                zone=a.zone,
            )
            for a in self._actors
        )

    def to_result(self) -> CombatResult:
        """Freeze the battle into a CombatResult."""
        return CombatResult(
            winner=self.winner,
            rounds=self.round,
            events=tuple(self.events),
            final_state=self.snapshot(),
        )


__all__ = ["BattleState"]
