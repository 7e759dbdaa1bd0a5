"""Zone movement and entry legality.

Two legality rules exist. The basic rule only checks zone capacity. The
contested rule, used whenever phases are enabled, also forbids entering a
zone held by a living enemy, so actors cannot walk through contested
ground.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tunnel_fight.engine.plans import MovePlan, MoveTarget
from tunnel_fight.models.events import MoveEvent
from tunnel_fight.models.zones import ZoneCapacities, backward_zone, forward_zone


if TYPE_CHECKING:
    from tunnel_fight.engine.state import BattleState
    from tunnel_fight.models.actors import Actor
    from tunnel_fight.models.enums import Zone


@dataclass(frozen=True)
class MovementRules:
    """Entry legality for one battle.

    Attributes:
        capacities: Per-zone occupancy limits.
        contested: Also refuse zones occupied by living enemies.
    """

    capacities: ZoneCapacities
    contested: bool = False

    def can_enter(self, state: BattleState, zone: Zone, actor: Actor) -> bool:
        """Check whether actor may step into zone right now."""
        capacity = self.capacities.capacity_for(zone)
        if capacity is not None and state.occupancy(zone, excluding=actor.id) >= capacity:
            return False
        if self.contested and state.has_living_enemy_in(zone, actor.side):
            return False
        return True

    def destination_for(self, state: BattleState, actor: Actor, plan: MovePlan) -> Zone:
        """Resolve a move plan into the zone the actor is heading for."""
        if plan.target is MoveTarget.FORWARD:
            return forward_zone(actor.side)
        if plan.target is MoveTarget.BACKWARD:
            return backward_zone(actor.side)
        if plan.target is MoveTarget.ZONE and plan.zone is not None:
            return plan.zone
        if plan.actor_id is not None:
            return state.get(plan.actor_id).zone
        return actor.zone

    def move(self, state: BattleState, actor: Actor, plan: MovePlan) -> MoveEvent | None:
        """Walk actor toward its destination, up to its speed.

        Each step enters the next zone toward the destination if legal;
        the first illegal step ends the move. A zone change is applied to
        the state immediately and logged as one MoveEvent.

        Returns:
            The recorded MoveEvent, or None if the actor did not move.
        """
        destination = self.destination_for(state, actor, plan)
        origin = actor.zone
        current = origin
        for _ in range(actor.speed):
            step = current.toward(destination)
            if step is None or not self.can_enter(state, step, actor):
                break
            current = step

        if current is origin:
            return None

        state.apply_move(actor.id, current)
        event = MoveEvent(
            round=state.round,
            actor_id=actor.id,
            actor_name=actor.name,
            from_zone=origin,
            to_zone=current,
        )
        state.record(event)
        return event


__all__ = ["MovementRules"]
