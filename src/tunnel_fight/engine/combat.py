"""Combat engine: runs one battle from deployment to a terminal result.

The engine is the central coordinator for:
- Building the roster (side 1 then side 2, hit points rolled in order)
- The round loop and the round cap
- Executing scheduler steps (full turn, movement only, attack only)
- Attack resolution, deaths and victory detection

All randomness comes from the rng handed in, consumed strictly in
sequence, so a fixed seed reproduces the same event log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tunnel_fight.core.constants import ATTACK_DIE_SIDES, DEFAULT_MAX_ROUNDS
from tunnel_fight.engine.movement import MovementRules
from tunnel_fight.engine.rules import decide
from tunnel_fight.engine.scheduler import Scheduler, StepKind, TurnStep, create_scheduler
from tunnel_fight.engine.state import BattleState
from tunnel_fight.models.actors import Actor
from tunnel_fight.models.enums import Side
from tunnel_fight.models.events import AttackEvent, CombatResult, DeathEvent


if TYPE_CHECKING:
    from random import Random

    from tunnel_fight.models.encounter import Encounter


def build_roster(encounter: Encounter, rng: Random) -> list[Actor]:
    """Instantiate every template, side 1 first, ids counting from zero."""
    actors: list[Actor] = []
    for side in (Side.SIDE1, Side.SIDE2):
        for template in encounter.roster(side):
            actors.append(Actor.from_template(len(actors), template, side, rng))
    return actors


class CombatEngine:
    """Simulates a single battle.

    Attributes:
        state: The battle's actors, round counter and event log.
        scheduler: Turn ordering algorithm for this battle.
        movement: Zone entry rules for this battle.
        max_rounds: Round cap; reaching it ends the battle without a winner.
    """

    def __init__(
        self,
        encounter: Encounter,
        rng: Random,
        *,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Deploy the encounter's rosters.

        Args:
            encounter: Encounter to simulate.
            rng: Random source; hit points are rolled from it here.
            max_rounds: Round cap.
            scheduler: Prebuilt scheduler (built from the encounter if None).
        """
        self.state = BattleState(build_roster(encounter, rng))
        self.scheduler = scheduler or create_scheduler(encounter.initiative)
        self.movement = MovementRules(
            capacities=encounter.zone_capacity,
            contested=self.scheduler.contested_movement,
        )
        self.max_rounds = max_rounds

    def run(self, rng: Random) -> CombatResult:
        """Play rounds until one side is wiped out or the cap is reached.

        Args:
            rng: Random source for the whole battle.

        Returns:
            The battle's CombatResult.
        """
        state = self.state
        while not state.is_over and state.round < self.max_rounds:
            state.round += 1
            self.play_round(rng)
        return state.to_result()

    def play_round(self, rng: Random) -> None:
        """Execute one round, stopping as soon as the battle is decided."""
        for step in self.scheduler.steps(self.state, rng):
            self.execute(step, rng)
            if self.state.is_over:
                return

    def execute(self, step: TurnStep, rng: Random) -> None:
        """Execute one scheduler step; dead actors do nothing."""
        actor = self.state.get(step.actor_id)
        if not actor.is_alive:
            return
        if step.kind is StepKind.FULL:
            self.full_turn(actor, rng)
        elif step.kind is StepKind.MOVE:
            self.movement_only(actor, rng)
        else:
            self.attack_only(actor, rng)

    def full_turn(self, actor: Actor, rng: Random) -> None:
        """Move, then decide again from the new position and attack."""
        self.movement_only(actor, rng)
        self.attack_only(actor, rng)

    def movement_only(self, actor: Actor, rng: Random) -> None:
        """Decide and carry out the move half of a turn."""
        plan = decide(actor, self.state, rng)
        if plan.move is not None:
            self.movement.move(self.state, actor, plan.move)

    def attack_only(self, actor: Actor, rng: Random) -> None:
        """Decide and carry out the attack half of a turn."""
        plan = decide(actor, self.state, rng)
        if plan.attack is not None:
            self.resolve_attack(actor, plan.attack.target_id, rng)

    def resolve_attack(self, attacker: Actor, target_id: int, rng: Random) -> AttackEvent | None:
        """Roll an attack and apply its damage.

        The range check is repeated here; an out-of-range target is
        silently declined and nothing is logged.

        Returns:
            The recorded AttackEvent, or None if the attack was declined.
        """
        state = self.state
        target = state.get(target_id)
        if not attacker.can_attack(target):
            return None

        roll = rng.randint(1, ATTACK_DIE_SIDES) + attacker.attack_bonus
        hit = roll >= target.ac
        damage = attacker.damage.roll(rng) if hit else 0

        event = AttackEvent(
            round=state.round,
            actor_id=attacker.id,
            actor_name=attacker.name,
            target_id=target.id,
            target_name=target.name,
            roll=roll,
            target_ac=target.ac,
            hit=hit,
            damage=damage,
        )
        state.record(event)

        if hit and state.apply_damage(target.id, damage):
            state.record(
                DeathEvent(
                    round=state.round,
                    actor_id=target.id,
                    actor_name=target.name,
                    killer_id=attacker.id,
                )
            )
        return event


def run_battle(
    encounter: Encounter,
    rng: Random,
    *,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    scheduler: Scheduler | None = None,
) -> CombatResult:
    """Simulate one battle to completion.

    Example:
        >>> import random
        >>> result = run_battle(encounter, random.Random(42))
        >>> result.winner
        <Side.SIDE1: 'side1'>
    """
    engine = CombatEngine(encounter, rng, max_rounds=max_rounds, scheduler=scheduler)
    return engine.run(rng)


__all__ = [
    "build_roster",
    "CombatEngine",
    "run_battle",
]
