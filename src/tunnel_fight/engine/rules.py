"""Rule program interpreter.

Decides what an actor wants to do by scanning its compiled rule program
against the battle as it stands right now. Nothing is cached between
decisions: the engine asks once before moving and again after moving,
so the attack decision sees post-move positions.

Randomness (random target selection) is drawn from the rng passed in,
in program order, which keeps whole batches reproducible from a seed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tunnel_fight.engine.plans import AttackPlan, MovePlan, MoveTarget, TurnPlan
from tunnel_fight.models.rules import (
    DEFAULT_PROGRAM,
    ActionKind,
    Condition,
    ConditionKind,
    NumericAttribute,
    RuleEntry,
    TargetKind,
)


if TYPE_CHECKING:
    from random import Random

    from tunnel_fight.engine.state import BattleState
    from tunnel_fight.models.actors import Actor


class RuleContext:
    """What an actor can see at a decision point.

    Attributes:
        actor: The deciding actor.
        enemies: Living opponents in roster order.
        allies: Living teammates other than actor, in roster order.
    """

    def __init__(self, actor: Actor, state: BattleState) -> None:
        self.actor = actor
        self.enemies: list[Actor] = state.enemies_of(actor)
        self.allies: list[Actor] = state.allies_of(actor)

    @property
    def enemies_in_range(self) -> list[Actor]:
        """Get living enemies the actor could attack from where it stands."""
        return [e for e in self.enemies if self.actor.can_attack(e)]

    @property
    def has_enemy_in_range(self) -> bool:
        """Check whether any enemy is within weapon range."""
        return any(self.actor.can_attack(e) for e in self.enemies)

    def nearest(self, candidates: list[Actor]) -> Actor | None:
        """Pick the closest candidate; ties go to the first in roster order."""
        if not candidates:
            return None
        return min(candidates, key=self.actor.distance_to)

    @staticmethod
    def lowest_hp(candidates: list[Actor]) -> Actor | None:
        """Pick the candidate with the fewest current hit points."""
        if not candidates:
            return None
        return min(candidates, key=lambda a: a.current_hp)

    @staticmethod
    def random_choice(candidates: list[Actor], rng: Random) -> Actor | None:
        """Pick a uniformly random candidate."""
        if not candidates:
            return None
        return candidates[rng.randrange(len(candidates))]

    @property
    def nearest_enemy(self) -> Actor | None:
        return self.nearest(self.enemies)

    @property
    def lowest_hp_enemy(self) -> Actor | None:
        return self.lowest_hp(self.enemies)

    def random_enemy(self, rng: Random) -> Actor | None:
        return self.random_choice(self.enemies, rng)

    def select(self, target: TargetKind | None, candidates: list[Actor], rng: Random) -> Actor | None:
        """Apply a target selector to a candidate list.

        Anything other than lowest-HP or random (including forward,
        backward and unrecognized selectors) picks the nearest candidate.
        """
        if target is TargetKind.LOWEST_HP:
            return self.lowest_hp(candidates)
        if target is TargetKind.RANDOM:
            return self.random_choice(candidates, rng)
        return self.nearest(candidates)

    def numeric(self, attribute: NumericAttribute) -> float:
        """Read a numeric attribute for a comparison condition."""
        if attribute is NumericAttribute.HP_PERCENT:
            return self.actor.hp_percent
        if attribute is NumericAttribute.HP:
            return float(self.actor.current_hp)
        if attribute is NumericAttribute.ENEMY_COUNT:
            return float(len(self.enemies))
        return float(len(self.allies))


def evaluate_condition(condition: Condition, ctx: RuleContext) -> bool:
    """Evaluate a compiled condition; unrecognized conditions hold."""
    kind = condition.kind
    if kind is ConditionKind.NEVER:
        return False
    if kind is ConditionKind.ENEMY_IN_RANGE:
        return ctx.has_enemy_in_range
    if kind is ConditionKind.NO_ENEMY_IN_RANGE:
        return not ctx.has_enemy_in_range
    if condition.attribute is not None:
        value = ctx.numeric(condition.attribute)
        if kind is ConditionKind.LESS_THAN:
            return value < condition.threshold
        if kind is ConditionKind.GREATER_THAN:
            return value > condition.threshold
    return True


def _plan_move(entry: RuleEntry, ctx: RuleContext, rng: Random) -> MovePlan | None:
    if entry.target is TargetKind.FORWARD:
        return MovePlan(MoveTarget.FORWARD)
    if entry.target is TargetKind.BACKWARD:
        return MovePlan(MoveTarget.BACKWARD)
    target = ctx.select(entry.target, ctx.enemies, rng)
    return MovePlan.toward(target.id) if target is not None else None


def _plan_attack(entry: RuleEntry, ctx: RuleContext, rng: Random) -> AttackPlan | None:
    in_range = ctx.enemies_in_range
    if not in_range:
        return None
    target = ctx.select(entry.target, in_range, rng)
    return AttackPlan(target.id) if target is not None else None


def decide(actor: Actor, state: BattleState, rng: Random) -> TurnPlan:
    """Choose an actor's move and attack from its rule program.

    Entries are scanned in order. An entry whose condition fails is
    skipped; otherwise it fills its action kind if that half of the turn
    is still open. Attack entries need an enemy in range and only target
    enemies in range; move entries may target any living enemy. The scan
    stops as soon as both halves are filled.

    Args:
        actor: The deciding actor.
        state: Current battle state.
        rng: Random source for random target selection.

    Returns:
        The chosen TurnPlan (either half may be None).
    """
    ctx = RuleContext(actor, state)
    program = actor.rules or DEFAULT_PROGRAM

    move: MovePlan | None = None
    attack: AttackPlan | None = None

    for entry in program:
        if not evaluate_condition(entry.condition, ctx):
            continue

        if entry.action is ActionKind.ATTACK and attack is None:
            attack = _plan_attack(entry, ctx, rng)
        elif entry.action is ActionKind.MOVE and move is None:
            move = _plan_move(entry, ctx, rng)

        if move is not None and attack is not None:
            break

    return TurnPlan(move=move, attack=attack)


__all__ = [
    "RuleContext",
    "evaluate_condition",
    "decide",
]
