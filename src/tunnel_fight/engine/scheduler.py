"""Turn scheduling and initiative.

A scheduler produces the order of actions for one round as a lazy
sequence of TurnSteps. A side's shuffle is drawn only when that side is
about to act, after earlier actions have consumed randomness and possibly
killed actors; the engine stops pulling steps once the battle is decided.

Four interchangeable variants exist, selected once per battle:

| Mode              | Ordering                                   | Steps               |
|-------------------|--------------------------------------------|---------------------|
| side              | coin flip for first side, shuffle per side | full turn           |
| individual        | initiative roll, descending                | full turn           |
| side_phases       | coin flip, shuffle per side per phase      | move or attack only |
| individual_phases | one initiative order reused every phase    | move or attack only |
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
from functools import cmp_to_key
from typing import TYPE_CHECKING

from tunnel_fight.core.exceptions import SchedulingError
from tunnel_fight.models.enums import InitiativeType, Phase, Side


if TYPE_CHECKING:
    from random import Random

    from tunnel_fight.engine.state import BattleState
    from tunnel_fight.models.dice import DiceExpression
    from tunnel_fight.models.encounter import InitiativeConfig


class StepKind(StrEnum):
    """Which portion of a turn a step executes."""

    FULL = "full"
    MOVE = "move"
    ATTACK = "attack"


@dataclass(frozen=True)
class TurnStep:
    """One actor acting once within a round.

    Attributes:
        actor_id: Acting actor.
        kind: Full turn, movement only, or attack only.
        phase: Phase the step belongs to, for phased modes.
    """

    actor_id: int
    kind: StepKind
    phase: Phase | None = None


def coin_flip(rng: Random) -> bool:
    """Draw a fair boolean."""
    return rng.random() < 0.5


def first_side(rng: Random) -> Side:
    """Pick which side acts first this round."""
    return Side.SIDE1 if coin_flip(rng) else Side.SIDE2


def shuffled_side(state: BattleState, side: Side, rng: Random) -> list[int]:
    """Get the living actors of a side in a fresh random order."""
    order = [a.id for a in state.living(side)]
    rng.shuffle(order)
    return order


def initiative_order(state: BattleState, dice: DiceExpression, rng: Random) -> list[int]:
    """Roll initiative for every living actor and sort highest first.

    Each actor rolls the initiative dice plus its own modifier, in roster
    order. Equal rolls are settled by a fresh coin flip every time the
    sort compares them.

    Returns:
        Actor ids in acting order.
    """
    rolls = [(a.id, dice.roll(rng) + a.initiative_modifier) for a in state.living()]

    def compare(left: tuple[int, int], right: tuple[int, int]) -> int:
        if left[1] != right[1]:
            return -1 if left[1] > right[1] else 1
        return -1 if coin_flip(rng) else 1

    rolls.sort(key=cmp_to_key(compare))
    return [actor_id for actor_id, _ in rolls]


def _phase_step(state: BattleState, actor_id: int, phase: Phase) -> TurnStep | None:
    """Build the step for actor in phase, or None if the phase excludes it."""
    if phase is Phase.MOVEMENT:
        return TurnStep(actor_id, StepKind.MOVE, phase)
    if state.get(actor_id).range is phase.weapon_range:
        return TurnStep(actor_id, StepKind.ATTACK, phase)
    return None


class Scheduler(ABC):
    """Produces the steps of a round.

    Attributes:
        contested_movement: Whether movement must avoid enemy-held zones.
    """

    contested_movement: bool = False

    @abstractmethod
    def steps(self, state: BattleState, rng: Random) -> Iterator[TurnStep]:
        """Yield this round's steps in execution order."""


class SideScheduler(Scheduler):
    """Basic side initiative: each actor takes a full turn with its side."""

    def steps(self, state: BattleState, rng: Random) -> Iterator[TurnStep]:
        first = first_side(rng)
        for side in (first, first.opposite):
            for actor_id in shuffled_side(state, side, rng):
                yield TurnStep(actor_id, StepKind.FULL)


class IndividualScheduler(Scheduler):
    """Individual initiative: everyone takes a full turn in initiative order."""

    def __init__(self, dice: DiceExpression) -> None:
        self.dice = dice

    def steps(self, state: BattleState, rng: Random) -> Iterator[TurnStep]:
        for actor_id in initiative_order(state, self.dice, rng):
            yield TurnStep(actor_id, StepKind.FULL)


class SidePhaseScheduler(Scheduler):
    """Side initiative split into phases.

    Each phase is played by the first side and then the second, each side
    freshly shuffled for every phase. Only the movement phase moves, and
    each attack phase only lets actors with the matching weapon range act.
    """

    contested_movement = True

    def __init__(self, phases: Sequence[Phase]) -> None:
        self.phases = tuple(phases)

    def steps(self, state: BattleState, rng: Random) -> Iterator[TurnStep]:
        first = first_side(rng)
        for phase in self.phases:
            for side in (first, first.opposite):
                for actor_id in shuffled_side(state, side, rng):
                    step = _phase_step(state, actor_id, phase)
                    if step is not None:
                        yield step


class IndividualPhaseScheduler(Scheduler):
    """Individual initiative split into phases.

    Initiative is rolled once per round; every phase walks that same order.
    """

    contested_movement = True

    def __init__(self, dice: DiceExpression, phases: Sequence[Phase]) -> None:
        self.dice = dice
        self.phases = tuple(phases)

    def steps(self, state: BattleState, rng: Random) -> Iterator[TurnStep]:
        order = initiative_order(state, self.dice, rng)
        for phase in self.phases:
            for actor_id in order:
                step = _phase_step(state, actor_id, phase)
                if step is not None:
                    yield step


def create_scheduler(initiative: InitiativeConfig) -> Scheduler:
    """Build the scheduler for an encounter's initiative configuration.

    Raises:
        SchedulingError: If the initiative mode is not supported.
    """
    mode = initiative.initiative_type
    if mode is InitiativeType.SIDE:
        scheduler: Scheduler = SideScheduler()
    elif mode is InitiativeType.INDIVIDUAL:
        scheduler = IndividualScheduler(initiative.initiative_dice)
    elif mode is InitiativeType.SIDE_PHASES:
        scheduler = SidePhaseScheduler(initiative.phases)
    elif mode is InitiativeType.INDIVIDUAL_PHASES:
        scheduler = IndividualPhaseScheduler(initiative.initiative_dice, initiative.phases)
    else:
        raise SchedulingError(
            f"Unsupported initiative mode: {mode}",
            details={"initiative_type": str(mode)},
        )

    return scheduler


__all__ = [
    "StepKind",
    "TurnStep",
    "coin_flip",
    "first_side",
    "shuffled_side",
    "initiative_order",
    "Scheduler",
    "SideScheduler",
    "IndividualScheduler",
    "SidePhaseScheduler",
    "IndividualPhaseScheduler",
    "create_scheduler",
]
