"""Encounter description: the full input of a simulation batch."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from tunnel_fight.core.constants import DEFAULT_INITIATIVE_DICE, DEFAULT_ITERATIONS
from tunnel_fight.models.actors import ActorTemplate
from tunnel_fight.models.dice import DiceExpression, parse_dice, parse_dice_or_default
from tunnel_fight.models.enums import DEFAULT_PHASES, InitiativeType, Phase, Side
from tunnel_fight.models.zones import ZoneCapacities


FALLBACK_INITIATIVE_DICE: DiceExpression = parse_dice(DEFAULT_INITIATIVE_DICE)


class InitiativeConfig(BaseModel):
    """How actions are ordered within a round.

    Attributes:
        initiative_type: Scheduling algorithm (YAML key ``type``).
        dice: Initiative dice text; malformed text falls back to 1d20.
        phases: Phase sequence for the phased modes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    initiative_type: InitiativeType = Field(
        default=InitiativeType.SIDE,
        alias="type",
        description="Initiative mode",
    )
    dice: str = Field(default=DEFAULT_INITIATIVE_DICE, description="Initiative dice")
    phases: tuple[Phase, ...] = Field(default=DEFAULT_PHASES, description="Phase order")

    @property
    def initiative_dice(self) -> DiceExpression:
        """Get the parsed initiative dice, or 1d20 if the text is malformed."""
        return parse_dice_or_default(self.dice, FALLBACK_INITIATIVE_DICE)


class Encounter(BaseModel):
    """Two rosters plus the rules of engagement.

    Attributes:
        name: Optional encounter title.
        side1: Templates fighting for side 1, in roster order.
        side2: Templates fighting for side 2, in roster order.
        iterations: Number of battles to simulate.
        zone_capacity: Occupancy limits per zone.
        initiative: Turn ordering configuration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = Field(default=None, description="Encounter name")
    side1: tuple[ActorTemplate, ...] = Field(description="Side 1 roster")
    side2: tuple[ActorTemplate, ...] = Field(description="Side 2 roster")
    iterations: Annotated[int, Field(ge=0)] = Field(
        default=DEFAULT_ITERATIONS,
        description="Battles to simulate",
    )
    zone_capacity: ZoneCapacities = Field(default_factory=ZoneCapacities)
    initiative: InitiativeConfig = Field(default_factory=InitiativeConfig)

    def roster(self, side: Side) -> tuple[ActorTemplate, ...]:
        """Get the templates for one side."""
        return self.side1 if side is Side.SIDE1 else self.side2


__all__ = [
    "FALLBACK_INITIATIVE_DICE",
    "InitiativeConfig",
    "Encounter",
]
