"""Actor templates and runtime actors.

An ActorTemplate is the immutable description loaded from an encounter.
An Actor is the mutable per-battle instance derived from it; only combat
resolution changes it (hit points on a hit, zone on a move).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tunnel_fight.core.constants import DEFAULT_SPEED
from tunnel_fight.core.exceptions import DiceParseError
from tunnel_fight.models.dice import (
    DiceExpression,
    HitPointValue,
    parse_dice,
    resolve_hit_points,
)
from tunnel_fight.models.enums import Side, StartingZone, WeaponRange, Zone
from tunnel_fight.models.rules import RuleEntry
from tunnel_fight.models.zones import starting_zone


if TYPE_CHECKING:
    from random import Random


class ActorTemplate(BaseModel):
    """Immutable definition of a combatant.

    Attributes:
        name: Display name.
        hp: Fixed hit points or dice text (e.g. '2d8+2').
        ac: Armor class an attack roll must meet.
        attack_bonus: Added to the d20 attack roll.
        damage: Damage dice rolled on a hit.
        speed: Zones moved per turn.
        range: Weapon range class.
        start_zone: Deployment zone relative to the actor's side.
        initiative_modifier: Added to initiative rolls.
        apl: Rule program; empty means the built-in default program.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100, description="Display name")
    hp: int | str = Field(description="Hit points (values below 1 resolve to 1)")
    ac: int = Field(description="Armor class")
    attack_bonus: int = Field(description="Attack roll bonus")
    damage: DiceExpression = Field(description="Damage dice")
    speed: Annotated[int, Field(ge=0)] = Field(default=DEFAULT_SPEED, description="Zones per turn")
    range: WeaponRange = Field(default=WeaponRange.MELEE, description="Weapon range")
    start_zone: StartingZone = Field(default=StartingZone.RANGED, description="Deployment zone")
    initiative_modifier: int = Field(default=0, description="Initiative bonus")
    apl: tuple[RuleEntry, ...] = Field(default=(), description="Rule program")

    @field_validator("damage", mode="before")
    @classmethod
    def parse_damage(cls, value: Any) -> Any:
        """Parse damage dice text at load time.

        Raises:
            ValueError: If the text is not valid dice notation.
        """
        if isinstance(value, str):
            try:
                return parse_dice(value)
            except DiceParseError as exc:
                raise ValueError(str(exc)) from exc
        return value

    @field_validator("apl", mode="before")
    @classmethod
    def default_empty_program(cls, value: Any) -> Any:
        """Treat an explicit null program as empty."""
        return () if value is None else value


@dataclass
class Actor:
    """A combatant's state for the duration of one battle.

    Attributes:
        id: Index in the battle roster.
        name: Display name.
        side: Owning side.
        max_hp: Starting hit points.
        current_hp: Remaining hit points (may go negative).
        ac: Armor class.
        attack_bonus: Attack roll bonus.
        damage: Damage dice.
        speed: Zones moved per turn.
        range: Weapon range class.
        zone: Current zone.
        initiative_modifier: Added to initiative rolls.
        rules: Compiled rule program (possibly empty).
    """

    id: int
    name: str
    side: Side
    max_hp: int
    current_hp: int
    ac: int
    attack_bonus: int
    damage: DiceExpression
    speed: int
    range: WeaponRange
    zone: Zone
    initiative_modifier: int = 0
    rules: tuple[RuleEntry, ...] = ()

    @classmethod
    def from_template(
        cls,
        actor_id: int,
        template: ActorTemplate,
        side: Side,
        rng: Random,
    ) -> Actor:
        """Create a runtime actor, rolling its hit points.

        Args:
            actor_id: Roster index for the new actor.
            template: Definition to instantiate.
            side: Side the actor fights for.
            rng: Random source for hit-point dice.

        Returns:
            A fresh Actor at full health in its starting zone.
        """
        hp = resolve_hit_points(template.hp, rng)
        return cls(
            id=actor_id,
            name=template.name,
            side=side,
            max_hp=hp,
            current_hp=hp,
            ac=template.ac,
            attack_bonus=template.attack_bonus,
            damage=template.damage,
            speed=template.speed,
            range=template.range,
            zone=starting_zone(side, template.start_zone),
            initiative_modifier=template.initiative_modifier,
            rules=template.apl,
        )

    @property
    def is_alive(self) -> bool:
        """Check if the actor still has hit points."""
        return self.current_hp > 0

    @property
    def hp_percent(self) -> float:
        """Get current HP as a percentage of maximum."""
        return self.current_hp / self.max_hp * 100.0

    def distance_to(self, other: Actor) -> int:
        """Count the zones between this actor and another."""
        return self.zone.distance_to(other.zone)

    def can_attack(self, target: Actor) -> bool:
        """Check whether target is within this actor's weapon range."""
        return self.distance_to(target) <= self.range.max_distance


__all__ = [
    "ActorTemplate",
    "Actor",
    "HitPointValue",
]
