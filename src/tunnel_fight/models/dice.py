"""Dice expressions and hit-point values.

Dice notation is narrow: ``NdM``, ``NdM+K`` or ``NdM-K``.
Every roll draws from an explicitly passed ``random.Random`` so that a
seeded stream reproduces a whole simulation batch exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tunnel_fight.core.constants import MIN_DAMAGE, MIN_HIT_POINTS
from tunnel_fight.core.exceptions import DiceParseError


if TYPE_CHECKING:
    from random import Random


_DICE_PATTERN = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")

HitPointValue = int | str
"""Fixed hit points, or dice text rolled once per actor per battle."""


@dataclass(frozen=True)
class DiceExpression:
    """A parsed ``NdM+K`` dice expression.

    Attributes:
        count: Number of dice rolled.
        sides: Faces per die.
        modifier: Flat amount added to the sum.
    """

    count: int
    sides: int
    modifier: int = 0

    def roll(self, rng: Random) -> int:
        """Roll the dice, add the modifier, and floor the total at zero.

        Args:
            rng: Random source to draw from.

        Returns:
            The rolled total (never negative).
        """
        total = self.modifier
        for _ in range(self.count):
            total += rng.randint(1, self.sides)
        return max(MIN_DAMAGE, total)

    @property
    def expected_value(self) -> float:
        """Get the mean of an unfloored roll."""
        return self.count * (self.sides + 1) / 2 + self.modifier

    def __str__(self) -> str:
        if self.modifier == 0:
            return f"{self.count}d{self.sides}"
        return f"{self.count}d{self.sides}{self.modifier:+d}"


def parse_dice(text: str) -> DiceExpression:
    """Parse dice notation.

    Args:
        text: Expression such as '1d8', '3d6+2' or '2d4-1' (case-insensitive).

    Returns:
        The parsed DiceExpression.

    Raises:
        DiceParseError: If the text is not valid ``NdM[+K|-K]`` notation.

    Example:
        >>> parse_dice("3d6+2")
        DiceExpression(count=3, sides=6, modifier=2)
    """
    if not isinstance(text, str):
        raise DiceParseError("Dice expression must be a string", expression=repr(text))

    match = _DICE_PATTERN.match(text.strip().lower())
    if match is None:
        raise DiceParseError("Invalid dice format: expected NdM[+K|-K]", expression=text)

    count = int(match.group(1))
    sides = int(match.group(2))
    modifier = int(match.group(3) or 0)
    if sides < 1:
        raise DiceParseError("Dice must have at least one side", expression=text)

    return DiceExpression(count=count, sides=sides, modifier=modifier)


def parse_dice_or_default(text: str, default: DiceExpression) -> DiceExpression:
    """Parse dice notation, substituting default when the text is malformed."""
    try:
        return parse_dice(text)
    except DiceParseError:
        return default


def resolve_hit_points(value: HitPointValue, rng: Random) -> int:
    """Turn a hit-point value into a concrete starting HP.

    Dice text that fails to parse resolves to the minimum without
    consuming any randomness.

    Args:
        value: Fixed HP or dice text.
        rng: Random source for dice values.

    Returns:
        Starting hit points (at least 1).
    """
    if isinstance(value, int):
        return max(MIN_HIT_POINTS, value)
    try:
        dice = parse_dice(value)
    except DiceParseError:
        return MIN_HIT_POINTS
    return max(MIN_HIT_POINTS, dice.roll(rng))


def expected_hit_points(value: HitPointValue) -> float:
    """Get the average starting HP for a hit-point value."""
    if isinstance(value, int):
        return float(max(MIN_HIT_POINTS, value))
    try:
        dice = parse_dice(value)
    except DiceParseError:
        return float(MIN_HIT_POINTS)
    return max(float(MIN_HIT_POINTS), dice.expected_value)


__all__ = [
    "DiceExpression",
    "HitPointValue",
    "parse_dice",
    "parse_dice_or_default",
    "resolve_hit_points",
    "expected_hit_points",
]
