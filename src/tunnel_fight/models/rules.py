"""Rule program (APL) schema.

An actor's rule program is an ordered list of entries such as::

    - action: attack
      if: enemy.in_range
      target: lowest_hp_enemy
    - action: move
      target: nearest_enemy

The text of each entry is compiled exactly once, when the encounter is
validated, into closed variants (ActionKind, Condition, TargetKind). The
vocabulary is fixed and fail-open: unrecognized conditions evaluate
true, unrecognized targets mean the nearest enemy, and unrecognized
actions are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionKind(StrEnum):
    """What a rule entry asks the actor to do."""

    ATTACK = "attack"
    MOVE = "move"
    UNKNOWN = "unknown"


class ConditionKind(StrEnum):
    """Compiled shape of a condition expression."""

    ALWAYS = "always"
    NEVER = "never"
    ENEMY_IN_RANGE = "enemy_in_range"
    NO_ENEMY_IN_RANGE = "no_enemy_in_range"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    UNRECOGNIZED = "unrecognized"


class NumericAttribute(StrEnum):
    """Quantities a comparison condition may test."""

    HP_PERCENT = "hp_percent"
    HP = "hp"
    ENEMY_COUNT = "enemy_count"
    ALLY_COUNT = "ally_count"


class TargetKind(StrEnum):
    """Compiled target selector."""

    NEAREST = "nearest"
    LOWEST_HP = "lowest_hp"
    RANDOM = "random"
    FORWARD = "forward"
    BACKWARD = "backward"
    UNRECOGNIZED = "unrecognized"


_ACTION_WORDS: dict[str, ActionKind] = {
    "attack": ActionKind.ATTACK,
    "move": ActionKind.MOVE,
}

_ENEMY_IN_RANGE_WORDS = frozenset({"enemy.in_range", "enemy_in_range"})
_NO_ENEMY_IN_RANGE_WORDS = frozenset({"!enemy.in_range", "!enemy_in_range", "not enemy.in_range"})

_ATTRIBUTE_WORDS: dict[str, NumericAttribute] = {
    "self.health_percent": NumericAttribute.HP_PERCENT,
    "self.hp_percent": NumericAttribute.HP_PERCENT,
    "self.hp": NumericAttribute.HP,
    "self.health": NumericAttribute.HP,
    "enemy.count": NumericAttribute.ENEMY_COUNT,
    "ally.count": NumericAttribute.ALLY_COUNT,
}

_TARGET_WORDS: dict[str, TargetKind] = {
    "nearest_enemy": TargetKind.NEAREST,
    "nearest": TargetKind.NEAREST,
    "lowest_hp_enemy": TargetKind.LOWEST_HP,
    "lowest_hp": TargetKind.LOWEST_HP,
    "weakest": TargetKind.LOWEST_HP,
    "random_enemy": TargetKind.RANDOM,
    "random": TargetKind.RANDOM,
    "forward": TargetKind.FORWARD,
    "backward": TargetKind.BACKWARD,
}


@dataclass(frozen=True)
class Condition:
    """A compiled condition expression.

    Attributes:
        kind: Which test to perform.
        attribute: Quantity compared, for LESS_THAN / GREATER_THAN.
        threshold: Right-hand operand of a comparison.
        text: The source text, kept for diagnostics.
    """

    kind: ConditionKind
    attribute: NumericAttribute | None = None
    threshold: float = 0.0
    text: str = ""


ALWAYS = Condition(ConditionKind.ALWAYS, text="true")


def _parse_threshold(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


def _scalar_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_condition(text: str | None) -> Condition:
    """Compile condition text into a Condition.

    Args:
        text: Condition expression, or None for "always".

    Returns:
        The compiled Condition. Never raises; anything outside the
        grammar becomes an UNRECOGNIZED condition that holds.
    """
    if text is None:
        return ALWAYS

    source = text
    text = text.strip().lower()

    if text in ("", "true"):
        return Condition(ConditionKind.ALWAYS, text=source)
    if text == "false":
        return Condition(ConditionKind.NEVER, text=source)
    if text in _ENEMY_IN_RANGE_WORDS:
        return Condition(ConditionKind.ENEMY_IN_RANGE, text=source)
    if text in _NO_ENEMY_IN_RANGE_WORDS:
        return Condition(ConditionKind.NO_ENEMY_IN_RANGE, text=source)

    # '<' wins when both operators appear
    if "<" in text:
        operator, kind = "<", ConditionKind.LESS_THAN
    elif ">" in text:
        operator, kind = ">", ConditionKind.GREATER_THAN
    else:
        return Condition(ConditionKind.UNRECOGNIZED, text=source)

    parts = text.split(operator)
    if len(parts) != 2:
        return Condition(ConditionKind.UNRECOGNIZED, text=source)

    attribute = _ATTRIBUTE_WORDS.get(parts[0].strip())
    if attribute is None:
        return Condition(ConditionKind.UNRECOGNIZED, text=source)

    return Condition(
        kind,
        attribute=attribute,
        threshold=_parse_threshold(parts[1]),
        text=source,
    )


def compile_target(text: str | None) -> TargetKind | None:
    """Compile target text into a TargetKind (None when omitted)."""
    if text is None:
        return None
    return _TARGET_WORDS.get(text.strip().lower(), TargetKind.UNRECOGNIZED)


def compile_action(text: str) -> ActionKind:
    """Compile action text into an ActionKind."""
    return _ACTION_WORDS.get(text.strip().lower(), ActionKind.UNKNOWN)


class RuleEntry(BaseModel):
    """One line of a rule program.

    Attributes:
        action: Action kind this entry fills.
        condition: When the entry applies (YAML key ``if``).
        target: Target selector; None uses the nearest enemy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    action: ActionKind = Field(description="attack | move")
    condition: Condition = Field(default=ALWAYS, alias="if", description="Condition expression")
    target: TargetKind | None = Field(default=None, description="Target selector")

    @field_validator("action", mode="before")
    @classmethod
    def compile_action_text(cls, value: Any) -> Any:
        """Compile raw action text, mapping unknown words to UNKNOWN."""
        if isinstance(value, ActionKind):
            return value
        text = _scalar_text(value)
        return compile_action(text) if text is not None else ActionKind.UNKNOWN

    @field_validator("condition", mode="before")
    @classmethod
    def compile_condition_text(cls, value: Any) -> Any:
        """Compile a raw condition scalar (None means always).

        YAML turns unquoted ``true``, ``false`` and numbers into
        non-string scalars; they are compiled from their text form.
        """
        if isinstance(value, Condition):
            return value
        return compile_condition(_scalar_text(value))

    @field_validator("target", mode="before")
    @classmethod
    def compile_target_text(cls, value: Any) -> Any:
        """Compile raw target text, mapping unknown words to UNRECOGNIZED."""
        if isinstance(value, TargetKind):
            return value
        return compile_target(_scalar_text(value))


DEFAULT_PROGRAM: tuple[RuleEntry, ...] = (
    RuleEntry(
        action=ActionKind.ATTACK,
        condition=Condition(ConditionKind.ENEMY_IN_RANGE, text="enemy.in_range"),
        target=TargetKind.NEAREST,
    ),
    RuleEntry(action=ActionKind.MOVE, target=TargetKind.NEAREST),
)
"""Program used by actors whose template defines none."""


__all__ = [
    "ActionKind",
    "ConditionKind",
    "NumericAttribute",
    "TargetKind",
    "Condition",
    "ALWAYS",
    "compile_condition",
    "compile_target",
    "compile_action",
    "RuleEntry",
    "DEFAULT_PROGRAM",
]
