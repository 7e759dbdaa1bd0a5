"""Encounter loading from YAML documents.

Turns encounter YAML text into a validated Encounter. All failures
(malformed YAML, wrong document shape, schema violations) surface as a
single EncounterError carrying the underlying message.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tunnel_fight.core.constants import MIN_HIT_POINTS
from tunnel_fight.core.exceptions import DiceParseError, EncounterError
from tunnel_fight.core.logging import get_logger
from tunnel_fight.models.dice import parse_dice
from tunnel_fight.models.encounter import Encounter
from tunnel_fight.models.enums import Side


logger = get_logger(__name__)


def _fallback_hp(encounter: Encounter) -> tuple[list[str], list[str]]:
    """Get names of actors whose HP will fall back to the minimum.

    Returns:
        Actors with unparseable HP dice, and actors with a fixed HP
        below the minimum.
    """
    unparseable: list[str] = []
    too_low: list[str] = []
    for side in (Side.SIDE1, Side.SIDE2):
        for template in encounter.roster(side):
            if isinstance(template.hp, int):
                if template.hp < MIN_HIT_POINTS:
                    too_low.append(template.name)
                continue
            try:
                parse_dice(template.hp)
            except DiceParseError:
                unparseable.append(template.name)
    return unparseable, too_low


def parse_encounter(data: Any, *, source: str | None = None) -> Encounter:
    """Validate an already-decoded encounter document.

    Args:
        data: Mapping decoded from YAML or JSON.
        source: Where the document came from, for error reporting.

    Returns:
        The validated Encounter.

    Raises:
        EncounterError: If the document is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise EncounterError(
            "Encounter document must be a mapping",
            source=source,
            details={"type": type(data).__name__},
        )

    try:
        encounter = Encounter.model_validate(data)
    except ValidationError as exc:
        raise EncounterError(
            f"Invalid encounter: {exc}",
            source=source,
            details={"error_count": exc.error_count()},
        ) from exc

    unparseable, too_low = _fallback_hp(encounter)
    if unparseable:
        logger.warning("Unparseable HP dice will default to 1", actors=unparseable)
    if too_low:
        logger.warning("Non-positive HP will default to 1", actors=too_low)

    return encounter


def load_encounter(text: str, *, source: str | None = None) -> Encounter:
    """Parse and validate encounter YAML.

    Args:
        text: YAML document text.
        source: Where the text came from, for error reporting.

    Returns:
        The validated Encounter.

    Raises:
        EncounterError: If the YAML is malformed or the encounter is invalid.

    Example:
        >>> encounter = load_encounter('''
        ... side1:
        ...   - {name: Fighter, hp: 20, ac: 16, attack_bonus: 5, damage: 1d8+3}
        ... side2:
        ...   - {name: Goblin, hp: 7, ac: 13, attack_bonus: 4, damage: 1d6+2}
        ... ''')
        >>> len(encounter.side1)
        1
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise EncounterError(f"Invalid YAML: {exc}", source=source) from exc

    return parse_encounter(data, source=source)


def load_encounter_file(path: str | Path) -> Encounter:
    """Load an encounter from a YAML file.

    Raises:
        EncounterError: If the file cannot be read or its content is invalid.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EncounterError(
            f"Cannot read encounter file: {exc}",
            source=str(file_path),
        ) from exc

    logger.debug("Loaded encounter file", path=str(file_path), size=len(text))
    return load_encounter(text, source=str(file_path))


__all__ = [
    "parse_encounter",
    "load_encounter",
    "load_encounter_file",
]
