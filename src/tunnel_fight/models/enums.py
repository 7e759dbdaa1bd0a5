"""Enumeration types for the Tunnel Fight simulator.

This module defines the closed vocabularies of the battlefield: sides,
the six-zone track, weapon reach, starting positions, initiative modes
and phases. Values are the snake_case spellings used in encounter YAML.
"""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """One of the two opposing rosters."""

    SIDE1 = "side1"
    SIDE2 = "side2"

    @property
    def opposite(self) -> Side:
        """Get the opposing side."""
        return Side.SIDE2 if self is Side.SIDE1 else Side.SIDE1

    @property
    def display_name(self) -> str:
        """Get human-readable side name (e.g., 'Side1')."""
        return self.value.capitalize()


class Zone(StrEnum):
    """A position on the fixed six-zone battle line.

    Declaration order is the track order: side 1's ranged zone at one end,
    side 2's ranged zone at the other, the two melee zones touching in the
    middle.
    """

    SIDE1_RANGED = "side1_ranged"
    SIDE1_REACH = "side1_reach"
    SIDE1_MELEE = "side1_melee"
    SIDE2_MELEE = "side2_melee"
    SIDE2_REACH = "side2_reach"
    SIDE2_RANGED = "side2_ranged"

    @property
    def position(self) -> int:
        """Get the zone's position on the track (0-5)."""
        return _ZONE_POSITION[self]

    @property
    def side(self) -> Side:
        """Get the side owning this zone (first three belong to side 1)."""
        return Side.SIDE1 if self.position < 3 else Side.SIDE2

    @property
    def display_name(self) -> str:
        """Get human-readable zone name (e.g., 'Side1 Melee')."""
        return self.value.replace("_", " ").title()

    def distance_to(self, other: Zone) -> int:
        """Count the steps between two zones."""
        return abs(self.position - other.position)

    def toward(self, target: Zone) -> Zone | None:
        """Get the neighbouring zone one step closer to target.

        Returns:
            The adjacent zone, or None when already at target.
        """
        if self is target:
            return None
        step = 1 if target.position > self.position else -1
        return ZONE_TRACK[self.position + step]


ZONE_TRACK: tuple[Zone, ...] = tuple(Zone)
"""The zones in track order."""

_ZONE_POSITION: dict[Zone, int] = {zone: i for i, zone in enumerate(ZONE_TRACK)}


class WeaponRange(StrEnum):
    """How far an actor's attack reaches, in zones."""

    MELEE = "melee"
    REACH = "reach"
    RANGED = "ranged"

    @property
    def max_distance(self) -> int:
        """Get the maximum engagement distance for this range class."""
        return _MAX_DISTANCE[self]


_MAX_DISTANCE: dict[WeaponRange, int] = {
    WeaponRange.MELEE: 1,
    WeaponRange.REACH: 2,
    WeaponRange.RANGED: 6,
}


class StartingZone(StrEnum):
    """Where an actor deploys, relative to its own side."""

    RANGED = "ranged"
    REACH = "reach"
    MELEE = "melee"


class InitiativeType(StrEnum):
    """Algorithm that orders actions within a round.

    Levels:
        SIDE: A random side acts first; each side acts in shuffled order.
        INDIVIDUAL: Everyone rolls initiative and acts in descending order.
        SIDE_PHASES: Side ordering, but the round is split into phases.
        INDIVIDUAL_PHASES: Initiative ordering, split into phases.
    """

    SIDE = "side"
    INDIVIDUAL = "individual"
    SIDE_PHASES = "side_phases"
    INDIVIDUAL_PHASES = "individual_phases"


class Phase(StrEnum):
    """A sub-round stage used by the phased initiative modes."""

    MOVEMENT = "movement"
    RANGED = "ranged"
    REACH = "reach"
    MELEE = "melee"

    @property
    def weapon_range(self) -> WeaponRange | None:
        """Get the weapon range allowed to attack in this phase.

        Returns:
            The matching WeaponRange, or None for the movement phase.
        """
        if self is Phase.MOVEMENT:
            return None
        return WeaponRange(self.value)


DEFAULT_PHASES: tuple[Phase, ...] = (
    Phase.MOVEMENT,
    Phase.RANGED,
    Phase.REACH,
    Phase.MELEE,
)


__all__ = [
    "Side",
    "Zone",
    "ZONE_TRACK",
    "WeaponRange",
    "StartingZone",
    "InitiativeType",
    "Phase",
    "DEFAULT_PHASES",
]
