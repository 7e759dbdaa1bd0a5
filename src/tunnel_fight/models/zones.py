"""Zone geometry and occupancy limits.

The battlefield is a single line of six zones (see models.enums.Zone).
This module holds the track operations used by movement and targeting,
plus the per-zone capacity configuration.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from tunnel_fight.core.constants import DEFAULT_MELEE_CAPACITY, DEFAULT_REACH_CAPACITY
from tunnel_fight.models.enums import Side, StartingZone, Zone


def distance(a: Zone, b: Zone) -> int:
    """Count the steps between two zones along the track."""
    return a.distance_to(b)


def step_toward(origin: Zone, target: Zone) -> Zone | None:
    """Get the zone one step from origin toward target, or None if equal."""
    return origin.toward(target)


def starting_zone(side: Side, start: StartingZone) -> Zone:
    """Map a side-relative deployment to a concrete zone."""
    return Zone(f"{side.value}_{start.value}")


def forward_zone(side: Side) -> Zone:
    """Get the far end of the track as seen by side (the enemy's ranged zone)."""
    return Zone.SIDE2_RANGED if side is Side.SIDE1 else Zone.SIDE1_RANGED


def backward_zone(side: Side) -> Zone:
    """Get the side's own ranged zone."""
    return Zone.SIDE1_RANGED if side is Side.SIDE1 else Zone.SIDE2_RANGED


class ZoneCapacities(BaseModel):
    """Maximum living occupants per zone, identical for both sides.

    Attributes:
        ranged: Capacity of each ranged zone (None means unlimited).
        reach: Capacity of each reach zone.
        melee: Capacity of each melee zone.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ranged: Annotated[int, Field(ge=0)] | None = Field(
        default=None,
        description="Ranged zone capacity (null = unlimited)",
    )
    reach: Annotated[int, Field(ge=0)] = Field(
        default=DEFAULT_REACH_CAPACITY,
        description="Reach zone capacity",
    )
    melee: Annotated[int, Field(ge=0)] = Field(
        default=DEFAULT_MELEE_CAPACITY,
        description="Melee zone capacity",
    )

    def capacity_for(self, zone: Zone) -> int | None:
        """Get the capacity of a zone.

        Returns:
            Maximum occupants, or None when unlimited.
        """
        if zone in (Zone.SIDE1_RANGED, Zone.SIDE2_RANGED):
            return self.ranged
        if zone in (Zone.SIDE1_REACH, Zone.SIDE2_REACH):
            return self.reach
        return self.melee


__all__ = [
    "distance",
    "step_toward",
    "starting_zone",
    "forward_zone",
    "backward_zone",
    "ZoneCapacities",
]
