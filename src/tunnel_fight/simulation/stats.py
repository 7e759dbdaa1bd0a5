"""Aggregate statistics over a batch of battles.

Rates are percentages (0-100); averages are per battle. HP-lost
percentages are measured against the *expected* starting HP of each
side, since dice-based HP differs from battle to battle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from tunnel_fight.core.constants import DEFAULT_SAMPLE_COUNT
from tunnel_fight.models.dice import expected_hit_points
from tunnel_fight.models.enums import Side
from tunnel_fight.simulation.report import CombatLog, format_combat_log


if TYPE_CHECKING:
    from tunnel_fight.models.encounter import Encounter
    from tunnel_fight.models.events import CombatResult


class SimulationStats(BaseModel):
    """Summary of a simulation batch."""

    model_config = ConfigDict(frozen=True)

    iterations: int = Field(default=0, ge=0)
    side1_win_rate: float = 0.0
    side2_win_rate: float = 0.0
    draw_rate: float = 0.0
    avg_rounds: float = 0.0
    avg_side1_casualties: float = 0.0
    avg_side2_casualties: float = 0.0
    side1_flawless_rate: float = 0.0
    side2_flawless_rate: float = 0.0
    avg_side1_hp_lost: float = 0.0
    avg_side2_hp_lost: float = 0.0
    avg_side1_hp_lost_percent: float = 0.0
    avg_side2_hp_lost_percent: float = 0.0
    side1_tpk_rate: float = 0.0
    side2_tpk_rate: float = 0.0


def _percent(count: int, total: int) -> float:
    return count / total * 100.0


class StatsCollector:
    """Accumulates battle results and summarizes them.

    Only running totals and the first ``sample_count`` results are kept,
    so memory stays flat however many battles are recorded.

    Attributes:
        side1_count: Actors deployed on side 1.
        side2_count: Actors deployed on side 2.
        side1_hp: Expected total starting HP of side 1.
        side2_hp: Expected total starting HP of side 2.
        sample_count: Leading results retained for combat logs.
    """

    def __init__(
        self,
        side1_count: int,
        side2_count: int,
        side1_hp: int,
        side2_hp: int,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
    ) -> None:
        self.side1_count = side1_count
        self.side2_count = side2_count
        self.side1_hp = side1_hp
        self.side2_hp = side2_hp
        self.sample_count = max(sample_count, 0)

        self._totals = {Side.SIDE1: side1_count, Side.SIDE2: side2_count}
        self._battles = 0
        self._draws = 0
        self._rounds = 0
        self._wins = {Side.SIDE1: 0, Side.SIDE2: 0}
        self._flawless = {Side.SIDE1: 0, Side.SIDE2: 0}
        self._tpk = {Side.SIDE1: 0, Side.SIDE2: 0}
        self._casualties = {Side.SIDE1: 0, Side.SIDE2: 0}
        self._hp_lost = {Side.SIDE1: 0, Side.SIDE2: 0}
        self._samples: list[CombatResult] = []

    @classmethod
    def for_encounter(cls, encounter: Encounter, sample_count: int = DEFAULT_SAMPLE_COUNT) -> StatsCollector:
        """Create a collector sized for an encounter's rosters.

        Each actor contributes its expected HP, truncated to an integer.
        """
        return cls(
            side1_count=len(encounter.side1),
            side2_count=len(encounter.side2),
            side1_hp=sum(int(expected_hit_points(t.hp)) for t in encounter.side1),
            side2_hp=sum(int(expected_hit_points(t.hp)) for t in encounter.side2),
            sample_count=sample_count,
        )

    def __len__(self) -> int:
        return self._battles

    def add_result(self, result: CombatResult) -> None:
        """Fold one battle into the running totals."""
        self._battles += 1
        self._rounds += result.rounds
        if result.winner is None:
            self._draws += 1
        else:
            self._wins[result.winner] += 1

        for side in (Side.SIDE1, Side.SIDE2):
            dead = result.casualties(side)
            self._casualties[side] += dead
            self._hp_lost[side] += result.hp_lost(side)
            if dead == 0 and result.winner is side:
                self._flawless[side] += 1
            if dead == self._totals[side]:
                self._tpk[side] += 1

        if len(self._samples) < self.sample_count:
            self._samples.append(result)

    def compute_stats(self) -> SimulationStats:
        """Summarize every recorded battle.

        Returns:
            The batch statistics; all zeros if nothing was recorded.
        """
        n = self._battles
        if n == 0:
            return SimulationStats()

        def hp_lost_percent(side: Side, expected_total: int) -> float:
            if expected_total <= 0:
                return 0.0
            return self._hp_lost[side] / n / expected_total * 100.0

        return SimulationStats(
            iterations=n,
            side1_win_rate=_percent(self._wins[Side.SIDE1], n),
            side2_win_rate=_percent(self._wins[Side.SIDE2], n),
            draw_rate=_percent(self._draws, n),
            avg_rounds=self._rounds / n,
            avg_side1_casualties=self._casualties[Side.SIDE1] / n,
            avg_side2_casualties=self._casualties[Side.SIDE2] / n,
            side1_flawless_rate=_percent(self._flawless[Side.SIDE1], n),
            side2_flawless_rate=_percent(self._flawless[Side.SIDE2], n),
            avg_side1_hp_lost=self._hp_lost[Side.SIDE1] / n,
            avg_side2_hp_lost=self._hp_lost[Side.SIDE2] / n,
            avg_side1_hp_lost_percent=hp_lost_percent(Side.SIDE1, self.side1_hp),
            avg_side2_hp_lost_percent=hp_lost_percent(Side.SIDE2, self.side2_hp),
            side1_tpk_rate=_percent(self._tpk[Side.SIDE1], n),
            side2_tpk_rate=_percent(self._tpk[Side.SIDE2], n),
        )

    @property
    def sample_results(self) -> list[CombatResult]:
        """Get the retained leading battles."""
        return list(self._samples)

    def sample_combats(self) -> list[CombatLog]:
        """Render the retained leading battles as readable logs."""
        return [format_combat_log(r) for r in self._samples]


__all__ = [
    "SimulationStats",
    "StatsCollector",
]
