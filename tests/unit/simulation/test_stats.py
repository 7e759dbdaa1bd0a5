"""Tests for batch statistics."""

from __future__ import annotations

import pytest

from tunnel_fight.models.encounter import Encounter
from tunnel_fight.models.enums import Side, Zone
from tunnel_fight.models.events import ActorSnapshot, CombatResult
from tunnel_fight.simulation.stats import SimulationStats, StatsCollector


def snapshot(actor_id: int, side: Side, final_hp: int, max_hp: int = 10) -> ActorSnapshot:
    return ActorSnapshot(
        id=actor_id,
        name=f"Actor{actor_id}",
        side=side,
        max_hp=max_hp,
        final_hp=final_hp,
        alive=final_hp > 0,
        zone=Zone.SIDE1_MELEE if side is Side.SIDE1 else Zone.SIDE2_MELEE,
    )


def result(winner: Side | None, rounds: int, *final: ActorSnapshot) -> CombatResult:
    return CombatResult(winner=winner, rounds=rounds, events=(), final_state=final)


class TestStatsCollector:
    """Tests for StatsCollector."""

    def test_empty_collector(self) -> None:
        """Test no results means all-zero statistics."""
        stats = StatsCollector(1, 1, 10, 10).compute_stats()

        assert stats == SimulationStats()
        assert stats.iterations == 0

    def test_rates_and_averages(self) -> None:
        """Test win, draw, casualty, flawless and TPK figures."""
        collector = StatsCollector(side1_count=2, side2_count=1, side1_hp=20, side2_hp=10)
        # Side 1 wins untouched
        collector.add_result(
            result(
                Side.SIDE1,
                2,
                snapshot(0, Side.SIDE1, 10),
                snapshot(1, Side.SIDE1, 10),
                snapshot(2, Side.SIDE2, -4),
            )
        )
        # Side 1 wins but loses an actor
        collector.add_result(
            result(
                Side.SIDE1,
                4,
                snapshot(0, Side.SIDE1, 0),
                snapshot(1, Side.SIDE1, 5),
                snapshot(2, Side.SIDE2, 0),
            )
        )
        # Side 2 wipes side 1
        collector.add_result(
            result(
                Side.SIDE2,
                3,
                snapshot(0, Side.SIDE1, -1),
                snapshot(1, Side.SIDE1, 0),
                snapshot(2, Side.SIDE2, 6),
            )
        )
        # Round cap
        collector.add_result(
            result(
                None,
                100,
                snapshot(0, Side.SIDE1, 10),
                snapshot(1, Side.SIDE1, 10),
                snapshot(2, Side.SIDE2, 10),
            )
        )

        stats = collector.compute_stats()

        assert stats.iterations == 4
        assert stats.side1_win_rate == pytest.approx(50.0)
        assert stats.side2_win_rate == pytest.approx(25.0)
        assert stats.draw_rate == pytest.approx(25.0)
        assert stats.avg_rounds == pytest.approx(109 / 4)
        assert stats.avg_side1_casualties == pytest.approx(3 / 4)
        assert stats.avg_side2_casualties == pytest.approx(2 / 4)
        assert stats.side1_flawless_rate == pytest.approx(25.0)
        assert stats.side2_flawless_rate == pytest.approx(25.0)
        assert stats.side1_tpk_rate == pytest.approx(25.0)
        assert stats.side2_tpk_rate == pytest.approx(50.0)
        # side 1 lost 0 + 15 + 20 + 0 hp, side 2 lost 10 + 10 + 4 + 0
        assert stats.avg_side1_hp_lost == pytest.approx(35 / 4)
        assert stats.avg_side2_hp_lost == pytest.approx(24 / 4)
        assert stats.avg_side1_hp_lost_percent == pytest.approx(35 / 4 / 20 * 100)
        assert stats.avg_side2_hp_lost_percent == pytest.approx(24 / 4 / 10 * 100)

    def test_zero_expected_hp(self) -> None:
        """Test HP-lost percentage is zero when the expected total is zero."""
        collector = StatsCollector(0, 1, 0, 10)
        collector.add_result(result(Side.SIDE2, 0, snapshot(0, Side.SIDE2, 10)))

        stats = collector.compute_stats()

        assert stats.avg_side1_hp_lost_percent == 0.0
        assert stats.side1_tpk_rate == pytest.approx(100.0)

    def test_for_encounter_uses_expected_hp(self) -> None:
        """Test side totals come from expected HP, truncated per actor."""
        encounter = Encounter.model_validate(
            {
                "side1": [
                    {"name": "A", "hp": "1d6", "ac": 10, "attack_bonus": 0, "damage": "1d4"},
                    {"name": "B", "hp": "1d6", "ac": 10, "attack_bonus": 0, "damage": "1d4"},
                ],
                "side2": [
                    {"name": "C", "hp": 12, "ac": 10, "attack_bonus": 0, "damage": "1d4"},
                    {"name": "D", "hp": "junk", "ac": 10, "attack_bonus": 0, "damage": "1d4"},
                ],
            }
        )

        collector = StatsCollector.for_encounter(encounter)

        assert collector.side1_count == 2
        assert collector.side1_hp == 6
        assert collector.side2_hp == 13

    def test_sample_combats(self) -> None:
        """Test only the leading battles are rendered as logs."""
        collector = StatsCollector(1, 1, 10, 10, sample_count=2)
        for rounds in (1, 2, 3):
            collector.add_result(result(Side.SIDE1, rounds, snapshot(0, Side.SIDE1, 10)))

        samples = collector.sample_combats()

        assert [s.rounds for s in samples] == [1, 2]
        assert len(collector) == 3

    def test_zero_samples(self) -> None:
        """Test a zero sample count retains nothing but still counts."""
        collector = StatsCollector(1, 1, 10, 10, sample_count=0)
        collector.add_result(result(Side.SIDE1, 1, snapshot(0, Side.SIDE1, 10)))

        assert collector.sample_combats() == []
        assert collector.compute_stats().iterations == 1

    def test_long_batch_retains_only_samples(self) -> None:
        """Test totals cover every battle while retention stays bounded."""
        collector = StatsCollector(1, 1, 10, 10, sample_count=3)
        for i in range(1000):
            winner = Side.SIDE1 if i % 4 else Side.SIDE2
            loser_hp = (-2, 0)[i % 2]
            if winner is Side.SIDE1:
                final = (snapshot(0, Side.SIDE1, 10), snapshot(1, Side.SIDE2, loser_hp))
            else:
                final = (snapshot(0, Side.SIDE1, loser_hp), snapshot(1, Side.SIDE2, 7))
            collector.add_result(result(winner, i % 5 + 1, *final))

        stats = collector.compute_stats()

        assert len(collector.sample_results) == 3
        assert [r.rounds for r in collector.sample_results] == [1, 2, 3]
        assert stats.iterations == 1000
        assert stats.side1_win_rate == pytest.approx(75.0)
        assert stats.side2_win_rate == pytest.approx(25.0)
        assert stats.avg_rounds == pytest.approx(3.0)
        assert stats.side1_flawless_rate == pytest.approx(75.0)
        assert stats.side2_flawless_rate == pytest.approx(25.0)
        assert stats.side1_tpk_rate == pytest.approx(25.0)
        assert stats.side2_tpk_rate == pytest.approx(75.0)
        assert stats.avg_side2_casualties == pytest.approx(0.75)

    def test_for_encounter_sample_count(self, duel: Encounter) -> None:
        """Test the encounter constructor forwards the sample count."""
        assert StatsCollector.for_encounter(duel, sample_count=7).sample_count == 7
        assert StatsCollector.for_encounter(duel).sample_count == 5
