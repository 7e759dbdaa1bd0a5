"""Tests for combat log formatting."""

from __future__ import annotations

from tunnel_fight.models.enums import Side, Zone
from tunnel_fight.models.events import (
    ActorSnapshot,
    AttackEvent,
    CombatResult,
    DeathEvent,
    MoveEvent,
)
from tunnel_fight.simulation.report import describe_event, format_combat_log


def attack(hit: bool, damage: int = 0) -> AttackEvent:
    return AttackEvent(
        round=1,
        actor_id=0,
        actor_name="Fighter",
        target_id=1,
        target_name="Goblin",
        roll=17,
        target_ac=13,
        hit=hit,
        damage=damage,
    )


class TestDescribeEvent:
    """Tests for event descriptions."""

    def test_hit(self) -> None:
        """Test a hit names the target, roll and damage."""
        assert describe_event(attack(True, 7)) == "attacks Goblin (rolled 17 vs AC 13) - HIT for 7 damage"

    def test_miss(self) -> None:
        """Test a miss omits damage."""
        assert describe_event(attack(False)) == "attacks Goblin (rolled 17 vs AC 13) - MISS"

    def test_move(self) -> None:
        """Test a move names both zones."""
        event = MoveEvent(
            round=1,
            actor_id=0,
            actor_name="Fighter",
            from_zone=Zone.SIDE1_RANGED,
            to_zone=Zone.SIDE1_REACH,
        )
        assert describe_event(event) == "moves from Side1 Ranged to Side1 Reach"

    def test_death(self) -> None:
        """Test a death line."""
        event = DeathEvent(round=2, actor_id=1, actor_name="Goblin", killer_id=0)
        assert describe_event(event) == "dies!"


class TestFormatCombatLog:
    """Tests for format_combat_log()."""

    def test_full_log(self) -> None:
        """Test winner, entries and final state rendering."""
        result = CombatResult(
            winner=Side.SIDE1,
            rounds=2,
            events=(
                attack(True, 9),
                DeathEvent(round=1, actor_id=1, actor_name="Goblin", killer_id=0),
            ),
            final_state=(
                ActorSnapshot(0, "Fighter", Side.SIDE1, 20, 20, True, Zone.SIDE1_MELEE),
                ActorSnapshot(1, "Goblin", Side.SIDE2, 7, -2, False, Zone.SIDE2_MELEE),
            ),
        )

        log = format_combat_log(result)

        assert log.winner == "Side1"
        assert log.rounds == 2
        assert [e.actor for e in log.events] == ["Fighter", "Goblin"]
        assert log.events[1].description == "dies!"
        assert log.final_state[0].hp == "20/20"
        assert log.final_state[1].hp == "0/7"
        assert log.final_state[1].side == "Side2"
        assert log.final_state[1].zone == "Side2 Melee"
        assert log.final_state[1].alive is False

    def test_draw_has_no_winner(self) -> None:
        """Test draws serialize the winner as null."""
        log = format_combat_log(CombatResult(winner=None, rounds=100, events=(), final_state=()))

        assert log.winner is None
        assert log.model_dump()["winner"] is None
