"""Tests for zone movement rules."""

from __future__ import annotations

from collections.abc import Callable

from tunnel_fight.engine.movement import MovementRules
from tunnel_fight.engine.plans import MovePlan, MoveTarget
from tunnel_fight.engine.state import BattleState
from tunnel_fight.models.actors import Actor
from tunnel_fight.models.enums import Side, Zone
from tunnel_fight.models.events import MoveEvent
from tunnel_fight.models.zones import ZoneCapacities


BASIC = MovementRules(ZoneCapacities())
CONTESTED = MovementRules(ZoneCapacities(), contested=True)


class TestMove:
    """Tests for stepwise movement."""

    def test_moves_one_step_toward_target(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test a speed-1 actor advances a single zone."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_RANGED),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )
        state.round = 1

        event = BASIC.move(state, state.get(0), MovePlan.toward(1))

        assert isinstance(event, MoveEvent)
        assert event.from_zone is Zone.SIDE1_RANGED
        assert event.to_zone is Zone.SIDE1_REACH
        assert state.get(0).zone is Zone.SIDE1_REACH
        assert state.events == [event]

    def test_speed_allows_several_steps(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test faster actors cover several zones and log one event."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_RANGED, speed=3),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )

        event = BASIC.move(state, state.get(0), MovePlan.toward(1))

        assert event is not None
        assert event.to_zone is Zone.SIDE2_MELEE
        assert len(state.events) == 1

    def test_stops_at_destination(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test movement never overshoots the target's zone."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_MELEE, speed=4),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_MELEE),
        )

        event = BASIC.move(state, state.get(0), MovePlan.toward(1))

        assert event is not None
        assert event.to_zone is Zone.SIDE2_MELEE

    def test_no_event_when_staying(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test an actor already at its destination logs nothing."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE2_MELEE),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_MELEE),
        )

        assert BASIC.move(state, state.get(0), MovePlan.toward(1)) is None
        assert state.events == []

    def test_zero_speed_never_moves(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test speed zero pins an actor in place."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_RANGED, speed=0),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )

        assert BASIC.move(state, state.get(0), MovePlan.toward(1)) is None

    def test_forward_and_backward(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test fixed-zone destinations."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_MELEE),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )

        BASIC.move(state, state.get(0), MovePlan(MoveTarget.BACKWARD))
        assert state.get(0).zone is Zone.SIDE1_REACH

        BASIC.move(state, state.get(0), MovePlan(MoveTarget.FORWARD))
        assert state.get(0).zone is Zone.SIDE1_MELEE

    def test_zone_destination(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test an explicit zone destination."""
        state = make_state(make_actor(0, zone=Zone.SIDE1_MELEE, speed=2))

        BASIC.move(state, state.get(0), MovePlan.to_zone(Zone.SIDE1_RANGED))

        assert state.get(0).zone is Zone.SIDE1_RANGED


class TestCapacity:
    """Tests for zone capacity limits."""

    def test_full_zone_blocks_entry(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test an actor stops before a zone at capacity."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_RANGED, speed=2),
            make_actor(1, zone=Zone.SIDE1_MELEE),
            make_actor(2, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )
        rules = MovementRules(ZoneCapacities(melee=1))

        event = rules.move(state, state.get(0), MovePlan.toward(2))

        assert event is not None
        assert event.to_zone is Zone.SIDE1_REACH

    def test_dead_actors_free_capacity(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test only living occupants count toward capacity."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_REACH),
            make_actor(1, zone=Zone.SIDE1_MELEE, current_hp=0),
            make_actor(2, side=Side.SIDE2, zone=Zone.SIDE2_RANGED),
        )
        rules = MovementRules(ZoneCapacities(melee=1))

        assert rules.can_enter(state, Zone.SIDE1_MELEE, state.get(0))

    def test_zero_capacity_zone_is_impassable(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test a zero-capacity zone can never be entered."""
        state = make_state(make_actor(0, zone=Zone.SIDE1_RANGED))
        rules = MovementRules(ZoneCapacities(reach=0))

        assert not rules.can_enter(state, Zone.SIDE1_REACH, state.get(0))


class TestContestedMovement:
    """Tests for the enemy-occupancy rule used with phases."""

    def test_basic_rules_ignore_enemies(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test basic movement walks into enemy-held zones."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_MELEE),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_MELEE),
        )

        assert BASIC.can_enter(state, Zone.SIDE2_MELEE, state.get(0))

    def test_contested_rules_block_enemy_zones(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test contested movement refuses zones holding a living enemy."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_MELEE),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_MELEE),
        )

        assert not CONTESTED.can_enter(state, Zone.SIDE2_MELEE, state.get(0))
        assert CONTESTED.move(state, state.get(0), MovePlan.toward(1)) is None

    def test_contested_allows_dead_enemies(
        self,
        make_actor: Callable[..., Actor],
        make_state: Callable[..., BattleState],
    ) -> None:
        """Test a zone holding only dead enemies is open."""
        state = make_state(
            make_actor(0, zone=Zone.SIDE1_MELEE),
            make_actor(1, side=Side.SIDE2, zone=Zone.SIDE2_MELEE, current_hp=0),
        )

        assert CONTESTED.can_enter(state, Zone.SIDE2_MELEE, state.get(0))
