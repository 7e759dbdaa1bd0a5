"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Tunnel Fight test suite.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from tunnel_fight.engine.state import BattleState
    from tunnel_fight.models.actors import Actor, ActorTemplate
    from tunnel_fight.models.encounter import Encounter


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from tunnel_fight.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TUNNEL_FIGHT_DEBUG": "true",
        "TUNNEL_FIGHT_LOG_LEVEL": "DEBUG",
        "TUNNEL_FIGHT_SIM_MAX_ROUNDS": "50",
        "TUNNEL_FIGHT_API_PORT": "8080",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Randomness Fixtures
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def fighter_data() -> dict[str, Any]:
    """Provide raw data for a melee fighter template."""
    return {
        "name": "Fighter",
        "hp": 20,
        "ac": 16,
        "attack_bonus": 5,
        "damage": "1d8+3",
        "range": "melee",
        "start_zone": "melee",
    }


@pytest.fixture
def goblin_data() -> dict[str, Any]:
    """Provide raw data for a goblin template."""
    return {
        "name": "Goblin",
        "hp": 7,
        "ac": 13,
        "attack_bonus": 4,
        "damage": "1d6+2",
        "range": "melee",
        "start_zone": "melee",
    }


@pytest.fixture
def make_template() -> Callable[..., ActorTemplate]:
    """Provide a factory for actor templates with sensible defaults."""
    from tunnel_fight.models.actors import ActorTemplate

    def _make(**overrides: Any) -> ActorTemplate:
        data: dict[str, Any] = {
            "name": "Soldier",
            "hp": 10,
            "ac": 12,
            "attack_bonus": 5,
            "damage": "1d6",
        }
        data.update(overrides)
        return ActorTemplate.model_validate(data)

    return _make


@pytest.fixture
def make_actor() -> Callable[..., Actor]:
    """Provide a factory for runtime actors placed directly in a zone."""
    from tunnel_fight.models.actors import Actor
    from tunnel_fight.models.dice import parse_dice
    from tunnel_fight.models.enums import Side, WeaponRange, Zone

    def _make(
        actor_id: int,
        side: Side = Side.SIDE1,
        zone: Zone = Zone.SIDE1_MELEE,
        **overrides: Any,
    ) -> Actor:
        data: dict[str, Any] = {
            "id": actor_id,
            "name": f"Actor{actor_id}",
            "side": side,
            "max_hp": 10,
            "current_hp": 10,
            "ac": 12,
            "attack_bonus": 5,
            "damage": parse_dice("1d6"),
            "speed": 1,
            "range": WeaponRange.MELEE,
            "zone": zone,
        }
        data.update(overrides)
        return Actor(**data)

    return _make


@pytest.fixture
def make_state() -> Callable[..., BattleState]:
    """Provide a factory wrapping actors in a BattleState."""
    from tunnel_fight.engine.state import BattleState

    def _make(*actors: Actor) -> BattleState:
        return BattleState(list(actors))

    return _make


@pytest.fixture
def duel_data() -> dict[str, Any]:
    """Provide a symmetric one-on-one melee encounter."""
    soldier = {
        "hp": 10,
        "ac": 12,
        "attack_bonus": 5,
        "damage": "1d6",
        "range": "melee",
        "start_zone": "melee",
    }
    return {
        "name": "Duel",
        "side1": [{"name": "Red", **soldier}],
        "side2": [{"name": "Blue", **soldier}],
        "iterations": 50,
    }


@pytest.fixture
def duel(duel_data: dict[str, Any]) -> Encounter:
    """Provide the duel encounter as a validated model."""
    from tunnel_fight.models.encounter import Encounter

    return Encounter.model_validate(duel_data)


@pytest.fixture
def skirmish_yaml() -> str:
    """Provide a mixed-range encounter as YAML text."""
    return """
name: Tunnel Skirmish
iterations: 200
zone_capacity:
  reach: 2
  melee: 2
initiative:
  type: individual
  dice: 1d20
side1:
  - name: Fighter
    hp: 2d10+8
    ac: 16
    attack_bonus: 5
    damage: 1d8+3
    range: melee
    start_zone: reach
  - name: Archer
    hp: 12
    ac: 13
    attack_bonus: 6
    damage: 1d8+2
    range: ranged
    start_zone: ranged
    apl:
      - action: attack
        if: enemy.in_range
        target: lowest_hp_enemy
side2:
  - name: Goblin
    hp: 2d6
    ac: 13
    attack_bonus: 4
    damage: 1d6+2
    speed: 2
  - name: Goblin
    hp: 2d6
    ac: 13
    attack_bonus: 4
    damage: 1d6+2
    speed: 2
  - name: Hobgoblin
    hp: 11
    ac: 18
    attack_bonus: 3
    damage: 1d8+1
    range: reach
    start_zone: reach
"""
