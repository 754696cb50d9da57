"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the StoryForge engine test suite.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


class FixedRandom:
    """Random source that replays canned values, repeating the last one."""

    def __init__(self, values: float | Iterable[float] = 0.5) -> None:
        self._values = [values] if isinstance(values, int | float) else list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        return value


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from storyforge.core.config import clear_settings_cache

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
        "STORYFORGE_DEBUG": "true",
        "STORYFORGE_LOG_LEVEL": "DEBUG",
        "STORYFORGE_COMBAT_RNG_SEED": "42",
        "STORYFORGE_COMBAT_VICTORY_EXPERIENCE_REWARD": "250",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def fixed_rng() -> FixedRandom:
    """Random source that always returns 0.5 (a 50% roll, never critical at 0%)."""
    return FixedRandom(0.5)


@pytest.fixture
def make_rng() -> type[FixedRandom]:
    """Factory for random sources replaying a given sequence."""
    return FixedRandom


@pytest.fixture
def now() -> datetime:
    """A fixed point in time for combat timestamps."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def hero_data() -> dict[str, Any]:
    """Host JSON for a fresh level 1 character, camelCase and partial.

    Returns:
        Dictionary of character data.
    """
    return {
        "id": "hero-1",
        "name": "Aria",
        "class": "Warrior",
        "health": 100,
        "maxHealth": 100,
        "mana": 20,
        "maxMana": 20,
        "strength": 14,
        "dexterity": 12,
        "constitution": 13,
        "intelligence": 10,
        "wisdom": 11,
        "charisma": 9,
        "level": 1,
    }


@pytest.fixture
def hero(hero_data: dict[str, Any]) -> Any:
    """Create a normalized CharacterProfile for testing."""
    from storyforge.models import initialize_character_progression

    return initialize_character_progression(hero_data)


# =============================================================================
# Combat Fixtures
# =============================================================================


@pytest.fixture
def fighter() -> Any:
    """A player participant with a sword and 0% critical chance."""
    from storyforge.models import CombatParticipant, CombatWeapon, ParticipantType

    return CombatParticipant(
        id="fighter",
        name="Fighter",
        type=ParticipantType.PLAYER,
        health=100,
        max_health=100,
        mana=30,
        max_mana=30,
        attack=20,
        speed=12,
        critical_chance=0,
        critical_multiplier=2.0,
        equipped_weapon=CombatWeapon(id="sword", name="Sword", damage=10),
    )


@pytest.fixture
def goblin() -> Any:
    """An unarmed enemy participant."""
    from storyforge.models import CombatParticipant, ParticipantType

    return CombatParticipant(
        id="goblin",
        name="Goblin",
        type=ParticipantType.ENEMY,
        health=30,
        max_health=30,
        attack=10,
        speed=8,
    )


@pytest.fixture
def combat_state(fighter: Any, goblin: Any, fixed_rng: FixedRandom, now: datetime) -> Any:
    """A started encounter where the fighter acts first."""
    from storyforge.combat import start_combat

    return start_combat([fighter, goblin], rng=fixed_rng, now=now)
