"""Tests for configuration management."""

from __future__ import annotations

import pytest

from storyforge.core.config import CombatSettings, Settings, clear_settings_cache, get_settings


class TestCombatSettings:
    """Tests for CombatSettings configuration."""

    def test_default_values(self) -> None:
        """Test default combat settings."""
        settings = CombatSettings()

        assert settings.rng_seed is None
        assert settings.victory_experience_reward == 100
        assert settings.defeat_injury_duration == 3

    def test_negative_reward_rejected(self) -> None:
        """Test that a negative reward is rejected."""
        with pytest.raises(ValueError):
            CombatSettings(victory_experience_reward=-1)


class TestSettings:
    """Tests for main Settings class."""

    def test_default_settings(self) -> None:
        """Test default settings values."""
        settings = Settings()

        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_env_override(self, mock_env_vars: dict[str, str]) -> None:
        """Test environment variables override defaults."""
        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.combat.rng_seed == 42
        assert settings.combat.victory_experience_reward == 250

    def test_invalid_log_level(self) -> None:
        """Test that an unknown log level is rejected."""
        with pytest.raises(ValueError):
            Settings(log_level="VERBOSE")  # type: ignore[arg-type]


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_cache(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test clearing the cache picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("STORYFORGE_COMBAT_RNG_SEED", "7")
        clear_settings_cache()
        second = get_settings()

        assert first is not second
        assert second.combat.rng_seed == 7
