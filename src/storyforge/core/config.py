"""Configuration management for the StoryForge engines.

Settings are loaded with pydantic-settings from environment variables and an
optional .env file. The numeric game rules themselves live in
``storyforge.core.constants``; settings only cover operational knobs.

Example:
    >>> from storyforge.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.combat.victory_experience_reward
    100

Environment Variables:
    STORYFORGE_DEBUG: Force DEBUG logging
    STORYFORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    STORYFORGE_LOG_JSON: Emit JSON log lines
    STORYFORGE_COMBAT_RNG_SEED: Seed for the default combat random source
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storyforge.core.exceptions import ConfigurationError


class CombatSettings(BaseSettings):
    """Configuration for combat engine behavior.

    Attributes:
        rng_seed: Optional seed for the default random source.
        victory_experience_reward: Experience granted by a victory.
        defeat_injury_duration: Duration in turns of the injury suffered on defeat.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORYFORGE_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rng_seed: int | None = Field(
        default=None,
        description="Seed for the default combat random source",
    )
    victory_experience_reward: int = Field(
        default=100,
        ge=0,
        description="Experience granted on victory",
    )
    defeat_injury_duration: int = Field(
        default=3,
        ge=0,
        description="Turns an injury from defeat lasts",
    )


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        debug: Log at DEBUG regardless of log_level.
        log_level: Application logging level.
        log_json: Render logs as JSON.
        combat: Combat engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORYFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    debug: bool = Field(
        default=False,
        description="Force DEBUG logging",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    combat: CombatSettings = Field(default_factory=CombatSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "CombatSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
