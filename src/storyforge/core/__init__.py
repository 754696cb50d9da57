"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        StoryForgeError: Base exception for all engine errors.
        ProgressionError / CombatError: Domain branches.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        log_context: Bind context for the duration of a block.
"""

from __future__ import annotations

from storyforge.core.config import (
    CombatSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from storyforge.core.exceptions import (
    AttributeCeilingExceededError,
    CombatError,
    ConfigurationError,
    InsufficientPointsError,
    InvalidCombatSetupError,
    InvalidLevelError,
    LevelCeilingExceededError,
    NegativePointsError,
    NodeNotFoundError,
    ProgressionError,
    PurchaseNotAllowedError,
    SpecializationNotAvailableError,
    SpecializationNotFoundError,
    StoryForgeError,
)
from storyforge.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    log_context,
)


__all__ = [
    # Base exception
    "StoryForgeError",
    # Progression exceptions
    "ProgressionError",
    "InvalidLevelError",
    "LevelCeilingExceededError",
    "NegativePointsError",
    "AttributeCeilingExceededError",
    "InsufficientPointsError",
    "NodeNotFoundError",
    "PurchaseNotAllowedError",
    "SpecializationNotFoundError",
    "SpecializationNotAvailableError",
    # Combat exceptions
    "CombatError",
    "InvalidCombatSetupError",
    # Configuration
    "ConfigurationError",
    "Settings",
    "CombatSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
