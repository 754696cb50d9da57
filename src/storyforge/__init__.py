"""StoryForge - deterministic progression and combat engines for narrative RPGs.

Both engines are pure: they take a record and return an updated copy, never
touching storage, the network or the clock unless a caller passes one in.

Example:
    >>> from storyforge import initialize_character_progression, award_experience
    >>> hero = initialize_character_progression({"name": "Aria"})
    >>> award_experience(hero, 50).experience_points
    50

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas with camelCase JSON aliases.
    progression: Experience, leveling, attributes, skill trees, specializations.
    combat: Initiative, action validation, damage, status effects, end conditions.
"""

from __future__ import annotations

# Core
from storyforge.core.config import Settings, get_settings
from storyforge.core.exceptions import CombatError, ProgressionError, StoryForgeError
from storyforge.core.logging import configure_logging, get_logger

# Models
from storyforge.models import (
    CharacterProfile,
    CombatAction,
    CombatParticipant,
    CombatState,
    CombatTurnResult,
    initialize_character_progression,
)

# Progression
from storyforge.progression import (
    activate,
    award_experience,
    process_level_up,
    purchase,
    spend_attribute_points,
)

# Combat
from storyforge.combat import (
    create_participant_from_character,
    process_combat_action,
    start_combat,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "StoryForgeError",
    "ProgressionError",
    "CombatError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "CharacterProfile",
    "CombatAction",
    "CombatParticipant",
    "CombatState",
    "CombatTurnResult",
    "initialize_character_progression",
    # Progression
    "award_experience",
    "process_level_up",
    "spend_attribute_points",
    "purchase",
    "activate",
    # Combat
    "create_participant_from_character",
    "start_combat",
    "process_combat_action",
]
