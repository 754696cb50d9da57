"""Game rule constants for the StoryForge engines.

These values define the XP curve, reward table, and hard caps. Changing any
of them changes saved-game semantics.
"""

from __future__ import annotations

# =============================================================================
# Experience & Levels
# =============================================================================

MIN_LEVEL = 1
"""Lowest character level."""

MAX_LEVEL = 100
"""Hard level cap; XP lookups beyond it are rejected."""

BASE_EXPERIENCE = 100
"""XP required to go from level 1 to level 2."""

EXPERIENCE_GROWTH_RATE = 1.5
"""Per-level multiplier applied to the XP requirement."""

# =============================================================================
# Progression Point Rewards
# =============================================================================

ATTRIBUTE_POINTS_PER_LEVEL = 2
SKILL_POINTS_PER_LEVEL = 3

SPECIALIZATION_POINT_INTERVAL = 5
"""A specialization point is granted on every level divisible by this."""

TALENT_POINT_INTERVAL = 3
"""A talent point is granted on every level divisible by this."""

MILESTONE_LEVEL_INTERVAL = 10
"""Levels divisible by this grant the milestone bonus on top of the base."""

MILESTONE_ATTRIBUTE_BONUS = 2
MILESTONE_SKILL_BONUS = 3
MILESTONE_SPECIALIZATION_BONUS = 1

# =============================================================================
# Attributes
# =============================================================================

MIN_ATTRIBUTE_VALUE = 1
"""Floor applied to every total attribute before derived stats are computed."""

DEFAULT_ATTRIBUTE_VALUE = 10
"""Base attribute value for characters that do not specify one."""

MAX_ATTRIBUTE_ALLOCATION = 100
"""Ceiling on the cumulative progression delta of a single attribute."""

CORE_ATTRIBUTES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)

# =============================================================================
# Combat
# =============================================================================

MAX_CRITICAL_CHANCE = 100
MIN_CRITICAL_MULTIPLIER = 1.0

INITIATIVE_RANDOM_RANGE = 20
"""Initiative roll is speed plus a uniform draw in [0, this)."""

DEFAULT_ACTION_POINTS = 3

UNARMED_DAMAGE_RATIO = 0.5
ATTRIBUTE_DAMAGE_RATIO = 0.1
WEAPON_ACCURACY_DAMAGE_RATIO = 0.05
SKILL_DAMAGE_RATIO = 0.05
ARMOR_REDUCTION_RATIO = 0.5
HEALING_ATTRIBUTE_RATIO = 0.05

HEALING_BLESSING_BONUS = 5
"""Flat bonus per healer status effect named like a blessing or healing aura."""


__all__ = [
    "MIN_LEVEL",
    "MAX_LEVEL",
    "BASE_EXPERIENCE",
    "EXPERIENCE_GROWTH_RATE",
    "ATTRIBUTE_POINTS_PER_LEVEL",
    "SKILL_POINTS_PER_LEVEL",
    "SPECIALIZATION_POINT_INTERVAL",
    "TALENT_POINT_INTERVAL",
    "MILESTONE_LEVEL_INTERVAL",
    "MILESTONE_ATTRIBUTE_BONUS",
    "MILESTONE_SKILL_BONUS",
    "MILESTONE_SPECIALIZATION_BONUS",
    "MIN_ATTRIBUTE_VALUE",
    "DEFAULT_ATTRIBUTE_VALUE",
    "MAX_ATTRIBUTE_ALLOCATION",
    "CORE_ATTRIBUTES",
    "MAX_CRITICAL_CHANCE",
    "MIN_CRITICAL_MULTIPLIER",
    "INITIATIVE_RANDOM_RANGE",
    "DEFAULT_ACTION_POINTS",
    "UNARMED_DAMAGE_RATIO",
    "ATTRIBUTE_DAMAGE_RATIO",
    "WEAPON_ACCURACY_DAMAGE_RATIO",
    "SKILL_DAMAGE_RATIO",
    "ARMOR_REDUCTION_RATIO",
    "HEALING_ATTRIBUTE_RATIO",
    "HEALING_BLESSING_BONUS",
]
