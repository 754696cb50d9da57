"""Experience curve and level reward calculations.

The XP curve is geometric: 100 XP for level 1, growing by 50% per level,
with a hard cap at level 100.

Example:
    >>> xp_to_next_level(3)
    225
    >>> total_xp_for_level(3)
    250
"""

from __future__ import annotations

import math
from typing import NamedTuple

from storyforge.core.constants import (
    ATTRIBUTE_POINTS_PER_LEVEL,
    BASE_EXPERIENCE,
    EXPERIENCE_GROWTH_RATE,
    MAX_LEVEL,
    MILESTONE_ATTRIBUTE_BONUS,
    MILESTONE_LEVEL_INTERVAL,
    MILESTONE_SKILL_BONUS,
    MILESTONE_SPECIALIZATION_BONUS,
    MIN_LEVEL,
    SKILL_POINTS_PER_LEVEL,
    SPECIALIZATION_POINT_INTERVAL,
    TALENT_POINT_INTERVAL,
)
from storyforge.core.exceptions import (
    InvalidLevelError,
    LevelCeilingExceededError,
    NegativePointsError,
)
from storyforge.core.logging import get_logger
from storyforge.models.character import CharacterProfile, ProgressionPoints


logger = get_logger(__name__)


class LevelUpCheck(NamedTuple):
    """Outcome of a single level-up check.

    Attributes:
        should_level_up: True if the character has enough XP for the next level.
        new_level: The single next level, or None.
    """

    should_level_up: bool
    new_level: int | None = None


def _require_valid_level(level: object) -> int:
    if isinstance(level, float) and level.is_integer():
        level = int(level)
    if isinstance(level, bool) or not isinstance(level, int) or level < MIN_LEVEL:
        raise InvalidLevelError(
            f"Invalid level: {level!r}. Level must be a positive integer.",
            level=level,
        )
    return level


def xp_to_next_level(level: int) -> int:
    """XP required to advance from ``level`` to ``level + 1``.

    Args:
        level: Current level (1-100).

    Returns:
        ``floor(100 * 1.5 ** (level - 1))``.

    Raises:
        InvalidLevelError: If level is not an integer or is below 1.
        LevelCeilingExceededError: If level is above 100.
    """
    level = _require_valid_level(level)
    if level > MAX_LEVEL:
        raise LevelCeilingExceededError(
            f"Level {level} exceeds maximum allowed level ({MAX_LEVEL})",
            level=level,
            max_level=MAX_LEVEL,
        )
    return math.floor(BASE_EXPERIENCE * EXPERIENCE_GROWTH_RATE ** (level - 1))


def total_xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach ``level`` from level 1.

    Args:
        level: Target level.

    Returns:
        Sum of ``xp_to_next_level(i)`` for every i below ``level``; 0 for level 1.

    Raises:
        InvalidLevelError: If level is not an integer or is below 1.
        LevelCeilingExceededError: If a level on the way exceeds the cap.
    """
    level = _require_valid_level(level)
    return sum(xp_to_next_level(i) for i in range(MIN_LEVEL, level))


def check_level_up(character: CharacterProfile) -> LevelUpCheck:
    """Check whether a character has banked enough XP for one more level.

    Never proposes a level above the cap, so callers looping on this
    predicate always terminate.
    """
    if character.level >= MAX_LEVEL:
        return LevelUpCheck(should_level_up=False)
    if character.experience_points >= character.experience_to_next_level:
        return LevelUpCheck(should_level_up=True, new_level=character.level + 1)
    return LevelUpCheck(should_level_up=False)


def points_for_level(level: int) -> ProgressionPoints:
    """Progression points granted on reaching ``level``.

    Every level grants 2 attribute and 3 skill points. Levels divisible by 5
    add a specialization point and levels divisible by 3 a talent point.
    Milestone levels (divisible by 10) add +2 attribute, +3 skill and +1
    specialization on top.

    Args:
        level: The level just reached.

    Returns:
        The points granted for that level.

    Raises:
        InvalidLevelError: If level is not an integer or is below 1.
    """
    level = _require_valid_level(level)
    attribute = ATTRIBUTE_POINTS_PER_LEVEL
    skill = SKILL_POINTS_PER_LEVEL
    specialization = 1 if level % SPECIALIZATION_POINT_INTERVAL == 0 else 0
    talent = 1 if level % TALENT_POINT_INTERVAL == 0 else 0

    if level % MILESTONE_LEVEL_INTERVAL == 0:
        attribute += MILESTONE_ATTRIBUTE_BONUS
        skill += MILESTONE_SKILL_BONUS
        specialization += MILESTONE_SPECIALIZATION_BONUS

    return ProgressionPoints(
        attribute=attribute,
        skill=skill,
        specialization=specialization,
        talent=talent,
    )


def award_experience(character: CharacterProfile, amount: int) -> CharacterProfile:
    """Add XP to a character without leveling it up.

    Args:
        character: The character earning XP.
        amount: XP gained.

    Returns:
        A new character with current and lifetime XP increased.

    Raises:
        NegativePointsError: If amount is negative.
    """
    if amount < 0:
        raise NegativePointsError(
            "Cannot award negative experience",
            character_id=character.id,
            details={"amount": amount},
        )
    logger.debug("Experience awarded", character_id=character.id, amount=amount)
    return character.model_copy(
        update={
            "experience_points": character.experience_points + amount,
            "total_experience_earned": character.total_experience_earned + amount,
        },
        deep=True,
    )


__all__ = [
    "LevelUpCheck",
    "xp_to_next_level",
    "total_xp_for_level",
    "check_level_up",
    "points_for_level",
    "award_experience",
]
