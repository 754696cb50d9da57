"""Level-up orchestration.

Applies as many single-level advances as the banked XP allows, carrying the
excess forward and accumulating the point rewards of every level crossed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from storyforge.core.logging import get_logger
from storyforge.models.character import CharacterProfile, ProgressionPoints
from storyforge.progression.experience import (
    check_level_up,
    points_for_level,
    xp_to_next_level,
)


logger = get_logger(__name__)


class LevelUpResult(BaseModel):
    """Report of a level-up pass.

    Attributes:
        character: The updated character.
        previous_level: Level before processing.
        levels_gained: Number of levels crossed (0 if none).
        points_awarded: Sum of the rewards of every level crossed.
    """

    model_config = ConfigDict(frozen=True)

    character: CharacterProfile
    previous_level: int
    levels_gained: int
    points_awarded: ProgressionPoints

    @property
    def leveled_up(self) -> bool:
        """True if at least one level was gained."""
        return self.levels_gained > 0


def process_level_up_with_report(character: CharacterProfile) -> LevelUpResult:
    """Level a character up as many times as its XP allows.

    Lifetime XP is not touched here; it is counted once when XP is awarded.

    Args:
        character: The character to process. Not mutated.

    Returns:
        A LevelUpResult holding the updated character and what was gained.
    """
    current = character.model_copy(deep=True)
    awarded = ProgressionPoints()
    previous_level = current.level

    while True:
        check = check_level_up(current)
        if not check.should_level_up or check.new_level is None:
            break

        new_level = check.new_level
        reward = points_for_level(new_level)
        awarded = awarded + reward

        current.experience_points = max(
            0, current.experience_points - current.experience_to_next_level
        )
        current.level = new_level
        current.experience_to_next_level = xp_to_next_level(new_level)

        logger.info(
            "Level gained",
            character_id=current.id,
            level=new_level,
            attribute_points=reward.attribute,
            skill_points=reward.skill,
        )

    current.progression_points = current.progression_points + awarded

    return LevelUpResult(
        character=current,
        previous_level=previous_level,
        levels_gained=current.level - previous_level,
        points_awarded=awarded,
    )


def process_level_up(character: CharacterProfile) -> CharacterProfile:
    """Level a character up as many times as its XP allows.

    Args:
        character: The character to process. Not mutated.

    Returns:
        The updated character.
    """
    return process_level_up_with_report(character).character


__all__ = [
    "LevelUpResult",
    "process_level_up",
    "process_level_up_with_report",
]
