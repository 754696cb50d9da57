"""Pydantic V2 schemas for character progression.

``CharacterProfile`` is the aggregate root shared by both engines. Hosts hand
in partial JSON (older saves often lack the progression fields); the model's
pre-validation step fills those gaps once, so engine code can rely on a fully
populated record.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, TypeAlias
from uuid import uuid4

from pydantic import ConfigDict, Field, model_validator

from storyforge.core.constants import DEFAULT_ATTRIBUTE_VALUE, MAX_LEVEL, MIN_LEVEL
from storyforge.models.base import StoryForgeModel
from storyforge.models.enums import Attribute, ProgressionPointType
from storyforge.models.skill_tree import Specialization


RawCharacterProfile: TypeAlias = Mapping[str, Any]
"""Host-supplied character data before normalization (camelCase or snake_case)."""

# Older saves send null for these; null means "use the default".
_DEFAULTED_FIELDS = (
    ("progression_points", "progressionPoints"),
    ("attribute_progression", "attributeProgression"),
    ("purchased_skill_nodes", "purchasedSkillNodes"),
    ("available_skill_trees", "availableSkillTrees"),
    ("active_specializations", "activeSpecializations"),
    ("purchased_talents", "purchasedTalents"),
    ("completed_milestones", "completedMilestones"),
    ("experience_points", "experiencePoints"),
    ("derived", "derived"),
)


class ProgressionPoints(StoryForgeModel):
    """Unspent progression point pools."""

    attribute: Annotated[int, Field(ge=0)] = 0
    skill: Annotated[int, Field(ge=0)] = 0
    specialization: Annotated[int, Field(ge=0)] = 0
    talent: Annotated[int, Field(ge=0)] = 0

    def get(self, pool: ProgressionPointType | str) -> int:
        """Read a pool by name."""
        return getattr(self, ProgressionPointType(pool).value)

    def __add__(self, other: ProgressionPoints) -> ProgressionPoints:
        return ProgressionPoints(
            attribute=self.attribute + other.attribute,
            skill=self.skill + other.skill,
            specialization=self.specialization + other.specialization,
            talent=self.talent + other.talent,
        )


class AttributeProgression(StoryForgeModel):
    """Points allocated on top of base attributes, plus derived-stat bonuses.

    Attribute deltas are bounded by the allocation ceiling; the bonus
    accumulators are added straight onto the matching derived stat.
    """

    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0
    max_health_bonus: int = 0
    max_mana_bonus: int = 0
    carry_capacity_bonus: int = 0

    def delta(self, attribute: Attribute | str) -> int:
        """Allocated delta for one core attribute."""
        return getattr(self, Attribute(attribute).value)


class DerivedStats(StoryForgeModel):
    """Combat and utility stats recomputed from attributes and progression."""

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int
    max_health: int
    max_mana: int
    attack: int
    defense: int
    speed: int
    accuracy: int
    evasion: int
    critical_chance: int
    critical_multiplier: float
    carry_capacity: int
    movement_speed: int
    initiative_bonus: int


class CharacterProfile(StoryForgeModel):
    """A player character or NPC tracked by the progression engine.

    Attributes:
        id: Unique character identifier.
        name: Character name.
        character_class: Class or archetype (``class`` in host JSON).
        health: Current health, never above max_health.
        max_health: Maximum health after derived stats are applied.
        mana: Current mana, never above max_mana.
        max_mana: Maximum mana after derived stats are applied.
        base_max_health: Health pool before constitution and bonuses.
        base_max_mana: Mana pool before intelligence and bonuses.
        strength..charisma: Base attributes (floor 1).
        derived: Last computed derived stats, if any.
        level: Character level.
        experience_points: XP progress within the current level.
        experience_to_next_level: XP needed to reach the next level.
        total_experience_earned: Lifetime XP.
        progression_points: Unspent point pools.
        attribute_progression: Allocated attribute deltas and bonuses.
        purchased_skill_nodes: Ids of purchased skill tree nodes.
        available_skill_trees: Ids of skill trees the character can browse.
        active_specializations: Active specialization instances.
        purchased_talents: Ids of purchased talents.
        completed_milestones: Ids of completed milestones.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=False)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1, max_length=100)
    character_class: str = Field(default="", alias="class")
    description: str = ""

    health: Annotated[int, Field(ge=0)] = 100
    max_health: Annotated[int, Field(ge=1)] = 100
    mana: Annotated[int, Field(ge=0)] = 0
    max_mana: Annotated[int, Field(ge=0)] = 0
    base_max_health: Annotated[int, Field(ge=0)] = 100
    base_max_mana: Annotated[int, Field(ge=0)] = 0

    strength: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE
    dexterity: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE
    constitution: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE
    intelligence: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE
    wisdom: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE
    charisma: Annotated[int, Field(ge=1)] = DEFAULT_ATTRIBUTE_VALUE

    derived: DerivedStats | None = None

    level: Annotated[int, Field(ge=MIN_LEVEL, le=MAX_LEVEL)] = MIN_LEVEL
    experience_points: Annotated[int, Field(ge=0)] = 0
    experience_to_next_level: Annotated[int, Field(gt=0)] = 100
    total_experience_earned: Annotated[int, Field(ge=0)] = 0

    progression_points: ProgressionPoints = Field(default_factory=ProgressionPoints)
    attribute_progression: AttributeProgression = Field(default_factory=AttributeProgression)
    purchased_skill_nodes: list[str] = Field(default_factory=list)
    available_skill_trees: list[str] = Field(default_factory=list)
    active_specializations: list[Specialization] = Field(default_factory=list)
    purchased_talents: list[str] = Field(default_factory=list)
    completed_milestones: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fill_progression_defaults(cls, data: Any) -> Any:
        """Fill fields that default from other fields rather than constants.

        Returns:
            The input with base vitals, XP requirement and lifetime XP filled.
        """
        if not isinstance(data, Mapping):
            return data
        filled = dict(data)

        def lookup(snake: str, camel: str) -> Any:
            return filled.get(snake, filled.get(camel))

        def absent(snake: str, camel: str) -> bool:
            return lookup(snake, camel) is None

        def put(snake: str, camel: str, value: Any) -> None:
            filled.pop(camel, None)
            filled[snake] = value

        for snake, camel in _DEFAULTED_FIELDS:
            if absent(snake, camel):
                filled.pop(snake, None)
                filled.pop(camel, None)

        if absent("base_max_health", "baseMaxHealth") and not absent("max_health", "maxHealth"):
            put("base_max_health", "baseMaxHealth", lookup("max_health", "maxHealth"))
        if absent("base_max_mana", "baseMaxMana") and not absent("max_mana", "maxMana"):
            put("base_max_mana", "baseMaxMana", lookup("max_mana", "maxMana"))

        if absent("experience_to_next_level", "experienceToNextLevel"):
            level = lookup("level", "level")
            if level is None:
                level = MIN_LEVEL
            valid = isinstance(level, int) and not isinstance(level, bool)
            if valid and MIN_LEVEL <= level <= MAX_LEVEL:
                from storyforge.progression.experience import xp_to_next_level

                put("experience_to_next_level", "experienceToNextLevel", xp_to_next_level(level))

        if not lookup("total_experience_earned", "totalExperienceEarned"):
            put(
                "total_experience_earned",
                "totalExperienceEarned",
                lookup("experience_points", "experiencePoints") or 0,
            )

        return filled

    @model_validator(mode="after")
    def check_vitals(self) -> CharacterProfile:
        """Ensure current vitals never exceed their maximums."""
        if self.health > self.max_health:
            raise ValueError(f"health ({self.health}) exceeds max_health ({self.max_health})")
        if self.mana > self.max_mana:
            raise ValueError(f"mana ({self.mana}) exceeds max_mana ({self.max_mana})")
        return self

    def base_attribute(self, attribute: Attribute | str) -> int:
        """Base value of one core attribute."""
        return getattr(self, Attribute(attribute).value)


def initialize_character_progression(
    raw: RawCharacterProfile | CharacterProfile,
) -> CharacterProfile:
    """Normalize host character data into a fully populated profile.

    Missing progression fields get their defaults once here, so engine code
    never has to guard against absent pools or lists.

    Args:
        raw: Host data (camelCase or snake_case keys) or an existing profile.

    Returns:
        A new CharacterProfile.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    if isinstance(raw, CharacterProfile):
        return raw.model_copy(deep=True)
    return CharacterProfile.model_validate(raw)


__all__ = [
    "RawCharacterProfile",
    "ProgressionPoints",
    "AttributeProgression",
    "DerivedStats",
    "CharacterProfile",
    "initialize_character_progression",
]
