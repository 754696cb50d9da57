"""Attribute allocation and derived stat calculation.

Derived stats are a pure function of base attributes plus allocated
progression deltas. Every rounding step rounds halves up, and every total
is floored before use so degenerate input never yields negative stats.
"""

from __future__ import annotations

import math

from storyforge.core.constants import (
    MAX_ATTRIBUTE_ALLOCATION,
    MAX_CRITICAL_CHANCE,
    MIN_ATTRIBUTE_VALUE,
    MIN_CRITICAL_MULTIPLIER,
)
from storyforge.core.exceptions import (
    AttributeCeilingExceededError,
    InsufficientPointsError,
    NegativePointsError,
)
from storyforge.core.logging import get_logger
from storyforge.models.character import AttributeProgression, CharacterProfile, DerivedStats
from storyforge.models.enums import Attribute, ProgressionPointType


logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def allocate_attribute_point(
    progression: AttributeProgression,
    attribute: Attribute | str,
    points: int = 1,
) -> AttributeProgression:
    """Add points to one attribute's progression delta.

    Does not touch the point pool; see ``spend_attribute_points``.

    Args:
        progression: Current allocation.
        attribute: Core attribute to raise.
        points: Points to add.

    Returns:
        A new AttributeProgression with the delta increased.

    Raises:
        NegativePointsError: If points is negative.
        AttributeCeilingExceededError: If the cumulative delta would exceed 100.
    """
    attr = Attribute(attribute)
    if points < 0:
        raise NegativePointsError(
            "Cannot allocate negative attribute points",
            details={"attribute": attr.value, "points": points},
        )

    new_value = progression.delta(attr) + points
    if new_value > MAX_ATTRIBUTE_ALLOCATION:
        raise AttributeCeilingExceededError(
            f"Attribute {attr.value} cannot exceed {MAX_ATTRIBUTE_ALLOCATION} points",
            attribute=attr.value,
            requested_total=new_value,
        )

    return progression.model_copy(update={attr.value: new_value})


def calculate_derived_stats(
    character: CharacterProfile,
    progression: AttributeProgression | None = None,
) -> DerivedStats:
    """Compute every derived stat from base attributes and allocation.

    Args:
        character: Supplies base attributes and base vitals.
        progression: Allocation to apply; defaults to the character's own.

    Returns:
        Freshly computed DerivedStats.
    """
    prog = progression if progression is not None else character.attribute_progression

    def total(attr: Attribute) -> int:
        return max(MIN_ATTRIBUTE_VALUE, character.base_attribute(attr) + prog.delta(attr))

    strength = total(Attribute.STRENGTH)
    dexterity = total(Attribute.DEXTERITY)
    constitution = total(Attribute.CONSTITUTION)
    intelligence = total(Attribute.INTELLIGENCE)
    wisdom = total(Attribute.WISDOM)
    charisma = total(Attribute.CHARISMA)

    max_health = max(1, character.base_max_health + constitution * 2 + prog.max_health_bonus)
    max_mana = max(
        0, round_half_up(character.base_max_mana + intelligence * 1.5 + prog.max_mana_bonus)
    )

    critical_chance = min(
        MAX_CRITICAL_CHANCE,
        max(0, round_half_up(dexterity * 0.3 + intelligence * 0.2)),
    )
    critical_multiplier = max(
        MIN_CRITICAL_MULTIPLIER,
        round_half_up((1.5 + strength * 0.02) * 100) / 100,
    )

    return DerivedStats(
        strength=strength,
        dexterity=dexterity,
        constitution=constitution,
        intelligence=intelligence,
        wisdom=wisdom,
        charisma=charisma,
        max_health=max_health,
        max_mana=max_mana,
        attack=max(1, round_half_up(strength * 0.8 + dexterity * 0.3)),
        defense=max(0, round_half_up(constitution * 0.6 + dexterity * 0.4)),
        speed=max(1, round_half_up(dexterity * 0.7 + strength * 0.2)),
        accuracy=max(0, round_half_up(dexterity * 0.6 + wisdom * 0.3)),
        evasion=max(0, round_half_up(dexterity * 0.8 + wisdom * 0.2)),
        critical_chance=critical_chance,
        critical_multiplier=critical_multiplier,
        carry_capacity=max(0, round_half_up(strength * 5) + prog.carry_capacity_bonus),
        movement_speed=max(1, round_half_up(dexterity * 0.5 + constitution * 0.3)),
        initiative_bonus=max(0, round_half_up(dexterity * 0.4 + wisdom * 0.3)),
    )


def apply_derived_stats(character: CharacterProfile) -> CharacterProfile:
    """Recompute derived stats and write them onto a copy of the character.

    Current health and mana are clamped to the new maximums. Applying twice
    gives the same result as applying once.
    """
    derived = calculate_derived_stats(character)
    return character.model_copy(
        update={
            "derived": derived,
            "max_health": derived.max_health,
            "max_mana": derived.max_mana,
            "health": min(character.health, derived.max_health),
            "mana": min(character.mana, derived.max_mana),
        },
        deep=True,
    )


def spend_attribute_points(
    character: CharacterProfile,
    attribute: Attribute | str,
    points: int = 1,
) -> CharacterProfile:
    """Spend points from the attribute pool on one attribute.

    Args:
        character: The character spending points.
        attribute: Core attribute to raise.
        points: Points to spend.

    Returns:
        A new character with the pool reduced, the allocation increased and
        derived stats recomputed.

    Raises:
        NegativePointsError: If points is negative.
        InsufficientPointsError: If the attribute pool is too small.
        AttributeCeilingExceededError: If the allocation ceiling would be exceeded.
    """
    available = character.progression_points.attribute
    if points > available:
        raise InsufficientPointsError(
            "Not enough attribute points",
            pool=ProgressionPointType.ATTRIBUTE.value,
            available=available,
            required=points,
            details={"character_id": character.id},
        )

    progression = allocate_attribute_point(character.attribute_progression, attribute, points)
    updated = character.model_copy(
        update={
            "attribute_progression": progression,
            "progression_points": character.progression_points.model_copy(
                update={"attribute": available - points}
            ),
        },
        deep=True,
    )

    logger.info(
        "Attribute points spent",
        character_id=character.id,
        attribute=Attribute(attribute).value,
        points=points,
    )
    return apply_derived_stats(updated)


__all__ = [
    "round_half_up",
    "allocate_attribute_point",
    "calculate_derived_stats",
    "apply_derived_stats",
    "spend_attribute_points",
]
