"""Character progression engine.

Pure functions that take a CharacterProfile (and reference data) and return
an updated copy. Inputs are never mutated.

Submodules:
    experience: XP curve, level-up check and per-level rewards
    leveling: Multi-level level-up orchestration
    attributes: Attribute allocation and derived stats
    skill_tree: Skill node unlocking, purchase and tree validation
    specializations: Specialization availability and activation
    specialization_trees: Specialization point pool, tree unlocking and node purchase
    catalog: Default skill trees and specializations

Example:
    >>> from storyforge.models import initialize_character_progression
    >>> from storyforge.progression import award_experience, process_level_up
    >>> hero = initialize_character_progression({"name": "Aria"})
    >>> hero = process_level_up(award_experience(hero, 500))
    >>> hero.level
    4
"""

from __future__ import annotations

from storyforge.progression.attributes import (
    allocate_attribute_point,
    apply_derived_stats,
    calculate_derived_stats,
    round_half_up,
    spend_attribute_points,
)
from storyforge.progression.catalog import (
    COMBAT_SKILL_TREE,
    CRAFTING_SKILL_TREE,
    DEFAULT_SKILL_TREES,
    DEFAULT_SPECIALIZATION_TREES,
    DEFAULT_SPECIALIZATIONS,
    MAGIC_SKILL_TREE,
    get_skill_tree_by_id,
    get_specialization_by_id,
    get_specialization_tree_by_id,
)
from storyforge.progression.experience import (
    LevelUpCheck,
    award_experience,
    check_level_up,
    points_for_level,
    total_xp_for_level,
    xp_to_next_level,
)
from storyforge.progression.leveling import (
    LevelUpResult,
    process_level_up,
    process_level_up_with_report,
)
from storyforge.progression.skill_tree import (
    can_purchase,
    get_unlocked_nodes,
    inspect_node,
    is_unlocked,
    purchase,
    validate_skill_tree,
)
from storyforge.progression.specialization_trees import (
    calculate_initial_specialization_points,
    check_tree_requirements,
    earn_specialization_points,
    initialize_specialization_progression,
    purchase_specialization_node,
    unlock_connected_nodes,
    unlock_specialization_tree,
)
from storyforge.progression.specializations import (
    CatalogEntry,
    SpecializationScreening,
    activate,
    get_available,
    screen_specializations,
)


__all__ = [
    # Experience
    "LevelUpCheck",
    "xp_to_next_level",
    "total_xp_for_level",
    "check_level_up",
    "points_for_level",
    "award_experience",
    # Leveling
    "LevelUpResult",
    "process_level_up",
    "process_level_up_with_report",
    # Attributes
    "round_half_up",
    "allocate_attribute_point",
    "calculate_derived_stats",
    "apply_derived_stats",
    "spend_attribute_points",
    # Skill trees
    "inspect_node",
    "is_unlocked",
    "can_purchase",
    "purchase",
    "get_unlocked_nodes",
    "validate_skill_tree",
    # Specializations
    "CatalogEntry",
    "SpecializationScreening",
    "screen_specializations",
    "get_available",
    "activate",
    # Specialization trees
    "calculate_initial_specialization_points",
    "initialize_specialization_progression",
    "earn_specialization_points",
    "check_tree_requirements",
    "unlock_connected_nodes",
    "unlock_specialization_tree",
    "purchase_specialization_node",
    # Catalog
    "COMBAT_SKILL_TREE",
    "MAGIC_SKILL_TREE",
    "CRAFTING_SKILL_TREE",
    "DEFAULT_SKILL_TREES",
    "DEFAULT_SPECIALIZATIONS",
    "get_skill_tree_by_id",
    "get_specialization_by_id",
    "DEFAULT_SPECIALIZATION_TREES",
    "get_specialization_tree_by_id",
]
