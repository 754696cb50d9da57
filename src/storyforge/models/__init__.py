"""Pydantic V2 schemas for the StoryForge engines.

Every record accepts and emits the host's camelCase JSON keys while staying
snake_case in Python, so saved characters and encounters round-trip
unchanged.

Submodules:
    enums: Enumeration types (Attribute, ActionType, TargetType, etc.)
    base: Shared base model and the Skipped marker
    character: CharacterProfile and its progression components
    skill_tree: Skill trees, nodes, specializations and specialization trees
    combat: Participants, status effects, actions, state and results

Example:
    >>> from storyforge.models import initialize_character_progression
    >>> hero = initialize_character_progression({"name": "Aria", "level": 2})
    >>> hero.experience_to_next_level
    150
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from storyforge.models.enums import (
    ActionType,
    Attribute,
    CombatOutcome,
    CombatPhase,
    DamageType,
    DefeatConditionType,
    EffectKind,
    EnvironmentalEffectType,
    ModifiedStat,
    ModifierType,
    ParticipantType,
    ProgressionPointType,
    SkillNodeEffectType,
    SkillTreeCategory,
    SpecializationBonusType,
    StatusEffectCategory,
    StatusEffectKind,
    TargetType,
    TickTiming,
    VictoryConditionType,
)

# =============================================================================
# Base
# =============================================================================
from storyforge.models.base import Skipped, StoryForgeModel

# =============================================================================
# Skill Trees
# =============================================================================
from storyforge.models.skill_tree import (
    NodePosition,
    SkillNodeEffect,
    SkillTree,
    SkillTreeConnection,
    SkillTreeLayout,
    SkillTreeNode,
    Specialization,
    SpecializationBonus,
    SpecializationProgression,
    SpecializationProgressionRecord,
    SpecializationRequirement,
    SpecializationTier,
    SpecializationTree,
    SpecializationTreeNode,
)

# =============================================================================
# Characters
# =============================================================================
from storyforge.models.character import (
    AttributeProgression,
    CharacterProfile,
    DerivedStats,
    ProgressionPoints,
    RawCharacterProfile,
    initialize_character_progression,
)

# =============================================================================
# Combat
# =============================================================================
from storyforge.models.combat import (
    CombatAction,
    CombatActionResult,
    CombatArmor,
    CombatConsequence,
    CombatEndResult,
    CombatEnvironment,
    CombatItem,
    CombatParticipant,
    CombatReward,
    CombatSkill,
    CombatState,
    CombatTurnResult,
    CombatWeapon,
    DamageBreakdown,
    DamageResult,
    DefeatCondition,
    EnvironmentalEffect,
    HealingBreakdown,
    HealingResult,
    ItemEffect,
    ManaRestoreResult,
    MovementResult,
    Position,
    SkillEffect,
    StatusEffect,
    StatusEffectApplication,
    StatusEffectModifier,
    StatusEffectRemoval,
    VictoryCondition,
)


__all__ = [
    # Enums
    "ActionType",
    "Attribute",
    "CombatOutcome",
    "CombatPhase",
    "DamageType",
    "DefeatConditionType",
    "EffectKind",
    "EnvironmentalEffectType",
    "ModifiedStat",
    "ModifierType",
    "ParticipantType",
    "ProgressionPointType",
    "SkillNodeEffectType",
    "SkillTreeCategory",
    "SpecializationBonusType",
    "StatusEffectCategory",
    "StatusEffectKind",
    "TargetType",
    "TickTiming",
    "VictoryConditionType",
    # Base
    "StoryForgeModel",
    "Skipped",
    # Skill trees
    "NodePosition",
    "SkillNodeEffect",
    "SkillTree",
    "SkillTreeConnection",
    "SkillTreeLayout",
    "SkillTreeNode",
    "Specialization",
    "SpecializationBonus",
    "SpecializationProgression",
    "SpecializationProgressionRecord",
    "SpecializationRequirement",
    "SpecializationTier",
    "SpecializationTree",
    "SpecializationTreeNode",
    # Characters
    "AttributeProgression",
    "CharacterProfile",
    "DerivedStats",
    "ProgressionPoints",
    "RawCharacterProfile",
    "initialize_character_progression",
    # Combat
    "CombatAction",
    "CombatActionResult",
    "CombatArmor",
    "CombatConsequence",
    "CombatEndResult",
    "CombatEnvironment",
    "CombatItem",
    "CombatParticipant",
    "CombatReward",
    "CombatSkill",
    "CombatState",
    "CombatTurnResult",
    "CombatWeapon",
    "DamageBreakdown",
    "DamageResult",
    "DefeatCondition",
    "EnvironmentalEffect",
    "HealingBreakdown",
    "HealingResult",
    "ItemEffect",
    "ManaRestoreResult",
    "MovementResult",
    "Position",
    "SkillEffect",
    "StatusEffect",
    "StatusEffectApplication",
    "StatusEffectModifier",
    "StatusEffectRemoval",
    "VictoryCondition",
]
