"""Enumeration types for the StoryForge engines.

These enums cover the vocabularies shared by the progression and combat
engines: attributes, progression point pools, participant kinds, action
types, targeting rules, damage types, and status effect timing.
"""

from __future__ import annotations

from enum import StrEnum


class Attribute(StrEnum):
    """The six core character attributes."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g., 'STR')."""
        return self.value[:3].upper()


class ProgressionPointType(StrEnum):
    """Typed currencies earned on level-up."""

    ATTRIBUTE = "attribute"
    SKILL = "skill"
    SPECIALIZATION = "specialization"
    TALENT = "talent"


class SkillTreeCategory(StrEnum):
    """Skill tree groupings."""

    COMBAT = "combat"
    MAGIC = "magic"
    CRAFTING = "crafting"
    SOCIAL = "social"
    SURVIVAL = "survival"
    UTILITY = "utility"


class SkillNodeEffectType(StrEnum):
    """Kinds of benefit a skill tree node grants."""

    STAT_BONUS = "stat_bonus"
    PASSIVE_EFFECT = "passive_effect"
    COMBAT_SKILL = "combat_skill"
    RESOURCE_BONUS = "resource_bonus"
    NARRATIVE_INFLUENCE = "narrative_influence"
    UNLOCK = "unlock"
    ABILITY_UNLOCK = "ability_unlock"


class SpecializationBonusType(StrEnum):
    """Kinds of bonus a specialization grants."""

    STAT_MULTIPLIER = "stat_multiplier"
    SKILL_COST_REDUCTION = "skill_cost_reduction"
    UNIQUE_ABILITY = "unique_ability"
    RESOURCE_BONUS = "resource_bonus"


class ParticipantType(StrEnum):
    """Sides a combat participant can belong to."""

    PLAYER = "player"
    ALLY = "ally"
    ENEMY = "enemy"
    NEUTRAL = "neutral"


class CombatPhase(StrEnum):
    """Combat encounter phases."""

    INITIATIVE = "initiative"
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    RESOLUTION = "resolution"
    ENDED = "ended"


class ActionType(StrEnum):
    """Actions a participant can take on their turn."""

    ATTACK = "attack"
    DEFEND = "defend"
    SKILL = "skill"
    ITEM = "item"
    MOVE = "move"
    FLEE = "flee"
    WAIT = "wait"


class TargetType(StrEnum):
    """Targeting rule declared by a combat skill or item."""

    SELF = "self"
    SINGLE_ALLY = "single_ally"
    SINGLE_ENEMY = "single_enemy"
    ALL_ALLIES = "all_allies"
    ALL_ENEMIES = "all_enemies"
    AREA = "area"
    ANY = "any"


class DamageType(StrEnum):
    """Damage types used for resistances."""

    PHYSICAL = "physical"
    MAGICAL = "magical"
    FIRE = "fire"
    ICE = "ice"
    LIGHTNING = "lightning"
    POISON = "poison"
    HOLY = "holy"
    DARK = "dark"
    TRUE = "true"


class EffectKind(StrEnum):
    """Effect type carried by a skill or item."""

    DAMAGE = "damage"
    HEALING = "healing"
    MANA_RESTORE = "mana_restore"
    STATUS_APPLY = "status_apply"
    STATUS_REMOVE = "status_remove"
    MOVEMENT = "movement"
    SPECIAL = "special"


class EnvironmentalEffectType(StrEnum):
    """Kinds of environmental effect active in an encounter."""

    DAMAGE = "damage"
    HEALING = "healing"
    MOVEMENT = "movement"
    VISIBILITY = "visibility"
    SPECIAL = "special"


class StatusEffectKind(StrEnum):
    """Whether a status effect helps or hinders."""

    BUFF = "buff"
    DEBUFF = "debuff"
    NEUTRAL = "neutral"


class StatusEffectCategory(StrEnum):
    """Origin category of a status effect."""

    PHYSICAL = "physical"
    MAGICAL = "magical"
    MENTAL = "mental"
    ENVIRONMENTAL = "environmental"
    SPECIAL = "special"


class TickTiming(StrEnum):
    """When a status effect's modifiers are applied.

    Only START_TURN and END_TURN effects tick during turn processing;
    the others act as passive modifiers read by the calculators.
    """

    START_TURN = "start_turn"
    END_TURN = "end_turn"
    IMMEDIATE = "immediate"
    ON_ACTION = "on_action"


class ModifiedStat(StrEnum):
    """Stats a status effect modifier can target."""

    HEALTH = "health"
    MANA = "mana"
    ATTACK = "attack"
    DEFENSE = "defense"
    SPEED = "speed"
    ACCURACY = "accuracy"
    EVASION = "evasion"
    CRITICAL = "critical"
    RESISTANCE = "resistance"


class ModifierType(StrEnum):
    """How a status effect modifier combines with the base value."""

    FLAT = "flat"
    PERCENTAGE = "percentage"
    MULTIPLIER = "multiplier"


class VictoryConditionType(StrEnum):
    """Declarative victory predicates."""

    DEFEAT_ALL_ENEMIES = "defeat_all_enemies"
    SURVIVE_TURNS = "survive_turns"
    REACH_POSITION = "reach_position"
    PROTECT_TARGET = "protect_target"
    CUSTOM = "custom"


class DefeatConditionType(StrEnum):
    """Declarative defeat predicates."""

    PLAYER_DEATH = "player_death"
    ALLY_DEATH = "ally_death"
    TIME_LIMIT = "time_limit"
    OBJECTIVE_FAILED = "objective_failed"
    CUSTOM = "custom"


class CombatOutcome(StrEnum):
    """How an encounter ended."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    RETREAT = "retreat"
    STALEMATE = "stalemate"


__all__ = [
    "Attribute",
    "ProgressionPointType",
    "SkillTreeCategory",
    "SkillNodeEffectType",
    "SpecializationBonusType",
    "ParticipantType",
    "CombatPhase",
    "ActionType",
    "TargetType",
    "DamageType",
    "EffectKind",
    "EnvironmentalEffectType",
    "StatusEffectKind",
    "StatusEffectCategory",
    "TickTiming",
    "ModifiedStat",
    "ModifierType",
    "VictoryConditionType",
    "DefeatConditionType",
    "CombatOutcome",
]
