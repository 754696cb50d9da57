"""Combat resolution engine.

Turn-based encounters resolved as pure transitions: every operation takes a
CombatState and returns a new one. Randomness comes from an injected
``RandomSource`` so encounters replay exactly under a seeded rng.

Submodules:
    dice: Random source protocol and percent rolls
    status_effects: Status effect library, stacking and ticking
    calculators: Damage and healing formulas
    validation: Action legality checks
    initiative: Initiative rolls and turn rotation
    conditions: Victory and defeat evaluation
    engine: Combat setup and the action pipeline

Example:
    >>> import random
    >>> from storyforge.combat import start_combat, process_combat_action
    >>> state = start_combat([hero, goblin], rng=random.Random(1))
    >>> state.round
    1
"""

from __future__ import annotations

from storyforge.combat.calculators import (
    calculate_damage,
    calculate_healing,
    get_armor_reduction,
    get_attribute_modifier,
    get_base_damage,
    get_base_healing,
    get_critical_chance,
    get_damage_type,
    get_environmental_damage_modifier,
    get_environmental_healing_modifier,
    get_healing_attribute_modifier,
    get_healing_skill_bonus,
    get_resistance,
    get_skill_bonus,
    get_status_damage_modifier,
    get_status_healing_modifier,
    get_weapon_bonus,
    roll_critical,
)
from storyforge.combat.conditions import check_combat_end, is_defeat_met, is_victory_met
from storyforge.combat.dice import RandomSource, get_default_rng, roll_percent
from storyforge.combat.engine import (
    create_participant_from_character,
    process_combat_action,
    start_combat,
)
from storyforge.combat.initiative import advance_turn, calculate_initiative, roll_initiative
from storyforge.combat.status_effects import (
    STATUS_EFFECTS_LIBRARY,
    TICKING_TIMINGS,
    apply_status_effect,
    can_apply_status_effect,
    clear_dispellable_effects,
    create_custom_status_effect,
    create_status_effect,
    get_effective_stat_value,
    get_status_effect,
    get_status_effects_by_category,
    get_status_effects_by_kind,
    has_status_effect,
    remove_status_effect,
    remove_status_effect_by_name,
    tick_status_effects,
)
from storyforge.combat.validation import (
    ValidationResult,
    is_valid_target,
    required_mana,
    validate_action,
)


__all__ = [
    # Dice
    "RandomSource",
    "get_default_rng",
    "roll_percent",
    # Status effects
    "STATUS_EFFECTS_LIBRARY",
    "TICKING_TIMINGS",
    "create_status_effect",
    "create_custom_status_effect",
    "get_status_effect",
    "has_status_effect",
    "can_apply_status_effect",
    "apply_status_effect",
    "tick_status_effects",
    "get_effective_stat_value",
    "remove_status_effect",
    "remove_status_effect_by_name",
    "clear_dispellable_effects",
    "get_status_effects_by_category",
    "get_status_effects_by_kind",
    # Calculators
    "get_damage_type",
    "get_base_damage",
    "get_attribute_modifier",
    "get_weapon_bonus",
    "get_skill_bonus",
    "get_status_damage_modifier",
    "get_critical_chance",
    "roll_critical",
    "get_resistance",
    "get_armor_reduction",
    "get_environmental_damage_modifier",
    "calculate_damage",
    "get_base_healing",
    "get_healing_attribute_modifier",
    "get_healing_skill_bonus",
    "get_status_healing_modifier",
    "get_environmental_healing_modifier",
    "calculate_healing",
    # Validation
    "ValidationResult",
    "required_mana",
    "is_valid_target",
    "validate_action",
    # Turn order
    "roll_initiative",
    "calculate_initiative",
    "advance_turn",
    # Conditions
    "is_victory_met",
    "is_defeat_met",
    "check_combat_end",
    # Engine
    "create_participant_from_character",
    "start_combat",
    "process_combat_action",
]
