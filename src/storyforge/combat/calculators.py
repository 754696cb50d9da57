"""Damage and healing calculators.

Damage is the sum of six additive terms, scaled by the critical multiplier,
minus resistance and armor, floored and never below 0::

    (base + attribute + weapon + skill + status + environment) * crit
        - resistance - armor

Healing sums five terms and is capped at the target's missing health, with
the discarded remainder reported as overheal. Every term is its own function
so it can be tested in isolation.

There is no separate magic power stat: the attribute and skill terms scale
off the attacker's ``attack`` for physical and magical actions alike.
"""

from __future__ import annotations

import math

from storyforge.combat.dice import RandomSource, roll_percent
from storyforge.core.constants import (
    ARMOR_REDUCTION_RATIO,
    ATTRIBUTE_DAMAGE_RATIO,
    HEALING_ATTRIBUTE_RATIO,
    HEALING_BLESSING_BONUS,
    SKILL_DAMAGE_RATIO,
    UNARMED_DAMAGE_RATIO,
    WEAPON_ACCURACY_DAMAGE_RATIO,
)
from storyforge.models.combat import (
    CombatAction,
    CombatParticipant,
    CombatState,
    DamageBreakdown,
    DamageResult,
    HealingBreakdown,
    HealingResult,
)
from storyforge.models.enums import (
    ActionType,
    DamageType,
    EffectKind,
    EnvironmentalEffectType,
    ModifiedStat,
    ModifierType,
)


def _numeric(value: float | str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _flat_modifier_total(participant: CombatParticipant, stat: ModifiedStat) -> float:
    return sum(
        modifier.value
        for effect in participant.status_effects
        for modifier in effect.effects
        if modifier.stat == stat and modifier.type == ModifierType.FLAT
    )


def _environment_total(state: CombatState, kind: EnvironmentalEffectType) -> int:
    if state.environment is None:
        return 0
    return sum(effect.value for effect in state.environment.effects if effect.type == kind)


# =============================================================================
# Damage Terms
# =============================================================================


def get_damage_type(attacker: CombatParticipant, action: CombatAction) -> DamageType:
    """Physical for attacks; the skill damage effect's type for skills."""
    if action.type == ActionType.SKILL:
        skill = attacker.get_skill(action.skill_id)
        if skill is not None:
            damage = next((e for e in skill.effects if e.type == EffectKind.DAMAGE), None)
            if damage is not None and damage.damage_type is not None:
                return damage.damage_type
    return DamageType.PHYSICAL


def get_base_damage(attacker: CombatParticipant, action: CombatAction) -> int:
    """Weapon damage for armed attacks, the skill's damage value for skills.

    Unarmed attacks deal half the attack stat, rounded down.
    """
    if action.type == ActionType.ATTACK and attacker.equipped_weapon is not None:
        return attacker.equipped_weapon.damage

    if action.type == ActionType.SKILL and action.skill_id:
        skill = attacker.get_skill(action.skill_id)
        if skill is not None:
            damage = next((e for e in skill.effects if e.type == EffectKind.DAMAGE), None)
            return int(_numeric(damage.value)) if damage is not None else 0

    return math.floor(attacker.attack * UNARMED_DAMAGE_RATIO)


def get_attribute_modifier(attacker: CombatParticipant) -> int:
    """10% of the attack stat."""
    return math.floor(attacker.attack * ATTRIBUTE_DAMAGE_RATIO)


def get_weapon_bonus(attacker: CombatParticipant, action: CombatAction) -> int:
    """5% of weapon accuracy, for weapon attacks only."""
    if attacker.equipped_weapon is None or action.type != ActionType.ATTACK:
        return 0
    return math.floor(attacker.equipped_weapon.accuracy * WEAPON_ACCURACY_DAMAGE_RATIO)


def get_skill_bonus(attacker: CombatParticipant, action: CombatAction) -> int:
    """5% of the attack stat, for skills only."""
    if action.type != ActionType.SKILL or not action.skill_id:
        return 0
    return math.floor(attacker.attack * SKILL_DAMAGE_RATIO)


def get_status_damage_modifier(attacker: CombatParticipant) -> float:
    """Sum of the attacker's flat attack modifiers."""
    return _flat_modifier_total(attacker, ModifiedStat.ATTACK)


def get_critical_chance(attacker: CombatParticipant, action: CombatAction) -> float:
    """Base critical chance plus weapon bonus (attacks only) plus flat modifiers."""
    chance: float = attacker.critical_chance
    if attacker.equipped_weapon is not None and action.type == ActionType.ATTACK:
        chance += attacker.equipped_weapon.critical_chance
    return chance + _flat_modifier_total(attacker, ModifiedStat.CRITICAL)


def roll_critical(
    attacker: CombatParticipant,
    action: CombatAction,
    rng: RandomSource,
) -> tuple[bool, float]:
    """Roll for a critical hit.

    Returns:
        Whether the hit is critical and the multiplier to apply (1.0 if not).
    """
    is_critical = roll_percent(rng) < get_critical_chance(attacker, action)
    return is_critical, attacker.critical_multiplier if is_critical else 1.0


def get_resistance(target: CombatParticipant, damage_type: DamageType) -> int:
    """Armor resistance for the damage type plus flat resistance modifiers."""
    resistance = 0.0
    if target.equipped_armor is not None:
        resistance += target.equipped_armor.resistance.get(damage_type.value, 0)
    resistance += _flat_modifier_total(target, ModifiedStat.RESISTANCE)
    return int(resistance)


def get_armor_reduction(target: CombatParticipant, damage_type: DamageType) -> int:
    """Half the armor's defense against physical damage."""
    if target.equipped_armor is None or damage_type != DamageType.PHYSICAL:
        return 0
    return math.floor(target.equipped_armor.defense * ARMOR_REDUCTION_RATIO)


def get_environmental_damage_modifier(state: CombatState) -> int:
    """Sum of the environment's damage effects."""
    return _environment_total(state, EnvironmentalEffectType.DAMAGE)


def calculate_damage(
    attacker: CombatParticipant,
    target: CombatParticipant,
    action: CombatAction,
    state: CombatState,
    rng: RandomSource,
) -> DamageResult:
    """Resolve the damage one action deals to one target.

    Args:
        attacker: The participant acting.
        target: The participant being hit.
        action: The attack or skill action.
        state: Supplies environmental modifiers.
        rng: Random source for the critical roll.

    Returns:
        DamageResult with the final damage and a full breakdown.
    """
    damage_type = get_damage_type(attacker, action)

    base = get_base_damage(attacker, action)
    attribute = get_attribute_modifier(attacker)
    weapon = get_weapon_bonus(attacker, action)
    skill = get_skill_bonus(attacker, action)
    status = get_status_damage_modifier(attacker)
    is_critical, crit_multiplier = roll_critical(attacker, action, rng)
    resistance = get_resistance(target, damage_type)
    armor = get_armor_reduction(target, damage_type)
    environment = get_environmental_damage_modifier(state)

    pre_mitigation = (base + attribute + weapon + skill + status + environment) * crit_multiplier
    final = max(0, math.floor(pre_mitigation - resistance - armor))

    return DamageResult(
        target_id=target.id,
        damage_type=damage_type,
        base_damage=base,
        final_damage=final,
        is_critical=is_critical,
        is_blocked=final == 0 and pre_mitigation > 0,
        breakdown=DamageBreakdown(
            base_damage=base,
            attribute_modifier=attribute,
            weapon_bonus=weapon,
            skill_bonus=skill,
            status_effect_modifier=status,
            critical_multiplier=crit_multiplier,
            resistance=resistance,
            armor_reduction=armor,
            environmental_modifier=environment,
        ),
    )


# =============================================================================
# Healing Terms
# =============================================================================


def get_base_healing(healer: CombatParticipant, action: CombatAction) -> int:
    """The healing value of the skill or item used; 0 otherwise."""
    if action.type == ActionType.SKILL and action.skill_id:
        skill = healer.get_skill(action.skill_id)
        if skill is not None:
            healing = next((e for e in skill.effects if e.type == EffectKind.HEALING), None)
            return int(_numeric(healing.value)) if healing is not None else 0

    if action.type == ActionType.ITEM and action.item_id:
        item = healer.get_item(action.item_id)
        if item is not None:
            healing = next((e for e in item.effects if e.type == EffectKind.HEALING), None)
            return int(_numeric(healing.value)) if healing is not None else 0

    return 0


def get_healing_attribute_modifier(healer: CombatParticipant) -> int:
    """5% of the healer's attack stat."""
    return math.floor(healer.attack * HEALING_ATTRIBUTE_RATIO)


def get_healing_skill_bonus(healer: CombatParticipant, action: CombatAction) -> int:
    # Healing skills have no levels yet.
    return 0


def get_status_healing_modifier(healer: CombatParticipant) -> int:
    """A flat bonus for each blessing or healing effect on the healer."""
    return sum(
        HEALING_BLESSING_BONUS
        for effect in healer.status_effects
        if "blessing" in effect.name.lower() or "healing" in effect.name.lower()
    )


def get_environmental_healing_modifier(state: CombatState) -> int:
    """Sum of the environment's healing effects."""
    return _environment_total(state, EnvironmentalEffectType.HEALING)


def calculate_healing(
    healer: CombatParticipant,
    target: CombatParticipant,
    action: CombatAction,
    state: CombatState,
) -> HealingResult:
    """Resolve the healing one action gives one target.

    Returns:
        HealingResult whose ``final_healing`` never exceeds the target's
        missing health; the excess is reported as ``overheal``.
    """
    base = get_base_healing(healer, action)
    attribute = get_healing_attribute_modifier(healer)
    skill = get_healing_skill_bonus(healer, action)
    status = get_status_healing_modifier(healer)
    environment = get_environmental_healing_modifier(state)

    total = base + attribute + skill + status + environment
    final = max(0, min(total, target.max_health - target.health))

    return HealingResult(
        target_id=target.id,
        base_healing=base,
        final_healing=final,
        overheal=max(0, total - final),
        breakdown=HealingBreakdown(
            base_healing=base,
            attribute_modifier=attribute,
            skill_bonus=skill,
            status_effect_modifier=status,
            environmental_modifier=environment,
        ),
    )


__all__ = [
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
]
