"""Status effect library, stacking and ticking.

Effects come in two flavors. Health and mana modifiers on a ``start_turn``
or ``end_turn`` effect are applied to the participant on each matching tick.
Every other modifier is passive: it never changes the participant and is only
read by the damage and healing calculators.

All functions here return new participants; inputs are not mutated.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from uuid import uuid4

from storyforge.core.exceptions import CombatError
from storyforge.core.logging import get_logger
from storyforge.models.combat import CombatParticipant, StatusEffect, StatusEffectModifier
from storyforge.models.enums import (
    ModifiedStat,
    ModifierType,
    StatusEffectCategory,
    StatusEffectKind,
    TickTiming,
)


logger = get_logger(__name__)

TICKING_TIMINGS = frozenset({TickTiming.START_TURN, TickTiming.END_TURN})


def _mod(stat: ModifiedStat, kind: ModifierType, value: float) -> StatusEffectModifier:
    return StatusEffectModifier(stat=stat, type=kind, value=value)


def _template(
    name: str,
    description: str,
    kind: StatusEffectKind,
    category: StatusEffectCategory,
    effects: list[StatusEffectModifier],
    *,
    duration: int,
    max_stacks: int,
    can_dispel: bool,
    tick_timing: TickTiming,
) -> StatusEffect:
    return StatusEffect(
        id="",
        name=name,
        description=description,
        type=kind,
        category=category,
        effects=effects,
        duration=duration,
        max_stacks=max_stacks,
        can_dispel=can_dispel,
        tick_timing=tick_timing,
    )


_S = ModifiedStat
_T = ModifierType
_BUFF = StatusEffectKind.BUFF
_DEBUFF = StatusEffectKind.DEBUFF
_PHYSICAL = StatusEffectCategory.PHYSICAL
_MAGICAL = StatusEffectCategory.MAGICAL
_MENTAL = StatusEffectCategory.MENTAL

# =============================================================================
# Library
# =============================================================================

STATUS_EFFECTS_LIBRARY: dict[str, StatusEffect] = {
    # Damage over time
    "POISON": _template(
        "Poison", "Takes poison damage each turn", _DEBUFF, _PHYSICAL,
        [_mod(_S.HEALTH, _T.FLAT, -5)],
        duration=3, max_stacks=3, can_dispel=True, tick_timing=TickTiming.START_TURN,
    ),
    "BURNING": _template(
        "Burning", "Takes fire damage each turn", _DEBUFF, _MAGICAL,
        [_mod(_S.HEALTH, _T.FLAT, -8)],
        duration=2, max_stacks=2, can_dispel=True, tick_timing=TickTiming.START_TURN,
    ),
    "BLEEDING": _template(
        "Bleeding", "Loses health from wounds each turn", _DEBUFF, _PHYSICAL,
        [_mod(_S.HEALTH, _T.FLAT, -3)],
        duration=4, max_stacks=5, can_dispel=False, tick_timing=TickTiming.END_TURN,
    ),
    # Healing over time
    "REGENERATION": _template(
        "Regeneration", "Recovers health each turn", _BUFF, _MAGICAL,
        [_mod(_S.HEALTH, _T.FLAT, 10)],
        duration=5, max_stacks=2, can_dispel=False, tick_timing=TickTiming.START_TURN,
    ),
    "HEALING_AURA": _template(
        "Healing Aura", "Slowly recovers health", _BUFF, _MAGICAL,
        [_mod(_S.HEALTH, _T.FLAT, 5)],
        duration=3, max_stacks=1, can_dispel=True, tick_timing=TickTiming.END_TURN,
    ),
    # Stat modifiers
    "BLESSED": _template(
        "Blessed", "Increased attack and accuracy", _BUFF, _MAGICAL,
        [_mod(_S.ATTACK, _T.PERCENTAGE, 25), _mod(_S.ACCURACY, _T.FLAT, 15)],
        duration=4, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    "CURSED": _template(
        "Cursed", "Reduced attack and accuracy", _DEBUFF, _MAGICAL,
        [_mod(_S.ATTACK, _T.PERCENTAGE, -20), _mod(_S.ACCURACY, _T.FLAT, -10)],
        duration=3, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    "STRENGTHENED": _template(
        "Strengthened", "Increased physical damage", _BUFF, _PHYSICAL,
        [_mod(_S.ATTACK, _T.FLAT, 10)],
        duration=3, max_stacks=3, can_dispel=False, tick_timing=TickTiming.IMMEDIATE,
    ),
    "WEAKENED": _template(
        "Weakened", "Reduced physical damage", _DEBUFF, _PHYSICAL,
        [_mod(_S.ATTACK, _T.PERCENTAGE, -30)],
        duration=2, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    # Defensive
    "SHIELDED": _template(
        "Shielded", "Increased defense against attacks", _BUFF, _MAGICAL,
        [_mod(_S.DEFENSE, _T.PERCENTAGE, 40)],
        duration=3, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    "VULNERABLE": _template(
        "Vulnerable", "Takes increased damage", _DEBUFF, _MAGICAL,
        [_mod(_S.DEFENSE, _T.PERCENTAGE, -25)],
        duration=2, max_stacks=2, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    # Speed and movement
    "HASTED": _template(
        "Hasted", "Increased speed and evasion", _BUFF, _MAGICAL,
        [_mod(_S.SPEED, _T.PERCENTAGE, 50), _mod(_S.EVASION, _T.FLAT, 20)],
        duration=3, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    "SLOWED": _template(
        "Slowed", "Reduced speed and evasion", _DEBUFF, _MAGICAL,
        [_mod(_S.SPEED, _T.PERCENTAGE, -40), _mod(_S.EVASION, _T.FLAT, -15)],
        duration=2, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    "PARALYZED": _template(
        "Paralyzed", "Cannot move or act", _DEBUFF, _PHYSICAL,
        [_mod(_S.SPEED, _T.PERCENTAGE, -100), _mod(_S.EVASION, _T.PERCENTAGE, -100)],
        duration=1, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    # Critical hits
    "FOCUSED": _template(
        "Focused", "Increased critical hit chance", _BUFF, _MENTAL,
        [_mod(_S.CRITICAL, _T.FLAT, 25)],
        duration=3, max_stacks=2, can_dispel=False, tick_timing=TickTiming.IMMEDIATE,
    ),
    "CONFUSED": _template(
        "Confused", "Reduced accuracy and critical chance", _DEBUFF, _MENTAL,
        [_mod(_S.ACCURACY, _T.FLAT, -20), _mod(_S.CRITICAL, _T.FLAT, -15)],
        duration=2, max_stacks=1, can_dispel=True, tick_timing=TickTiming.IMMEDIATE,
    ),
    # Resistance
    "FIRE_RESISTANCE": _template(
        "Fire Resistance", "Reduced fire damage taken", _BUFF, _MAGICAL,
        [_mod(_S.RESISTANCE, _T.FLAT, 10)],
        duration=5, max_stacks=1, can_dispel=False, tick_timing=TickTiming.IMMEDIATE,
    ),
    "MAGIC_RESISTANCE": _template(
        "Magic Resistance", "Reduced magical damage taken", _BUFF, _MAGICAL,
        [_mod(_S.RESISTANCE, _T.FLAT, 8)],
        duration=4, max_stacks=2, can_dispel=False, tick_timing=TickTiming.IMMEDIATE,
    ),
}


# =============================================================================
# Creation
# =============================================================================


def create_status_effect(effect_key: str, source_id: str, **overrides: object) -> StatusEffect:
    """Instantiate a library effect.

    Args:
        effect_key: Library key, case-insensitive (e.g. ``"poison"``).
        source_id: Who applied the effect.
        **overrides: Field values replacing the template's.

    Returns:
        A new StatusEffect with a fresh id and one stack.

    Raises:
        CombatError: If the key is not in the library.
    """
    template = STATUS_EFFECTS_LIBRARY.get(effect_key.upper())
    if template is None:
        raise CombatError(
            f"Unknown status effect: {effect_key}",
            details={"effect_key": effect_key},
        )
    return template.model_copy(
        update={"id": str(uuid4()), "stacks": 1, "source": source_id, **overrides},
        deep=True,
    )


def create_custom_status_effect(
    name: str,
    description: str,
    effects: Sequence[StatusEffectModifier],
    duration: int,
    source_id: str,
    *,
    kind: StatusEffectKind = StatusEffectKind.NEUTRAL,
    category: StatusEffectCategory = StatusEffectCategory.SPECIAL,
    max_stacks: int = 1,
    can_dispel: bool = True,
    tick_timing: TickTiming = TickTiming.IMMEDIATE,
) -> StatusEffect:
    """Build an effect that is not in the library."""
    return StatusEffect(
        name=name,
        description=description,
        type=kind,
        category=category,
        effects=list(effects),
        duration=duration,
        stacks=1,
        max_stacks=max_stacks,
        source=source_id,
        can_dispel=can_dispel,
        tick_timing=tick_timing,
    )


# =============================================================================
# Application & Ticking
# =============================================================================


def get_status_effect(participant: CombatParticipant, effect_name: str) -> StatusEffect | None:
    """The participant's effect with the given name, if any."""
    return next((e for e in participant.status_effects if e.name == effect_name), None)


def has_status_effect(participant: CombatParticipant, effect_name: str) -> bool:
    """Whether the participant carries an effect with the given name."""
    return get_status_effect(participant, effect_name) is not None


def can_apply_status_effect(participant: CombatParticipant, effect: StatusEffect) -> bool:
    """False only when a same-named effect is already at its stack cap."""
    existing = get_status_effect(participant, effect.name)
    return existing is None or existing.stacks < existing.max_stacks


def apply_status_effect(participant: CombatParticipant, effect: StatusEffect) -> CombatParticipant:
    """Attach an effect, stacking onto a same-named one.

    A same-named effect below its cap gains the incoming stacks (capped) and
    keeps the longer duration. One already at its cap ignores the new
    application.

    Args:
        participant: Target of the effect.
        effect: The effect being applied.

    Returns:
        A new participant.
    """
    updated = participant.model_copy(deep=True)
    existing = get_status_effect(updated, effect.name)

    if existing is None:
        updated.status_effects = [*updated.status_effects, effect.model_copy(deep=True)]
        logger.debug("Status effect applied", participant_id=participant.id, effect=effect.name)
    elif existing.stacks < existing.max_stacks:
        existing.stacks = min(existing.max_stacks, existing.stacks + effect.stacks)
        existing.duration = max(existing.duration, effect.duration)
        logger.debug(
            "Status effect stacked",
            participant_id=participant.id,
            effect=effect.name,
            stacks=existing.stacks,
        )
    else:
        logger.debug(
            "Status effect at max stacks",
            participant_id=participant.id,
            effect=effect.name,
        )

    return updated


def _apply_tick_modifier(participant: CombatParticipant, modifier: StatusEffectModifier) -> None:
    delta = int(modifier.value)
    if modifier.stat == ModifiedStat.HEALTH:
        participant.health = max(0, min(participant.max_health, participant.health + delta))
    elif modifier.stat == ModifiedStat.MANA and participant.mana is not None:
        ceiling = participant.max_mana if participant.max_mana is not None else participant.mana
        participant.mana = max(0, min(ceiling, participant.mana + delta))


def tick_status_effects(participant: CombatParticipant, timing: TickTiming) -> CombatParticipant:
    """Run one tick of the participant's effects for a turn boundary.

    Each effect whose timing matches applies its health and mana modifiers
    once, then loses one turn of duration. Effects reaching 0 are removed;
    negative durations never expire.

    Args:
        participant: The participant whose effects tick.
        timing: ``START_TURN`` or ``END_TURN``; other timings never tick.

    Returns:
        A new participant.
    """
    updated = participant.model_copy(deep=True)
    if timing not in TICKING_TIMINGS:
        return updated

    remaining: list[StatusEffect] = []
    for effect in updated.status_effects:
        if effect.tick_timing != timing:
            remaining.append(effect)
            continue

        for modifier in effect.effects:
            _apply_tick_modifier(updated, modifier)

        if effect.duration > 0:
            effect.duration -= 1
            if effect.duration == 0:
                logger.debug(
                    "Status effect expired", participant_id=participant.id, effect=effect.name
                )
                continue
        remaining.append(effect)

    updated.status_effects = remaining
    return updated


# =============================================================================
# Queries & Removal
# =============================================================================


def get_effective_stat_value(
    participant: CombatParticipant,
    stat: ModifiedStat | str,
    base_value: float,
) -> int:
    """A stat value after every status effect modifier.

    Flat modifiers are added first, then percentages, then multipliers. Each
    modifier is scaled by its effect's stack count.

    Returns:
        The floored result, never below 0.
    """
    target = ModifiedStat(stat)
    flat = 0.0
    percentage = 0.0
    multiplier = 1.0

    for effect in participant.status_effects:
        for modifier in effect.effects:
            if modifier.stat != target:
                continue
            if modifier.type == ModifierType.FLAT:
                flat += modifier.value * effect.stacks
            elif modifier.type == ModifierType.PERCENTAGE:
                percentage += modifier.value * effect.stacks
            else:
                multiplier *= modifier.value**effect.stacks

    value = (base_value + flat) * (1 + percentage / 100) * multiplier
    return max(0, math.floor(value))


def remove_status_effect(
    participant: CombatParticipant, effect_id: str
) -> tuple[CombatParticipant, bool]:
    """Remove an effect by instance id.

    Returns:
        The new participant and whether anything was removed.
    """
    kept = [e for e in participant.status_effects if e.id != effect_id]
    removed = len(kept) < len(participant.status_effects)
    return participant.model_copy(update={"status_effects": kept}, deep=True), removed


def remove_status_effect_by_name(
    participant: CombatParticipant, effect_name: str
) -> tuple[CombatParticipant, bool]:
    """Remove every effect with the given name.

    Returns:
        The new participant and whether anything was removed.
    """
    kept = [e for e in participant.status_effects if e.name != effect_name]
    removed = len(kept) < len(participant.status_effects)
    return participant.model_copy(update={"status_effects": kept}, deep=True), removed


def clear_dispellable_effects(
    participant: CombatParticipant,
    kind: StatusEffectKind | None = None,
) -> tuple[CombatParticipant, int]:
    """Dispel every dispellable effect, optionally only buffs or debuffs.

    Returns:
        The new participant and the number of effects removed.
    """
    kept = [
        e
        for e in participant.status_effects
        if not e.can_dispel or (kind is not None and e.type != kind)
    ]
    cleared = len(participant.status_effects) - len(kept)
    return participant.model_copy(update={"status_effects": kept}, deep=True), cleared


def get_status_effects_by_category(
    participant: CombatParticipant, category: StatusEffectCategory
) -> list[StatusEffect]:
    return [e for e in participant.status_effects if e.category == category]


def get_status_effects_by_kind(
    participant: CombatParticipant, kind: StatusEffectKind
) -> list[StatusEffect]:
    return [e for e in participant.status_effects if e.type == kind]


__all__ = [
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
]
