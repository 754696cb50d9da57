"""Combat resolution engine.

``process_combat_action`` runs one action through the full pipeline:
validate, execute against the current snapshot, apply the results to a copy,
check end conditions, then advance the turn. Rejected actions come back as a
failed CombatTurnResult with the state untouched; nothing here raises for
game-flow reasons.

Example:
    >>> import random
    >>> state = start_combat([hero, goblin], rng=random.Random(7))
    >>> action = CombatAction(type="attack", actor_id=state.current_turn_id,
    ...                       target_id=goblin.id)
    >>> result = process_combat_action(state, action, rng=random.Random(7))
    >>> result.success
    True
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from storyforge.combat.calculators import calculate_damage, calculate_healing
from storyforge.combat.conditions import check_combat_end
from storyforge.combat.dice import RandomSource, get_default_rng, roll_percent
from storyforge.combat.initiative import advance_turn, roll_initiative
from storyforge.combat.status_effects import (
    STATUS_EFFECTS_LIBRARY,
    apply_status_effect,
    can_apply_status_effect,
    create_status_effect,
    has_status_effect,
    remove_status_effect_by_name,
)
from storyforge.combat.validation import required_mana, validate_action
from storyforge.core.constants import DEFAULT_ACTION_POINTS
from storyforge.core.exceptions import CombatError, InvalidCombatSetupError
from storyforge.core.logging import get_logger, log_context
from storyforge.models.character import CharacterProfile
from storyforge.models.combat import (
    CombatAction,
    CombatActionResult,
    CombatArmor,
    CombatEnvironment,
    CombatItem,
    CombatParticipant,
    CombatSkill,
    CombatState,
    CombatTurnResult,
    CombatWeapon,
    DefeatCondition,
    ManaRestoreResult,
    MovementResult,
    Position,
    StatusEffect,
    StatusEffectApplication,
    StatusEffectModifier,
    StatusEffectRemoval,
    VictoryCondition,
)
from storyforge.models.enums import (
    ActionType,
    DefeatConditionType,
    EffectKind,
    ModifiedStat,
    ModifierType,
    ParticipantType,
    StatusEffectCategory,
    StatusEffectKind,
    TargetType,
    TickTiming,
    VictoryConditionType,
)
from storyforge.progression.attributes import calculate_derived_stats


logger = get_logger(__name__)


# =============================================================================
# Setup
# =============================================================================


def create_participant_from_character(
    character: CharacterProfile,
    participant_type: ParticipantType = ParticipantType.PLAYER,
    *,
    weapon: CombatWeapon | None = None,
    armor: CombatArmor | None = None,
    skills: Sequence[CombatSkill] = (),
    items: Sequence[CombatItem] = (),
    position: Position | None = None,
    max_action_points: int = DEFAULT_ACTION_POINTS,
) -> CombatParticipant:
    """Build a combat participant from a character's derived stats.

    Stats are recomputed rather than read from ``character.derived`` so a
    stale snapshot cannot leak into combat.
    """
    derived = calculate_derived_stats(character)
    return CombatParticipant(
        id=character.id,
        name=character.name,
        type=participant_type,
        health=min(character.health, derived.max_health),
        max_health=derived.max_health,
        mana=min(character.mana, derived.max_mana),
        max_mana=derived.max_mana,
        attack=derived.attack,
        defense=derived.defense,
        speed=derived.speed,
        accuracy=derived.accuracy,
        evasion=derived.evasion,
        critical_chance=derived.critical_chance,
        critical_multiplier=derived.critical_multiplier,
        action_points=max_action_points,
        max_action_points=max_action_points,
        position=position,
        equipped_weapon=weapon,
        equipped_armor=armor,
        available_skills=list(skills),
        available_items=list(items),
    )


def start_combat(
    participants: Sequence[CombatParticipant],
    *,
    victory_conditions: Sequence[VictoryCondition] | None = None,
    defeat_conditions: Sequence[DefeatCondition] | None = None,
    environment: CombatEnvironment | None = None,
    turn_time_limit: int | None = None,
    rng: RandomSource | None = None,
    now: datetime | None = None,
) -> CombatState:
    """Create a fresh encounter and roll its turn order.

    Without explicit conditions the encounter is won by defeating every
    enemy and lost when every player falls.

    Args:
        participants: Everyone in the encounter.
        victory_conditions: Checked in order after each action.
        defeat_conditions: Checked in order after the victory conditions.
        environment: Optional battlefield effects.
        turn_time_limit: Optional per-turn limit in seconds.
        rng: Random source for initiative; defaults to ``get_default_rng()``.
        now: Start time; defaults to the current UTC time.

    Returns:
        A new active CombatState in round 1.

    Raises:
        InvalidCombatSetupError: If there are no participants, ids repeat,
            or nobody is able to act.
    """
    if not participants:
        raise InvalidCombatSetupError("Cannot start combat without participants")

    ids = [p.id for p in participants]
    duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
    if duplicates:
        raise InvalidCombatSetupError(
            "Participant ids must be unique",
            details={"duplicate_ids": duplicates},
        )

    rng = rng if rng is not None else get_default_rng()
    now = now if now is not None else datetime.now(UTC)

    rolls = dict(roll_initiative(participants, rng))
    turn_order = list(rolls)
    roster = [
        p.model_copy(update={"initiative": rolls[p.id]}, deep=True) for p in participants
    ]

    first = next(
        (pid for pid in turn_order if any(p.id == pid and p.is_alive for p in roster)),
        None,
    )
    if first is None:
        raise InvalidCombatSetupError("Cannot start combat with no conscious participant")

    roster = [
        p.model_copy(update={"action_points": p.max_action_points}) if p.id == first else p
        for p in roster
    ]

    state = CombatState(
        participants=roster,
        current_turn_id=first,
        turn_order=turn_order,
        round=1,
        environment=environment,
        victory_conditions=list(
            victory_conditions
            if victory_conditions is not None
            else [
                VictoryCondition(
                    type=VictoryConditionType.DEFEAT_ALL_ENEMIES,
                    description="All enemies defeated",
                )
            ]
        ),
        defeat_conditions=list(
            defeat_conditions
            if defeat_conditions is not None
            else [
                DefeatCondition(
                    type=DefeatConditionType.PLAYER_DEATH,
                    description="All players have fallen",
                )
            ]
        ),
        start_time=now,
        turn_start_time=now,
        turn_time_limit=turn_time_limit,
    )

    logger.info(
        "Combat started",
        combat_id=state.id,
        participants=len(roster),
        first_turn=first,
    )
    return state


# =============================================================================
# Execution
# =============================================================================


def _defending_effect(actor: CombatParticipant) -> StatusEffect:
    return StatusEffect(
        name="Defending",
        description="Reduced damage taken",
        type=StatusEffectKind.BUFF,
        category=StatusEffectCategory.PHYSICAL,
        effects=[
            StatusEffectModifier(stat=ModifiedStat.DEFENSE, type=ModifierType.PERCENTAGE, value=50)
        ],
        duration=1,
        max_stacks=1,
        source=actor.id,
        can_dispel=False,
        tick_timing=TickTiming.START_TURN,
    )


def _mana_restore(target: CombatParticipant, amount: float) -> ManaRestoreResult | None:
    if target.mana is None:
        return None
    ceiling = target.max_mana if target.max_mana is not None else target.mana
    restored = max(0, min(int(amount), ceiling - target.mana))
    return ManaRestoreResult(target_id=target.id, amount=restored)


def _status_application(
    actor: CombatParticipant,
    target: CombatParticipant,
    effect_key: str,
    chance: float,
    rng: RandomSource,
) -> StatusEffectApplication | None:
    if effect_key.upper() not in STATUS_EFFECTS_LIBRARY:
        logger.warning("Unknown status effect on action", effect_key=effect_key)
        return None

    effect = create_status_effect(effect_key, actor.id)
    landed = chance >= 100 or roll_percent(rng) < chance
    return StatusEffectApplication(
        target_id=target.id,
        status_effect=effect,
        success=landed and can_apply_status_effect(target, effect),
        stacks_applied=effect.stacks,
    )


def _resolve_target(
    state: CombatState,
    actor: CombatParticipant,
    action: CombatAction,
    target_type: TargetType,
) -> CombatParticipant | None:
    if action.target_id:
        return state.get_participant(action.target_id)
    if target_type == TargetType.SELF:
        return actor
    return None


def _execute_skill(
    state: CombatState,
    actor: CombatParticipant,
    action: CombatAction,
    result: CombatActionResult,
    rng: RandomSource,
) -> str:
    skill = actor.get_skill(action.skill_id)
    if skill is None:
        return f"{actor.name} failed to use a skill"

    target = _resolve_target(state, actor, action, skill.target_type)
    description = f"{actor.name} uses {skill.name}"
    if target is None:
        return description

    damage_done = healing_done = False
    for effect in skill.effects:
        match effect.type:
            case EffectKind.DAMAGE if not damage_done:
                damage = calculate_damage(actor, target, action, state, rng)
                result.damage_dealt.append(damage)
                description += f" dealing {damage.final_damage} damage to {target.name}"
                damage_done = True
            case EffectKind.HEALING if not healing_done:
                healing = calculate_healing(actor, target, action, state)
                result.healing_done.append(healing)
                description += f" healing {target.name} for {healing.final_healing} health"
                healing_done = True
            case EffectKind.MANA_RESTORE:
                restored = _mana_restore(target, float(effect.value))
                if restored is not None:
                    result.mana_restored.append(restored)
                    description += f" restoring {restored.amount} mana to {target.name}"
            case EffectKind.STATUS_APPLY:
                key = effect.status_effect_id or str(effect.value)
                application = _status_application(actor, target, key, effect.chance, rng)
                if application is not None:
                    result.status_effects_applied.append(application)
                    if application.success:
                        description += (
                            f" applying {application.status_effect.name} to {target.name}"
                        )
            case EffectKind.STATUS_REMOVE:
                name = str(effect.value)
                if has_status_effect(target, name):
                    result.status_effects_removed.append(
                        StatusEffectRemoval(target_id=target.id, effect_name=name)
                    )
                    description += f" removing {name} from {target.name}"

    return description


def _execute_item(
    state: CombatState,
    actor: CombatParticipant,
    action: CombatAction,
    result: CombatActionResult,
    rng: RandomSource,
) -> str:
    item = actor.get_item(action.item_id)
    if item is None:
        return f"{actor.name} failed to use an item"

    target = _resolve_target(state, actor, action, TargetType.SELF)
    description = f"{actor.name} uses {item.name}"
    if target is None:
        return description

    healing_done = False
    for effect in item.effects:
        match effect.type:
            case EffectKind.HEALING if not healing_done:
                healing = calculate_healing(actor, target, action, state)
                result.healing_done.append(healing)
                description += f" healing {target.name} for {healing.final_healing} health"
                healing_done = True
            case EffectKind.MANA_RESTORE:
                restored = _mana_restore(target, float(effect.value))
                if restored is not None:
                    result.mana_restored.append(restored)
                    description += f" restoring {restored.amount} mana to {target.name}"
            case EffectKind.STATUS_APPLY:
                application = _status_application(actor, target, str(effect.value), 100, rng)
                if application is not None:
                    result.status_effects_applied.append(application)
            case EffectKind.STATUS_REMOVE:
                name = str(effect.value)
                if has_status_effect(target, name):
                    result.status_effects_removed.append(
                        StatusEffectRemoval(target_id=target.id, effect_name=name)
                    )

    return description


def _execute(
    state: CombatState,
    action: CombatAction,
    rng: RandomSource,
    now: datetime,
) -> CombatActionResult:
    actor = state.get_participant(action.actor_id)
    if actor is None:
        raise CombatError(
            f"Actor {action.actor_id} is not in the encounter",
            participant_id=action.actor_id,
            round_number=state.round,
        )
    target = state.get_participant(action.target_id) if action.target_id else None

    result = CombatActionResult(action=action, timestamp=now)

    match action.type:
        case ActionType.ATTACK:
            if target is not None:
                damage = calculate_damage(actor, target, action, state, rng)
                result.damage_dealt.append(damage)
                result.description = (
                    f"{actor.name} attacks {target.name} for {damage.final_damage} damage"
                    + (" (Critical Hit!)" if damage.is_critical else "")
                )
        case ActionType.SKILL:
            result.description = _execute_skill(state, actor, action, result, rng)
        case ActionType.ITEM:
            result.description = _execute_item(state, actor, action, result, rng)
        case ActionType.DEFEND:
            result.status_effects_applied.append(
                StatusEffectApplication(
                    target_id=actor.id,
                    status_effect=_defending_effect(actor),
                    success=True,
                )
            )
            result.description = f"{actor.name} takes a defensive stance"
        case ActionType.MOVE:
            if action.target_position is not None:
                origin = actor.position or Position(x=0, y=0)
                destination = action.target_position
                result.movement_result = MovementResult(
                    actor_id=actor.id,
                    from_position=origin,
                    to_position=destination,
                    success=True,
                    distance_moved=math.hypot(destination.x - origin.x, destination.y - origin.y),
                )
                result.description = f"{actor.name} moves to a new position"
            else:
                result.description = f"{actor.name} holds position"
        case ActionType.FLEE:
            result.description = f"{actor.name} attempts to flee from combat"
        case ActionType.WAIT:
            result.description = f"{actor.name} waits and recovers"

    return result


# =============================================================================
# Application
# =============================================================================


def _update(state: CombatState, participant: CombatParticipant) -> None:
    state.participants = [
        participant if p.id == participant.id else p for p in state.participants
    ]


def _apply(state: CombatState, result: CombatActionResult) -> None:
    for damage in result.damage_dealt:
        target = state.get_participant(damage.target_id)
        if target is not None:
            target.health = max(0, target.health - damage.final_damage)

    for healing in result.healing_done:
        target = state.get_participant(healing.target_id)
        if target is not None:
            target.health = min(target.max_health, target.health + healing.final_healing)

    for restored in result.mana_restored:
        target = state.get_participant(restored.target_id)
        if target is not None and target.mana is not None:
            ceiling = target.max_mana if target.max_mana is not None else target.mana
            target.mana = min(ceiling, target.mana + restored.amount)

    for application in result.status_effects_applied:
        target = state.get_participant(application.target_id)
        if target is not None and application.success:
            _update(state, apply_status_effect(target, application.status_effect))

    for removal in result.status_effects_removed:
        target = state.get_participant(removal.target_id)
        if target is not None:
            cleaned, _ = remove_status_effect_by_name(target, removal.effect_name)
            _update(state, cleaned)

    if result.movement_result is not None:
        mover = state.get_participant(result.movement_result.actor_id)
        if mover is not None:
            mover.position = result.movement_result.to_position

    action = result.action
    actor = state.get_participant(action.actor_id)
    if actor is not None:
        mana_cost = required_mana(actor, action)
        actor.action_points = max(0, actor.action_points - action.action_point_cost)
        if mana_cost and actor.mana is not None:
            actor.mana = max(0, actor.mana - mana_cost)
        if action.type == ActionType.ITEM:
            item = actor.get_item(action.item_id)
            if item is not None:
                item.quantity = max(0, item.quantity - 1)
        if action.type == ActionType.SKILL:
            skill = actor.get_skill(action.skill_id)
            if skill is not None:
                skill.current_cooldown = skill.cooldown

    state.action_history = [*state.action_history, result]


def _finish(state: CombatState) -> CombatState:
    state.is_active = False
    return state


# =============================================================================
# Pipeline
# =============================================================================


def process_combat_action(
    state: CombatState,
    action: CombatAction,
    *,
    rng: RandomSource | None = None,
    now: datetime | None = None,
) -> CombatTurnResult:
    """Resolve one combat action.

    Args:
        state: Current combat state. Not mutated.
        action: The action to resolve.
        rng: Random source for critical and status rolls; defaults to
            ``get_default_rng()``.
        now: Timestamp for the action and time limits; defaults to the
            current UTC time.

    Returns:
        CombatTurnResult. On rejection ``success`` is False, ``error`` holds
        the reason and ``new_state`` is the input state. When the encounter
        ends the new state is inactive and its phase is ``ended``.
    """
    with log_context(combat_id=state.id):
        return _resolve(state, action, rng, now)


def _resolve(
    state: CombatState,
    action: CombatAction,
    rng: RandomSource | None,
    now: datetime | None,
) -> CombatTurnResult:
    validation = validate_action(state, action)
    if not validation.valid:
        logger.debug(
            "Combat action rejected",
            actor_id=action.actor_id,
            action_type=action.type.value,
            reason=validation.reason,
        )
        return CombatTurnResult(
            success=False,
            new_state=state,
            error=validation.reason,
            next_phase=state.phase,
        )

    rng = rng if rng is not None else get_default_rng()
    now = now if now is not None else datetime.now(UTC)

    working = state.model_copy(deep=True)
    action_result = _execute(working, action, rng, now)
    _apply(working, action_result)

    logger.info(
        "Combat action resolved",
        round=working.round,
        actor_id=action.actor_id,
        action_type=action.type.value,
        description=action_result.description,
    )

    combat_end = check_combat_end(working, now)
    if combat_end is None:
        working = advance_turn(working, now)
        combat_end = check_combat_end(working, now)

    if combat_end is not None:
        working = _finish(working)
        logger.info(
            "Combat ended",
            outcome=combat_end.outcome.value,
            reason=combat_end.reason,
        )

    return CombatTurnResult(
        success=True,
        new_state=working,
        action_result=action_result,
        combat_end=combat_end,
        next_phase=working.phase,
    )


__all__ = [
    "create_participant_from_character",
    "start_combat",
    "process_combat_action",
]
