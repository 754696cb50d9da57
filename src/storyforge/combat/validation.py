"""Combat action validation.

Illegal actions are expected game flow, so validation never raises: it
returns a ValidationResult carrying the reason shown to the player.
"""

from __future__ import annotations

from dataclasses import dataclass

from storyforge.models.combat import CombatAction, CombatParticipant, CombatState
from storyforge.models.enums import ActionType, TargetType


_SINGLE_TARGET_TYPES = (TargetType.SINGLE_ALLY, TargetType.SINGLE_ENEMY, TargetType.ANY)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an action.

    Attributes:
        valid: True if the action may be executed.
        reason: Why the action was rejected; None when valid.
    """

    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> ValidationResult:
        return cls(valid=False, reason=reason)


def required_mana(actor: CombatParticipant, action: CombatAction) -> int:
    """Mana an action costs: its own cost, else the skill's declared cost."""
    if action.mana_cost is not None:
        return action.mana_cost
    if action.type == ActionType.SKILL:
        skill = actor.get_skill(action.skill_id)
        if skill is not None and skill.mana_cost:
            return skill.mana_cost
    return 0


def is_valid_target(
    actor: CombatParticipant,
    target: CombatParticipant,
    action: CombatAction,
) -> bool:
    """Whether ``target`` is legal for ``action``.

    Attacks may not target the actor or anyone of the actor's type. Skills
    follow their declared target type; group and area skills are not
    single-target and reject any explicit target.
    """
    if action.type == ActionType.ATTACK:
        return target.type != actor.type and target.id != actor.id

    if action.type == ActionType.SKILL:
        skill = actor.get_skill(action.skill_id)
        if skill is None:
            return False
        match skill.target_type:
            case TargetType.SELF:
                return target.id == actor.id
            case TargetType.SINGLE_ALLY:
                return target.type == actor.type
            case TargetType.SINGLE_ENEMY:
                return target.type != actor.type
            case TargetType.ANY:
                return True
            case _:
                return False

    return True


def validate_action(state: CombatState, action: CombatAction) -> ValidationResult:
    """Check every precondition for executing an action this turn.

    Checks run in a fixed order and the first failure is reported: actor
    exists, combat is active, it is the actor's turn, the actor is conscious,
    action points, mana, skill availability and cooldown, item availability,
    then target existence and legality.

    Args:
        state: Current combat state.
        action: The intended action.

    Returns:
        ValidationResult; ``reason`` is set when invalid.
    """
    actor = state.get_participant(action.actor_id)
    if actor is None:
        return ValidationResult.reject("Actor not found in combat")

    if not state.is_active:
        return ValidationResult.reject("Combat has ended")

    if state.current_turn_id != action.actor_id:
        return ValidationResult.reject("Not your turn")

    if not actor.is_alive:
        return ValidationResult.reject("Actor is incapacitated")

    if actor.action_points < action.action_point_cost:
        return ValidationResult.reject("Insufficient action points")

    mana_cost = required_mana(actor, action)
    if mana_cost and actor.mana is not None and actor.mana < mana_cost:
        return ValidationResult.reject("Insufficient mana")

    if action.type == ActionType.SKILL:
        skill = actor.get_skill(action.skill_id)
        if skill is None:
            return ValidationResult.reject("Skill not available")
        if skill.current_cooldown > 0:
            return ValidationResult.reject("Skill is on cooldown")
        if not action.target_id and skill.target_type in _SINGLE_TARGET_TYPES:
            return ValidationResult.reject("Skill requires a target")

    if action.type == ActionType.ITEM:
        item = actor.get_item(action.item_id)
        if item is None or item.quantity <= 0:
            return ValidationResult.reject("Item not available")

    if action.type == ActionType.ATTACK and not action.target_id:
        return ValidationResult.reject("Attack requires a target")

    if action.target_id:
        target = state.get_participant(action.target_id)
        if target is None:
            return ValidationResult.reject("Target not found")
        if not is_valid_target(actor, target, action):
            return ValidationResult.reject("Invalid target for this action")

    return ValidationResult.ok()


__all__ = [
    "ValidationResult",
    "required_mana",
    "is_valid_target",
    "validate_action",
]
