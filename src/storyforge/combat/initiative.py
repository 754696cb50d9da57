"""Initiative rolls and turn rotation.

Turn order is rolled once at combat start and never re-rolled. Rotation
walks that fixed order, skipping participants at 0 health, and bumps the
round each time it wraps past the first slot.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from storyforge.combat.dice import RandomSource
from storyforge.combat.status_effects import tick_status_effects
from storyforge.core.constants import INITIATIVE_RANDOM_RANGE
from storyforge.core.logging import get_logger
from storyforge.models.combat import CombatParticipant, CombatState
from storyforge.models.enums import TickTiming


logger = get_logger(__name__)


def roll_initiative(
    participants: Sequence[CombatParticipant],
    rng: RandomSource,
) -> list[tuple[str, float]]:
    """Roll ``speed + uniform[0, 20)`` for every participant.

    Returns:
        ``(participant_id, roll)`` pairs, highest roll first. Ties keep the
        input order.
    """
    rolls = [(p.id, p.speed + rng.random() * INITIATIVE_RANDOM_RANGE) for p in participants]
    rolls.sort(key=lambda pair: pair[1], reverse=True)
    for participant_id, roll in rolls:
        logger.debug("Initiative rolled", participant_id=participant_id, roll=round(roll, 2))
    return rolls


def calculate_initiative(
    participants: Sequence[CombatParticipant],
    rng: RandomSource,
) -> list[str]:
    """Turn order for an encounter as a list of participant ids."""
    return [participant_id for participant_id, _ in roll_initiative(participants, rng)]


def _replace(state: CombatState, participant: CombatParticipant) -> None:
    state.participants = [
        participant if p.id == participant.id else p for p in state.participants
    ]


def _end_turn(state: CombatState, actor_id: str) -> None:
    actor = state.get_participant(actor_id)
    if actor is None:
        return
    actor = tick_status_effects(actor, TickTiming.END_TURN)
    for skill in actor.available_skills:
        if skill.current_cooldown > 0:
            skill.current_cooldown -= 1
    _replace(state, actor)


def _start_turn(state: CombatState, actor_id: str) -> CombatParticipant | None:
    actor = state.get_participant(actor_id)
    if actor is None:
        return None
    actor = actor.model_copy(update={"action_points": actor.max_action_points}, deep=True)
    actor = tick_status_effects(actor, TickTiming.START_TURN)
    _replace(state, actor)
    return actor


def advance_turn(state: CombatState, now: datetime | None = None) -> CombatState:
    """Pass the turn to the next conscious participant.

    The departing actor's end-of-turn effects tick and its skill cooldowns
    drop by one. The incoming actor's action points are refilled and its
    start-of-turn effects tick; if those effects knock it out, the turn
    passes on again.

    Args:
        state: Current state. Not mutated.
        now: Start time of the new turn; keeps the old value if omitted.

    Returns:
        The new state.
    """
    updated = state.model_copy(deep=True)
    order = updated.turn_order
    if not order:
        return updated

    _end_turn(updated, updated.current_turn_id)

    index = order.index(updated.current_turn_id) if updated.current_turn_id in order else -1
    for _ in range(len(order)):
        index = (index + 1) % len(order)
        if index == 0:
            updated.round += 1

        candidate = updated.get_participant(order[index])
        if candidate is None or not candidate.is_alive:
            continue

        updated.current_turn_id = candidate.id
        started = _start_turn(updated, candidate.id)
        if started is not None and started.is_alive:
            break
        logger.info("Participant fell at turn start", participant_id=candidate.id)

    if now is not None:
        updated.turn_start_time = now

    logger.debug(
        "Turn advanced",
        combat_id=updated.id,
        current_turn_id=updated.current_turn_id,
        round=updated.round,
    )
    return updated


__all__ = [
    "roll_initiative",
    "calculate_initiative",
    "advance_turn",
]
