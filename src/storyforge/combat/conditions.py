"""Combat end conditions.

Victory conditions are checked first, in declared order, then defeat
conditions; the first condition that holds ends the encounter. Only
participants above 0 health count as standing.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from storyforge.core.config import get_settings
from storyforge.core.logging import get_logger
from storyforge.models.combat import (
    CombatConsequence,
    CombatEndResult,
    CombatReward,
    CombatState,
    DefeatCondition,
    VictoryCondition,
)
from storyforge.models.enums import (
    CombatOutcome,
    DefeatConditionType,
    ParticipantType,
    VictoryConditionType,
)


logger = get_logger(__name__)


def _as_utc(moment: datetime) -> datetime:
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


def _parameter(parameters: dict[str, Any], *keys: str) -> Any:
    return next((parameters[k] for k in keys if parameters.get(k) is not None), None)


def is_victory_met(state: CombatState, condition: VictoryCondition) -> bool:
    """Evaluate one victory condition.

    ``defeat_all_enemies`` holds when no enemy stands; ``survive_turns`` when
    the round has reached ``parameters["turns"]``. Other types never hold.
    """
    match condition.type:
        case VictoryConditionType.DEFEAT_ALL_ENEMIES:
            return not state.living(ParticipantType.ENEMY)
        case VictoryConditionType.SURVIVE_TURNS:
            turns = _parameter(condition.parameters, "turns")
            if turns is None:
                logger.warning("survive_turns condition has no turns parameter")
                return False
            try:
                return state.round >= int(turns)
            except (TypeError, ValueError):
                logger.warning(
                    "survive_turns condition has an unreadable turns parameter", turns=turns
                )
                return False
        case _:
            return False


def is_defeat_met(state: CombatState, condition: DefeatCondition, now: datetime) -> bool:
    """Evaluate one defeat condition.

    ``player_death`` holds when no player stands; ``time_limit`` when more
    than ``parameters["time_limit"]`` seconds have passed since combat start.
    Other types never hold.
    """
    match condition.type:
        case DefeatConditionType.PLAYER_DEATH:
            return not state.living(ParticipantType.PLAYER)
        case DefeatConditionType.TIME_LIMIT:
            limit = _parameter(condition.parameters, "time_limit", "timeLimit")
            if limit is None:
                logger.warning("time_limit condition has no time_limit parameter")
                return False
            try:
                seconds = float(limit)
            except (TypeError, ValueError):
                logger.warning(
                    "time_limit condition has an unreadable time_limit parameter", time_limit=limit
                )
                return False
            elapsed = _as_utc(now) - _as_utc(state.start_time)
            return elapsed.total_seconds() > seconds
        case _:
            return False


def check_combat_end(state: CombatState, now: datetime) -> CombatEndResult | None:
    """Check whether the encounter is over.

    Args:
        state: State after the latest action.
        now: Current time, for time limits.

    Returns:
        CombatEndResult for the first condition that holds, or None.
    """
    survivors = [p.id for p in state.living()]
    combat_settings = get_settings().combat

    for victory in state.victory_conditions:
        if is_victory_met(state, victory):
            logger.info("Combat won", combat_id=state.id, condition=victory.type.value)
            return CombatEndResult(
                outcome=CombatOutcome.VICTORY,
                reason=victory.description or victory.type.value,
                surviving_participants=survivors,
                rewards=[
                    CombatReward(
                        type="experience",
                        value=combat_settings.victory_experience_reward,
                        description="Combat experience gained",
                    )
                ],
            )

    for defeat in state.defeat_conditions:
        if is_defeat_met(state, defeat, now):
            logger.info("Combat lost", combat_id=state.id, condition=defeat.type.value)
            return CombatEndResult(
                outcome=CombatOutcome.DEFEAT,
                reason=defeat.description or defeat.type.value,
                surviving_participants=survivors,
                consequences=[
                    CombatConsequence(
                        type="injury",
                        severity="minor",
                        description="Minor injuries sustained",
                        duration=combat_settings.defeat_injury_duration,
                    )
                ],
            )

    return None


__all__ = [
    "is_victory_met",
    "is_defeat_met",
    "check_combat_end",
]
