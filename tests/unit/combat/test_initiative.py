"""Tests for initiative rolls and turn rotation."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from storyforge.combat import (
    advance_turn,
    apply_status_effect,
    calculate_initiative,
    create_status_effect,
    roll_initiative,
)
from storyforge.models import CombatParticipant, CombatSkill, CombatState


def _state(*participants: CombatParticipant, current: str) -> CombatState:
    return CombatState(
        participants=list(participants),
        turn_order=[p.id for p in participants],
        current_turn_id=current,
    )


class TestRollInitiative:
    """Tests for the initiative roll."""

    def test_speed_plus_roll(self, fighter: Any, goblin: Any, make_rng: Any) -> None:
        """Test the roll is speed plus up to 20, highest first."""
        rolls = roll_initiative([fighter, goblin], make_rng([0.1, 0.9]))

        assert [pid for pid, _ in rolls] == ["goblin", "fighter"]
        assert dict(rolls)["fighter"] == 12 + 0.1 * 20
        assert dict(rolls)["goblin"] == 8 + 0.9 * 20

    def test_ties_keep_input_order(self, goblin: CombatParticipant, fixed_rng: Any) -> None:
        """Test equal rolls keep the order participants were given in."""
        twin = goblin.model_copy(update={"id": "twin"})

        assert calculate_initiative([twin, goblin], fixed_rng) == ["twin", "goblin"]


class TestAdvanceTurn:
    """Tests for turn rotation."""

    def test_passes_to_next(self, fighter: Any, goblin: Any) -> None:
        """Test the turn moves along the order within a round."""
        advanced = advance_turn(_state(fighter, goblin, current="fighter"))

        assert advanced.current_turn_id == "goblin"
        assert advanced.round == 1

    def test_wraps_and_increments_round(self, fighter: Any, goblin: Any) -> None:
        """Test the last participant hands back to the first and the round ticks once."""
        advanced = advance_turn(_state(fighter, goblin, current="goblin"))

        assert advanced.current_turn_id == "fighter"
        assert advanced.round == 2

    def test_action_points_reset_only_for_incoming(self, fighter: Any, goblin: Any) -> None:
        """Test only the participant starting a turn is refilled."""
        fighter.action_points = 0
        goblin.action_points = 0
        advanced = advance_turn(_state(fighter, goblin, current="fighter"))

        incoming = advanced.get_participant("goblin")
        departing = advanced.get_participant("fighter")
        assert incoming is not None and departing is not None
        assert incoming.action_points == incoming.max_action_points
        assert departing.action_points == 0

    def test_skips_fallen(self, fighter: Any, goblin: Any) -> None:
        """Test participants at 0 health are skipped."""
        corpse = goblin.model_copy(update={"id": "corpse", "health": 0})
        advanced = advance_turn(_state(fighter, corpse, goblin, current="fighter"))

        assert advanced.current_turn_id == "goblin"
        assert advanced.round == 1

    def test_skips_participant_killed_by_own_tick(self, fighter: Any, goblin: Any) -> None:
        """Test a participant dying to start-of-turn damage loses its turn."""
        goblin.health = 3
        goblin = apply_status_effect(goblin, create_status_effect("poison", "fighter"))
        advanced = advance_turn(_state(fighter, goblin, current="fighter"))

        fallen = advanced.get_participant("goblin")
        assert fallen is not None
        assert fallen.health == 0
        assert advanced.current_turn_id == "fighter"
        assert advanced.round == 2

    def test_end_turn_tick_for_departing(self, fighter: Any, goblin: Any) -> None:
        """Test end-of-turn effects tick on the departing actor only."""
        fighter = apply_status_effect(fighter, create_status_effect("bleeding", "goblin"))
        goblin = apply_status_effect(goblin, create_status_effect("bleeding", "fighter"))
        advanced = advance_turn(_state(fighter, goblin, current="fighter"))

        departing = advanced.get_participant("fighter")
        incoming = advanced.get_participant("goblin")
        assert departing is not None and incoming is not None
        assert departing.health == 97
        assert incoming.health == 30

    def test_cooldowns_drop_for_departing(self, fighter: Any, goblin: Any) -> None:
        """Test skill cooldowns fall by one when the owner's turn ends."""
        fighter.available_skills = [CombatSkill(id="cleave", name="Cleave", current_cooldown=2)]
        goblin.available_skills = [CombatSkill(id="bite", name="Bite", current_cooldown=2)]
        advanced = advance_turn(_state(fighter, goblin, current="fighter"))

        departing = advanced.get_participant("fighter")
        incoming = advanced.get_participant("goblin")
        assert departing is not None and incoming is not None
        assert departing.available_skills[0].current_cooldown == 1
        assert incoming.available_skills[0].current_cooldown == 2

    def test_turn_start_time(self, fighter: Any, goblin: Any, now: datetime) -> None:
        """Test the new turn's start time is recorded."""
        later = now + timedelta(seconds=30)
        advanced = advance_turn(_state(fighter, goblin, current="fighter"), later)

        assert advanced.turn_start_time == later

    def test_input_not_mutated(self, fighter: Any, goblin: Any) -> None:
        """Test the original state is untouched."""
        state = _state(fighter, goblin, current="fighter")
        advance_turn(state)

        assert state.current_turn_id == "fighter"
        assert state.round == 1
