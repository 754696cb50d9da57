"""Tests for combat action validation."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from storyforge.combat import required_mana, start_combat, validate_action
from storyforge.models import (
    ActionType,
    CombatAction,
    CombatItem,
    CombatParticipant,
    CombatSkill,
    CombatState,
    EffectKind,
    ItemEffect,
    SkillEffect,
    TargetType,
)


@pytest.fixture
def rally() -> CombatSkill:
    """A self-only skill."""
    return CombatSkill(
        id="rally",
        name="Rally",
        target_type=TargetType.SELF,
        effects=[SkillEffect(type=EffectKind.HEALING, value=10)],
    )


@pytest.fixture
def meteor() -> CombatSkill:
    """An expensive enemy-targeted skill on a cooldown."""
    return CombatSkill(
        id="meteor",
        name="Meteor",
        mana_cost=50,
        cooldown=3,
        effects=[SkillEffect(type=EffectKind.DAMAGE, value=40)],
    )


@pytest.fixture
def kitted_state(
    fighter: CombatParticipant,
    goblin: CombatParticipant,
    rally: CombatSkill,
    meteor: CombatSkill,
    fixed_rng: Any,
    now: datetime,
) -> CombatState:
    """An encounter where the fighter has skills, items and an ally."""
    fighter.available_skills = [rally, meteor]
    fighter.available_items = [
        CombatItem(
            id="empty_flask",
            name="Empty Flask",
            quantity=0,
            effects=[ItemEffect(type=EffectKind.HEALING, value=10)],
        ),
    ]
    squire = CombatParticipant(
        id="squire", name="Squire", type="player", health=40, max_health=40, speed=1
    )
    return start_combat([fighter, goblin, squire], rng=fixed_rng, now=now)


def _action(action_type: ActionType, **fields: Any) -> CombatAction:
    fields.setdefault("actor_id", "fighter")
    return CombatAction(type=action_type, **fields)


class TestValidateAction:
    """Tests for each rejection reason, in order."""

    def test_valid_attack(self, kitted_state: CombatState) -> None:
        """Test a legal attack passes."""
        result = validate_action(kitted_state, _action(ActionType.ATTACK, target_id="goblin"))

        assert result.valid is True
        assert result.reason is None

    def test_unknown_actor(self, kitted_state: CombatState) -> None:
        """Test an actor outside the encounter is rejected."""
        result = validate_action(kitted_state, _action(ActionType.WAIT, actor_id="ghost"))

        assert result.reason == "Actor not found in combat"

    def test_inactive_combat(self, kitted_state: CombatState) -> None:
        """Test actions after the encounter ended are rejected."""
        kitted_state.is_active = False
        result = validate_action(kitted_state, _action(ActionType.WAIT))

        assert result.reason == "Combat has ended"

    def test_not_your_turn(self, kitted_state: CombatState) -> None:
        """Test acting out of turn is rejected."""
        result = validate_action(
            kitted_state, _action(ActionType.ATTACK, actor_id="goblin", target_id="fighter")
        )

        assert result.valid is False
        assert result.reason == "Not your turn"

    def test_incapacitated_actor(self, kitted_state: CombatState) -> None:
        """Test a participant at 0 health cannot act."""
        actor = kitted_state.get_participant("fighter")
        assert actor is not None
        actor.health = 0

        assert validate_action(kitted_state, _action(ActionType.WAIT)).reason == (
            "Actor is incapacitated"
        )

    def test_action_points(self, kitted_state: CombatState) -> None:
        """Test an action costing more than remaining points is rejected."""
        result = validate_action(kitted_state, _action(ActionType.WAIT, action_point_cost=4))

        assert result.reason == "Insufficient action points"

    def test_mana_from_skill(self, kitted_state: CombatState) -> None:
        """Test the skill's own mana cost is enforced."""
        result = validate_action(
            kitted_state, _action(ActionType.SKILL, skill_id="meteor", target_id="goblin")
        )

        assert result.reason == "Insufficient mana"

    def test_cooldown(self, kitted_state: CombatState) -> None:
        """Test a skill on cooldown is rejected."""
        actor = kitted_state.get_participant("fighter")
        assert actor is not None
        skill = actor.get_skill("rally")
        assert skill is not None
        skill.current_cooldown = 1

        result = validate_action(kitted_state, _action(ActionType.SKILL, skill_id="rally"))
        assert result.reason == "Skill is on cooldown"

    def test_unknown_skill(self, kitted_state: CombatState) -> None:
        """Test a skill the actor does not know is rejected."""
        result = validate_action(kitted_state, _action(ActionType.SKILL, skill_id="smite"))

        assert result.reason == "Skill not available"

    def test_item_out_of_stock(self, kitted_state: CombatState) -> None:
        """Test an item with no uses left is rejected."""
        result = validate_action(kitted_state, _action(ActionType.ITEM, item_id="empty_flask"))

        assert result.reason == "Item not available"

    def test_attack_without_target(self, kitted_state: CombatState) -> None:
        """Test an attack must name a target."""
        result = validate_action(kitted_state, _action(ActionType.ATTACK))

        assert result.reason == "Attack requires a target"

    def test_missing_target(self, kitted_state: CombatState) -> None:
        """Test a target outside the encounter is rejected."""
        result = validate_action(kitted_state, _action(ActionType.ATTACK, target_id="dragon"))

        assert result.reason == "Target not found"


class TestTargeting:
    """Tests for target legality."""

    def test_attack_on_self_rejected(self, kitted_state: CombatState) -> None:
        """Test a basic attack cannot target the attacker."""
        result = validate_action(kitted_state, _action(ActionType.ATTACK, target_id="fighter"))

        assert result.reason == "Invalid target for this action"

    def test_attack_on_ally_rejected(self, kitted_state: CombatState) -> None:
        """Test a basic attack cannot target the same side."""
        result = validate_action(kitted_state, _action(ActionType.ATTACK, target_id="squire"))

        assert result.reason == "Invalid target for this action"

    def test_self_skill_on_other_rejected(self, kitted_state: CombatState) -> None:
        """Test a self-only skill cannot name someone else."""
        result = validate_action(
            kitted_state, _action(ActionType.SKILL, skill_id="rally", target_id="squire")
        )

        assert result.reason == "Invalid target for this action"

    def test_self_skill_on_self(self, kitted_state: CombatState) -> None:
        """Test a self-only skill may name the caster or nobody."""
        named = _action(ActionType.SKILL, skill_id="rally", target_id="fighter")
        implicit = _action(ActionType.SKILL, skill_id="rally")

        assert validate_action(kitted_state, named).valid is True
        assert validate_action(kitted_state, implicit).valid is True

    def test_enemy_skill_on_enemy(self, kitted_state: CombatState) -> None:
        """Test an enemy-targeted skill accepts an enemy once mana allows."""
        actor = kitted_state.get_participant("fighter")
        assert actor is not None
        actor.max_mana = 60
        actor.mana = 60

        cast = _action(ActionType.SKILL, skill_id="meteor", target_id="goblin")
        ally_cast = _action(ActionType.SKILL, skill_id="meteor", target_id="squire")

        assert validate_action(kitted_state, cast).valid is True
        assert validate_action(kitted_state, ally_cast).valid is False

    def test_single_target_skill_without_target(self, kitted_state: CombatState) -> None:
        """Test a single-target skill cannot be cast at nobody."""
        actor = kitted_state.get_participant("fighter")
        assert actor is not None
        actor.max_mana = 60
        actor.mana = 60

        result = validate_action(kitted_state, _action(ActionType.SKILL, skill_id="meteor"))

        assert result.reason == "Skill requires a target"


class TestRequiredMana:
    """Tests for resolving an action's mana cost."""

    def test_explicit_cost_wins(self, fighter: CombatParticipant, meteor: CombatSkill) -> None:
        """Test the action's own cost overrides the skill's."""
        fighter.available_skills = [meteor]
        action = _action(ActionType.SKILL, skill_id="meteor", mana_cost=5)

        assert required_mana(fighter, action) == 5

    def test_skill_cost_fallback(self, fighter: CombatParticipant, meteor: CombatSkill) -> None:
        """Test the skill's cost applies when the action names none."""
        fighter.available_skills = [meteor]

        assert required_mana(fighter, _action(ActionType.SKILL, skill_id="meteor")) == 50

    def test_attacks_are_free(self, fighter: CombatParticipant) -> None:
        """Test non-skill actions cost no mana by default."""
        assert required_mana(fighter, _action(ActionType.ATTACK, target_id="goblin")) == 0
