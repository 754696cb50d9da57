"""Tests for attribute allocation and derived stats."""

from __future__ import annotations

import pytest

from storyforge.core.exceptions import (
    AttributeCeilingExceededError,
    InsufficientPointsError,
    NegativePointsError,
)
from storyforge.models import (
    Attribute,
    AttributeProgression,
    CharacterProfile,
    ProgressionPoints,
)
from storyforge.progression import (
    allocate_attribute_point,
    apply_derived_stats,
    calculate_derived_stats,
    round_half_up,
    spend_attribute_points,
)


class TestRoundHalfUp:
    """Tests for the rounding rule."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -2), (0.0, 0)],
    )
    def test_halves_round_up(self, value: float, expected: int) -> None:
        """Test halves always round toward positive infinity."""
        assert round_half_up(value) == expected


class TestAllocateAttributePoint:
    """Tests for raising a progression delta."""

    def test_increments_delta(self) -> None:
        """Test the chosen attribute grows and others do not."""
        updated = allocate_attribute_point(AttributeProgression(), Attribute.STRENGTH, 3)

        assert updated.strength == 3
        assert updated.dexterity == 0

    def test_accepts_string_attribute(self) -> None:
        """Test attributes may be named by string."""
        assert allocate_attribute_point(AttributeProgression(), "wisdom").wisdom == 1

    def test_negative_rejected(self) -> None:
        """Test negative points fail."""
        with pytest.raises(NegativePointsError):
            allocate_attribute_point(AttributeProgression(), Attribute.STRENGTH, -1)

    def test_ceiling_reached(self) -> None:
        """Test reaching exactly 100 is allowed."""
        progression = AttributeProgression(strength=99)

        assert allocate_attribute_point(progression, Attribute.STRENGTH).strength == 100

    def test_ceiling_exceeded(self) -> None:
        """Test pushing a delta past 100 fails."""
        with pytest.raises(AttributeCeilingExceededError):
            allocate_attribute_point(AttributeProgression(strength=100), Attribute.STRENGTH)

    def test_input_not_mutated(self) -> None:
        """Test the original allocation is untouched."""
        progression = AttributeProgression()
        allocate_attribute_point(progression, Attribute.STRENGTH)

        assert progression.strength == 0


class TestCalculateDerivedStats:
    """Tests for the derived stat formulas."""

    def test_known_character(self, hero: CharacterProfile) -> None:
        """Test every formula on a typical character."""
        stats = calculate_derived_stats(hero)

        assert stats.strength == 14
        assert stats.max_health == 126
        assert stats.max_mana == 35
        assert stats.attack == 15
        assert stats.defense == 13
        assert stats.speed == 11
        assert stats.evasion == 12
        assert stats.critical_chance == 6
        assert stats.critical_multiplier == pytest.approx(1.78)
        assert stats.carry_capacity == 70
        assert stats.movement_speed == 10
        assert stats.initiative_bonus == 8

    def test_progression_deltas_apply(self, hero: CharacterProfile) -> None:
        """Test allocated points and bonuses feed the totals."""
        progression = AttributeProgression(constitution=2, max_health_bonus=10)
        stats = calculate_derived_stats(hero, progression)

        assert stats.constitution == 15
        assert stats.max_health == 100 + 15 * 2 + 10

    def test_degenerate_input_stays_in_range(self) -> None:
        """Test minimum attributes and negative deltas never go out of range."""
        weakling = CharacterProfile(
            name="Husk",
            strength=1,
            dexterity=1,
            constitution=1,
            intelligence=1,
            wisdom=1,
            charisma=1,
            base_max_health=0,
            attribute_progression=AttributeProgression(
                strength=-50, dexterity=-50, constitution=-50, max_health_bonus=-500
            ),
        )
        stats = calculate_derived_stats(weakling)

        assert stats.strength == 1
        assert stats.attack >= 1
        assert stats.defense >= 0
        assert stats.speed >= 1
        assert stats.max_health >= 1
        assert stats.max_mana >= 0
        assert 0 <= stats.critical_chance <= 100
        assert stats.critical_multiplier >= 1.0

    def test_critical_chance_capped(self) -> None:
        """Test critical chance never exceeds 100."""
        prodigy = CharacterProfile(name="Prodigy", dexterity=400, intelligence=400)

        assert calculate_derived_stats(prodigy).critical_chance == 100


class TestApplyDerivedStats:
    """Tests for writing derived stats onto a character."""

    def test_updates_maximums(self, hero: CharacterProfile) -> None:
        """Test maximums follow the derived stats."""
        updated = apply_derived_stats(hero)

        assert updated.derived is not None
        assert updated.max_health == 126
        assert updated.max_mana == 35

    def test_clamps_current_vitals(self) -> None:
        """Test current health drops to a lowered maximum."""
        hero = CharacterProfile(
            name="Aria",
            health=150,
            max_health=150,
            base_max_health=100,
            constitution=10,
            attribute_progression=AttributeProgression(max_health_bonus=-20),
        )
        updated = apply_derived_stats(hero)

        assert updated.max_health == 100
        assert updated.health == 100

    def test_idempotent(self, hero: CharacterProfile) -> None:
        """Test applying twice equals applying once."""
        once = apply_derived_stats(hero)

        assert apply_derived_stats(once) == once


class TestSpendAttributePoints:
    """Tests for spending the attribute pool."""

    def test_spends_and_recomputes(self, hero: CharacterProfile) -> None:
        """Test pool, allocation and derived stats all update."""
        hero = hero.model_copy(update={"progression_points": ProgressionPoints(attribute=3)})
        updated = spend_attribute_points(hero, Attribute.CONSTITUTION, 2)

        assert updated.progression_points.attribute == 1
        assert updated.attribute_progression.constitution == 2
        assert updated.max_health == 100 + 15 * 2

    def test_insufficient_points(self, hero: CharacterProfile) -> None:
        """Test spending more than the pool fails."""
        with pytest.raises(InsufficientPointsError):
            spend_attribute_points(hero, Attribute.STRENGTH, 1)
