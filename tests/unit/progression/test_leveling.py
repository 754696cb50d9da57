"""Tests for level-up orchestration."""

from __future__ import annotations

from storyforge.models import CharacterProfile, ProgressionPoints
from storyforge.progression import (
    award_experience,
    process_level_up,
    process_level_up_with_report,
)


class TestProcessLevelUp:
    """Tests for multi-level advancement."""

    def test_single_level_carries_excess(self) -> None:
        """Test one level gained with the remainder carried forward."""
        hero = CharacterProfile(
            name="Aria", level=2, experience_points=175, experience_to_next_level=150
        )
        updated = process_level_up(hero)

        assert updated.level == 3
        assert updated.experience_points == 25
        assert updated.experience_to_next_level == 225

    def test_multiple_levels_accumulate_points(self) -> None:
        """Test every level crossed contributes its reward."""
        hero = CharacterProfile(
            name="Aria", level=1, experience_points=500, experience_to_next_level=100
        )
        result = process_level_up_with_report(hero)

        assert result.character.level == 4
        assert result.character.experience_points == 25
        assert result.character.experience_to_next_level == 337
        assert result.levels_gained == 3
        assert result.points_awarded == ProgressionPoints(attribute=6, skill=9, talent=1)
        assert result.character.progression_points == result.points_awarded

    def test_points_added_to_existing_pool(self) -> None:
        """Test rewards are added to unspent points."""
        hero = CharacterProfile(
            name="Aria",
            experience_points=100,
            progression_points=ProgressionPoints(attribute=1, skill=1),
        )
        updated = process_level_up(hero)

        assert updated.progression_points == ProgressionPoints(attribute=3, skill=4)

    def test_no_level_up(self, hero: CharacterProfile) -> None:
        """Test a character short of XP comes back unchanged."""
        result = process_level_up_with_report(award_experience(hero, 10))

        assert result.leveled_up is False
        assert result.character.level == 1
        assert result.character.experience_points == 10
        assert result.points_awarded == ProgressionPoints()

    def test_lifetime_xp_not_double_counted(self, hero: CharacterProfile) -> None:
        """Test leveling leaves lifetime XP at what was awarded."""
        updated = process_level_up(award_experience(hero, 500))

        assert updated.total_experience_earned == 500

    def test_terminates_at_cap(self) -> None:
        """Test an enormous XP gain stops at level 100."""
        hero = CharacterProfile(name="Aria", experience_points=10**30)
        updated = process_level_up(hero)

        assert updated.level == 100

    def test_input_not_mutated(self) -> None:
        """Test the original character keeps its level."""
        hero = CharacterProfile(name="Aria", experience_points=500)
        process_level_up(hero)

        assert hero.level == 1
        assert hero.experience_points == 500
