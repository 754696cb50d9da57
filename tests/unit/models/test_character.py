"""Tests for character profile normalization and host JSON round-trips."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from storyforge.models import (
    CharacterProfile,
    ProgressionPoints,
    initialize_character_progression,
)


class TestInitializeCharacterProgression:
    """Tests for filling defaults on partial host data."""

    def test_fills_missing_progression(self, hero_data: dict[str, Any]) -> None:
        """Test a fresh character gets every progression default."""
        hero = initialize_character_progression(hero_data)

        assert hero.level == 1
        assert hero.experience_points == 0
        assert hero.experience_to_next_level == 100
        assert hero.total_experience_earned == 0
        assert hero.progression_points == ProgressionPoints()
        assert hero.purchased_skill_nodes == []
        assert hero.active_specializations == []

    def test_experience_to_next_level_follows_level(self) -> None:
        """Test the XP requirement defaults from the level."""
        hero = initialize_character_progression({"name": "Aria", "level": 3})

        assert hero.experience_to_next_level == 225

    def test_null_fields_take_defaults(self, hero_data: dict[str, Any]) -> None:
        """Test null progression fields from older saves are defaulted."""
        hero_data.update(
            {"progressionPoints": None, "purchasedSkillNodes": None, "experiencePoints": None}
        )
        hero = initialize_character_progression(hero_data)

        assert hero.progression_points.skill == 0
        assert hero.purchased_skill_nodes == []
        assert hero.experience_points == 0

    def test_lifetime_xp_defaults_to_current_xp(self) -> None:
        """Test lifetime XP falls back to current XP when absent."""
        hero = initialize_character_progression({"name": "Aria", "experiencePoints": 40})

        assert hero.total_experience_earned == 40

    def test_base_vitals_default_from_maximums(self, hero_data: dict[str, Any]) -> None:
        """Test base pools are seeded from the host's maximums."""
        hero = initialize_character_progression(hero_data)

        assert hero.base_max_health == 100
        assert hero.base_max_mana == 20

    def test_keeps_existing_values(self, hero_data: dict[str, Any]) -> None:
        """Test populated fields are left alone."""
        hero_data["progressionPoints"] = {"attribute": 2, "skill": 5}
        hero_data["purchasedSkillNodes"] = ["basic_attack"]
        hero = initialize_character_progression(hero_data)

        assert hero.progression_points.attribute == 2
        assert hero.progression_points.skill == 5
        assert hero.purchased_skill_nodes == ["basic_attack"]

    def test_profile_input_is_copied(self, hero: CharacterProfile) -> None:
        """Test an existing profile is copied rather than shared."""
        copy = initialize_character_progression(hero)

        assert copy == hero
        assert copy is not hero
        assert copy.progression_points is not hero.progression_points

    def test_missing_name_rejected(self) -> None:
        """Test required fields still fail validation."""
        with pytest.raises(ValidationError):
            initialize_character_progression({"level": 2})

    def test_health_above_max_rejected(self) -> None:
        """Test current health may not exceed its maximum."""
        with pytest.raises(ValidationError):
            initialize_character_progression({"name": "Aria", "health": 150, "maxHealth": 100})


class TestHostJson:
    """Tests for camelCase serialization."""

    def test_round_trip(self, hero: CharacterProfile) -> None:
        """Test dumping and reloading preserves the character."""
        payload = hero.to_json_dict()

        assert payload["experienceToNextLevel"] == 100
        assert payload["class"] == "Warrior"
        assert "progressionPoints" in payload
        assert CharacterProfile.model_validate(payload) == hero

    def test_unknown_host_fields_survive(self, hero_data: dict[str, Any]) -> None:
        """Test extra host fields are carried through untouched."""
        hero_data["portraitUrl"] = "https://example.invalid/aria.png"
        hero = initialize_character_progression(hero_data)

        assert hero.to_json_dict()["portraitUrl"] == "https://example.invalid/aria.png"
