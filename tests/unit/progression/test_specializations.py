"""Tests for specialization availability and activation."""

from __future__ import annotations

from typing import Any

import pytest

from storyforge.core.exceptions import (
    InsufficientPointsError,
    SpecializationNotAvailableError,
    SpecializationNotFoundError,
)
from storyforge.models import CharacterProfile, ProgressionPoints, Specialization
from storyforge.progression import (
    DEFAULT_SPECIALIZATIONS,
    activate,
    get_available,
    get_specialization_by_id,
    screen_specializations,
)


def _character(level: int = 5, points: int = 1, active: list[Specialization] | None = None):
    return CharacterProfile(
        name="Aria",
        level=level,
        progression_points=ProgressionPoints(specialization=points),
        active_specializations=active or [],
    )


def _ids(specs: list[Specialization]) -> list[str]:
    return [s.id for s in specs]


class TestGetAvailable:
    """Tests for screening a catalog."""

    def test_level_gate(self) -> None:
        """Test entries above the character's level are excluded."""
        assert get_available(_character(level=4), DEFAULT_SPECIALIZATIONS) == []

    def test_all_available_at_level(self) -> None:
        """Test every default entry is open at level 5."""
        assert _ids(get_available(_character(), DEFAULT_SPECIALIZATIONS)) == [
            "warrior_berserker",
            "warrior_guardian",
            "mage_elementalist",
        ]

    def test_active_and_exclusive_removed(self) -> None:
        """Test the active entry and its exclusive partner are excluded."""
        berserker = get_specialization_by_id("warrior_berserker")
        assert berserker is not None
        character = _character(active=[berserker])

        assert _ids(get_available(character, DEFAULT_SPECIALIZATIONS)) == ["mage_elementalist"]

    def test_exclusivity_checked_both_ways(self) -> None:
        """Test an entry listed only by the active one is still excluded."""
        loner = Specialization(id="loner", unlocked_at_level=1, exclusive_with=["hermit"])
        hermit = Specialization(id="hermit", unlocked_at_level=1)
        character = _character(active=[loner])

        assert get_available(character, [hermit]) == []

    def test_malformed_entries_skipped(self) -> None:
        """Test raw entries that fail to load are skipped with a reason."""
        catalog: list[Any] = [
            {"id": "broken", "name": "Broken", "unlockedAtLevel": "soon"},
            {"id": "stringy", "name": "Stringy", "unlockedAtLevel": "5"},
            {"name": "Anonymous", "unlockedAtLevel": 1},
            {"id": "raw_ok", "unlockedAtLevel": 2},
        ]
        screening = screen_specializations(_character(), catalog)

        assert _ids(screening.available) == ["raw_ok"]
        assert [s.item_id for s in screening.skipped] == ["broken", "stringy", None]
        assert screening.skipped[0].reason.startswith("malformed entry")
        assert screening.skipped[1].reason.startswith("malformed entry")
        assert "missing an id" in screening.skipped[2].reason

    def test_skip_reasons(self) -> None:
        """Test exclusion reasons say why an entry was left out."""
        screening = screen_specializations(_character(level=1), DEFAULT_SPECIALIZATIONS)

        assert {s.reason for s in screening.skipped} == {"requires level 5"}


class TestActivate:
    """Tests for activating a specialization."""

    def test_activates_and_spends_point(self) -> None:
        """Test activation adds an instance and spends one point."""
        updated = activate(_character(points=2), "warrior_guardian", DEFAULT_SPECIALIZATIONS)

        assert updated.progression_points.specialization == 1
        assert len(updated.active_specializations) == 1
        instance = updated.active_specializations[0]
        assert instance.id == "warrior_guardian"
        assert instance.is_active is True
        assert instance.progression_level == 1

    def test_catalog_untouched(self) -> None:
        """Test the catalog entry itself stays inactive."""
        activate(_character(), "warrior_guardian", DEFAULT_SPECIALIZATIONS)

        assert all(not s.is_active for s in DEFAULT_SPECIALIZATIONS)

    def test_not_found(self) -> None:
        """Test an unknown id fails."""
        with pytest.raises(SpecializationNotFoundError):
            activate(_character(), "necromancer", DEFAULT_SPECIALIZATIONS)

    def test_not_available(self) -> None:
        """Test an entry above the character's level fails."""
        with pytest.raises(SpecializationNotAvailableError):
            activate(_character(level=2), "warrior_guardian", DEFAULT_SPECIALIZATIONS)

    def test_exclusive_not_available(self) -> None:
        """Test an entry exclusive with an active one fails."""
        character = activate(_character(points=2), "warrior_berserker", DEFAULT_SPECIALIZATIONS)

        with pytest.raises(SpecializationNotAvailableError):
            activate(character, "warrior_guardian", DEFAULT_SPECIALIZATIONS)

    def test_no_points(self) -> None:
        """Test activation without a specialization point fails."""
        with pytest.raises(InsufficientPointsError):
            activate(_character(points=0), "warrior_guardian", DEFAULT_SPECIALIZATIONS)
