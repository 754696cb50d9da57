"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from storyforge.core.exceptions import (
    AttributeCeilingExceededError,
    CombatError,
    ConfigurationError,
    InsufficientPointsError,
    InvalidCombatSetupError,
    InvalidLevelError,
    LevelCeilingExceededError,
    NegativePointsError,
    NodeNotFoundError,
    ProgressionError,
    PurchaseNotAllowedError,
    SpecializationNotAvailableError,
    SpecializationNotFoundError,
    StoryForgeError,
)


class TestStoryForgeError:
    """Tests for the base StoryForgeError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = StoryForgeError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = StoryForgeError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(StoryForgeError("Test", details={"x": 1}))
        assert "StoryForgeError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestProgressionExceptions:
    """Tests for progression-related exceptions."""

    def test_progression_error_with_character(self) -> None:
        """Test ProgressionError records the character id."""
        exc = ProgressionError("Broken", character_id="hero-1")
        assert exc.details["character_id"] == "hero-1"

    def test_invalid_level_records_level(self) -> None:
        """Test InvalidLevelError keeps the rejected value, even 0."""
        exc = InvalidLevelError("Bad level", level=0)
        assert exc.details["level"] == 0

    def test_level_ceiling_context(self) -> None:
        """Test LevelCeilingExceededError with level and cap."""
        exc = LevelCeilingExceededError("Too high", level=101, max_level=100)
        assert exc.details == {"level": 101, "max_level": 100}

    def test_attribute_ceiling_context(self) -> None:
        """Test AttributeCeilingExceededError with attribute context."""
        exc = AttributeCeilingExceededError(
            "Too many", attribute="strength", requested_total=101
        )
        assert exc.details["attribute"] == "strength"
        assert exc.details["requested_total"] == 101

    def test_insufficient_points_context(self) -> None:
        """Test InsufficientPointsError with pool context."""
        exc = InsufficientPointsError("Short", pool="skill", available=1, required=3)
        assert exc.details == {"pool": "skill", "available": 1, "required": 3}

    def test_node_not_found_context(self) -> None:
        """Test NodeNotFoundError with node and tree ids."""
        exc = NodeNotFoundError("Missing", node_id="n1", tree_id="combat")
        assert exc.details == {"node_id": "n1", "tree_id": "combat"}


class TestCombatExceptions:
    """Tests for combat-related exceptions."""

    def test_combat_error_with_context(self) -> None:
        """Test CombatError with participant and round."""
        exc = CombatError("Broken", participant_id="goblin", round_number=3)
        assert exc.details["participant_id"] == "goblin"
        assert exc.details["round_number"] == 3

    def test_round_zero_is_kept(self) -> None:
        """Test that round 0 is still recorded."""
        exc = CombatError("Broken", round_number=0)
        assert exc.details["round_number"] == 0


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_config_key(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Bad config", config_key="log_level")
        assert exc.details["config_key"] == "log_level"


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidLevelError,
            LevelCeilingExceededError,
            NegativePointsError,
            AttributeCeilingExceededError,
            InsufficientPointsError,
            NodeNotFoundError,
            PurchaseNotAllowedError,
            SpecializationNotFoundError,
            SpecializationNotAvailableError,
        ],
    )
    def test_progression_errors_inherit(self, exc_class: type[Exception]) -> None:
        """Test all progression errors derive from ProgressionError."""
        assert issubclass(exc_class, ProgressionError)
        assert issubclass(exc_class, StoryForgeError)

    def test_combat_setup_inherits(self) -> None:
        """Test InvalidCombatSetupError derives from CombatError."""
        assert issubclass(InvalidCombatSetupError, CombatError)
        assert issubclass(CombatError, StoryForgeError)

    def test_catch_at_base(self) -> None:
        """Test engine errors can be caught at the base class."""
        with pytest.raises(StoryForgeError):
            raise NegativePointsError("Negative")
