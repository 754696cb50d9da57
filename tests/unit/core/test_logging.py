"""Tests for structured logging helpers."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from structlog.testing import capture_logs

from storyforge.combat import process_combat_action
from storyforge.core.logging import add_engine_name, bind_context, clear_context, log_context
from storyforge.models import ActionType, CombatAction
from storyforge.progression import award_experience, process_level_up


class TestAddEngineName:
    """Tests for the engine tagging processor."""

    def test_package_module(self) -> None:
        """Test package modules are tagged with their engine."""
        entry = {"event": "x", "logger_name": "storyforge.combat.engine"}
        event = add_engine_name(None, "info", entry)

        assert event == {"event": "x", "engine": "combat"}

    def test_foreign_module(self) -> None:
        """Test other modules keep their name."""
        event = add_engine_name(None, "info", {"event": "x", "logger_name": "host.app"})

        assert event == {"event": "x", "logger": "host.app"}

    def test_no_name(self) -> None:
        """Test entries without a module name pass through."""
        assert add_engine_name(None, "info", {"event": "x"}) == {"event": "x"}


class TestContext:
    """Tests for context binding."""

    def test_log_context_restores(self) -> None:
        """Test block-scoped values are removed on exit and outer ones kept."""
        clear_context()
        bind_context(session_id="s-1")
        try:
            with log_context(combat_id="c-1"):
                assert structlog.contextvars.get_contextvars() == {
                    "session_id": "s-1",
                    "combat_id": "c-1",
                }
            assert structlog.contextvars.get_contextvars() == {"session_id": "s-1"}
        finally:
            clear_context()


class TestEngineEvents:
    """Tests that engines report their state changes."""

    def test_level_up_logged(self, hero: Any) -> None:
        """Test each level gained is logged with the character id."""
        with capture_logs() as logs:
            process_level_up(award_experience(hero, 250))

        gained = [e for e in logs if e["event"] == "Level gained"]
        assert [e["level"] for e in gained] == [2, 3]
        assert all(e["character_id"] == "hero-1" for e in gained)

    def test_combat_action_logged(self, combat_state: Any, fixed_rng: Any, now: datetime) -> None:
        """Test a resolved action is logged at info level."""
        action = CombatAction(type=ActionType.WAIT, actor_id="fighter")
        with capture_logs() as logs:
            process_combat_action(combat_state, action, rng=fixed_rng, now=now)

        resolved = [e for e in logs if e["event"] == "Combat action resolved"]
        assert len(resolved) == 1
        assert resolved[0]["log_level"] == "info"
        assert resolved[0]["actor_id"] == "fighter"

    def test_combat_context_unbound_after_action(
        self, combat_state: Any, fixed_rng: Any, now: datetime
    ) -> None:
        """Test the encounter id does not leak past the action."""
        clear_context()
        action = CombatAction(type=ActionType.WAIT, actor_id="fighter")
        process_combat_action(combat_state, action, rng=fixed_rng, now=now)

        assert "combat_id" not in structlog.contextvars.get_contextvars()
