"""Custom exception hierarchy for the StoryForge engines.

All exceptions inherit from StoryForgeError, so a host application can catch
engine failures at one boundary while keeping domain-specific context.

Only caller errors are raised. Expected game-flow rejections (an illegal
combat action, a node that is not purchasable yet) are returned as result
objects instead.

Example:
    >>> from storyforge.core.exceptions import InvalidLevelError
    >>> raise InvalidLevelError("Level must be a positive integer", level=0)
"""

from __future__ import annotations

from typing import Any


class StoryForgeError(Exception):
    """Base exception for all StoryForge errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Progression Domain Exceptions
# =============================================================================


class ProgressionError(StoryForgeError):
    """Base exception for character progression errors.

    Raised when a progression calculator receives input that violates its
    contract, such as an invalid level or an over-allocated attribute.
    """

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize progression error with character context.

        Args:
            message: Human-readable error description.
            character_id: Identifier of the character involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character_id:
            combined_details["character_id"] = character_id
        super().__init__(message, details=combined_details)


class InvalidLevelError(ProgressionError):
    """Raised when a level is not a positive integer."""

    def __init__(
        self,
        message: str,
        *,
        level: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid level error.

        Args:
            message: Human-readable error description.
            level: The rejected level value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["level"] = level
        super().__init__(message, details=combined_details)


class LevelCeilingExceededError(ProgressionError):
    """Raised when a level exceeds the hard level cap."""

    def __init__(
        self,
        message: str,
        *,
        level: int | None = None,
        max_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize level ceiling error.

        Args:
            message: Human-readable error description.
            level: The rejected level.
            max_level: The maximum allowed level.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if level is not None:
            combined_details["level"] = level
        if max_level is not None:
            combined_details["max_level"] = max_level
        super().__init__(message, details=combined_details)


class NegativePointsError(ProgressionError):
    """Raised when a negative amount of points or experience is supplied."""


class AttributeCeilingExceededError(ProgressionError):
    """Raised when an allocation would push an attribute delta past its ceiling."""

    def __init__(
        self,
        message: str,
        *,
        attribute: str | None = None,
        requested_total: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize attribute ceiling error.

        Args:
            message: Human-readable error description.
            attribute: Name of the attribute being allocated.
            requested_total: The cumulative delta that was rejected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if attribute:
            combined_details["attribute"] = attribute
        if requested_total is not None:
            combined_details["requested_total"] = requested_total
        super().__init__(message, details=combined_details)


class InsufficientPointsError(ProgressionError):
    """Raised when a progression point pool cannot cover a cost."""

    def __init__(
        self,
        message: str,
        *,
        pool: str | None = None,
        available: int | None = None,
        required: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient points error.

        Args:
            message: Human-readable error description.
            pool: Which progression point pool was short.
            available: Points currently in the pool.
            required: Points the operation needed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if pool:
            combined_details["pool"] = pool
        if available is not None:
            combined_details["available"] = available
        if required is not None:
            combined_details["required"] = required
        super().__init__(message, details=combined_details)


class NodeNotFoundError(ProgressionError):
    """Raised when a skill node id is absent from its skill tree."""

    def __init__(
        self,
        message: str,
        *,
        node_id: str | None = None,
        tree_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize node lookup error.

        Args:
            message: Human-readable error description.
            node_id: The node id that was requested.
            tree_id: The skill tree that was searched.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if node_id:
            combined_details["node_id"] = node_id
        if tree_id:
            combined_details["tree_id"] = tree_id
        super().__init__(message, details=combined_details)


class PurchaseNotAllowedError(ProgressionError):
    """Raised when a skill node purchase is requested but not permitted."""


class SpecializationNotFoundError(ProgressionError):
    """Raised when a specialization id is absent from the catalog."""


class SpecializationNotAvailableError(ProgressionError):
    """Raised when a specialization exists but cannot be activated."""


# =============================================================================
# Combat Domain Exceptions
# =============================================================================


class CombatError(StoryForgeError):
    """Base exception for combat engine errors.

    Illegal actions are not errors; they come back as rejected turn results.
    This branch covers broken setup and internal inconsistencies.
    """

    def __init__(
        self,
        message: str,
        *,
        participant_id: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            participant_id: Identifier of the participant involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if participant_id:
            combined_details["participant_id"] = participant_id
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class InvalidCombatSetupError(CombatError):
    """Raised when an encounter cannot be started from the given input."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(StoryForgeError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "StoryForgeError",
    # Progression exceptions
    "ProgressionError",
    "InvalidLevelError",
    "LevelCeilingExceededError",
    "NegativePointsError",
    "AttributeCeilingExceededError",
    "InsufficientPointsError",
    "NodeNotFoundError",
    "PurchaseNotAllowedError",
    "SpecializationNotFoundError",
    "SpecializationNotAvailableError",
    # Combat exceptions
    "CombatError",
    "InvalidCombatSetupError",
    # Configuration exceptions
    "ConfigurationError",
]
