"""Specialization availability and activation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from pydantic import ValidationError

from storyforge.core.exceptions import (
    InsufficientPointsError,
    SpecializationNotAvailableError,
    SpecializationNotFoundError,
)
from storyforge.core.logging import get_logger
from storyforge.models.base import Skipped
from storyforge.models.character import CharacterProfile
from storyforge.models.enums import ProgressionPointType
from storyforge.models.skill_tree import Specialization


logger = get_logger(__name__)

CatalogEntry: TypeAlias = Specialization | Mapping[str, Any]
"""A catalog entry, either loaded or still raw host data."""


@dataclass(frozen=True)
class SpecializationScreening:
    """Catalog entries split into available and excluded.

    Attributes:
        available: Entries the character may activate.
        skipped: One record per excluded entry, with the reason.
    """

    available: list[Specialization] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)


def _load_entry(entry: CatalogEntry) -> Specialization | Skipped:
    if isinstance(entry, Specialization):
        return entry
    if not isinstance(entry, Mapping):
        return Skipped(item_id=None, reason="entry is not a mapping")
    try:
        return Specialization.model_validate(entry)
    except ValidationError as exc:
        raw_id = entry.get("id")
        return Skipped(
            item_id=raw_id if isinstance(raw_id, str) and raw_id else None,
            reason=f"malformed entry: {exc.errors()[0]['msg']}",
        )


def _exclusion_reason(
    spec: Specialization,
    character: CharacterProfile,
) -> str | None:
    if not spec.id:
        return "specialization is missing an id"
    if character.level < spec.unlocked_at_level:
        return f"requires level {spec.unlocked_at_level}"

    active_ids = {active.id for active in character.active_specializations if active.id}
    if spec.id in active_ids:
        return "already active"

    conflicts = active_ids.intersection(spec.exclusive_with)
    conflicts.update(
        active.id
        for active in character.active_specializations
        if spec.id in active.exclusive_with
    )
    if conflicts:
        return f"exclusive with active specialization {sorted(conflicts)[0]}"
    return None


def screen_specializations(
    character: CharacterProfile,
    catalog: Sequence[CatalogEntry],
) -> SpecializationScreening:
    """Split a catalog into what the character can activate and what it cannot.

    Raw entries that do not load (no numeric unlock level, for instance) are
    skipped with a warning. Exclusivity is checked both ways: an entry is
    excluded if it lists an active specialization, or if an active
    specialization lists it.

    Args:
        character: The character browsing the catalog.
        catalog: Reference specializations, loaded or raw.

    Returns:
        SpecializationScreening with available entries and skip reasons.
    """
    available: list[Specialization] = []
    skipped: list[Skipped] = []

    for entry in catalog:
        loaded = _load_entry(entry)
        if isinstance(loaded, Skipped):
            logger.warning(
                "Invalid specialization data", item_id=loaded.item_id, reason=loaded.reason
            )
            skipped.append(loaded)
            continue

        reason = _exclusion_reason(loaded, character)
        if reason is None:
            available.append(loaded)
            continue
        if not loaded.id:
            logger.warning("Invalid specialization data", name=loaded.name, reason=reason)
        skipped.append(Skipped(item_id=loaded.id or None, reason=reason))

    return SpecializationScreening(available=available, skipped=skipped)


def get_available(
    character: CharacterProfile,
    catalog: Sequence[CatalogEntry],
) -> list[Specialization]:
    """Catalog entries the character can activate now."""
    return screen_specializations(character, catalog).available


def activate(
    character: CharacterProfile,
    specialization_id: str,
    catalog: Sequence[CatalogEntry],
) -> CharacterProfile:
    """Activate a specialization for one specialization point.

    Args:
        character: The character activating. Not mutated.
        specialization_id: Catalog id to activate.
        catalog: Reference specializations.

    Returns:
        A new character with an active instance at progression level 1 and
        one specialization point spent.

    Raises:
        SpecializationNotFoundError: If the id is not in the catalog.
        SpecializationNotAvailableError: If the entry cannot be activated.
        InsufficientPointsError: If no specialization point is available.
    """
    loaded = (_load_entry(entry) for entry in catalog)
    spec = next(
        (
            s
            for s in loaded
            if isinstance(s, Specialization) and s.id and s.id == specialization_id
        ),
        None,
    )
    if spec is None:
        raise SpecializationNotFoundError(
            f"Specialization {specialization_id} not found",
            character_id=character.id,
            details={"specialization_id": specialization_id},
        )

    reason = _exclusion_reason(spec, character)
    if reason is not None:
        raise SpecializationNotAvailableError(
            f"Specialization {specialization_id} is not available: {reason}",
            character_id=character.id,
            details={"specialization_id": specialization_id},
        )

    points = character.progression_points
    if points.specialization < 1:
        raise InsufficientPointsError(
            "Not enough specialization points",
            pool=ProgressionPointType.SPECIALIZATION.value,
            available=points.specialization,
            required=1,
            details={"character_id": character.id},
        )

    instance = spec.model_copy(update={"is_active": True, "progression_level": 1}, deep=True)
    logger.info(
        "Specialization activated",
        character_id=character.id,
        specialization_id=specialization_id,
    )
    return character.model_copy(
        update={
            "active_specializations": [*character.active_specializations, instance],
            "progression_points": points.model_copy(
                update={"specialization": points.specialization - 1}
            ),
        },
        deep=True,
    )


__all__ = [
    "CatalogEntry",
    "SpecializationScreening",
    "screen_specializations",
    "get_available",
    "activate",
]
