"""Shared model configuration and small value types.

Host applications persist characters and encounters as camelCase JSON, so
every model accepts and emits camelCase aliases while staying snake_case in
Python.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoryForgeModel(BaseModel):
    """Base model for all StoryForge records.

    Unknown keys are ignored so reference data authored for newer hosts
    still loads.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    def to_json_dict(self) -> dict:
        """Dump to a JSON-compatible dict with host (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class Skipped:
    """Marker for a reference-data entry that was excluded.

    Attributes:
        item_id: Identifier of the excluded entry, if it had one.
        reason: Why the entry was excluded.
    """

    item_id: str | None
    reason: str


__all__ = [
    "StoryForgeModel",
    "Skipped",
]
