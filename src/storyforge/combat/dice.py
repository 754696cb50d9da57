"""Random sources for combat.

Combat randomness is always injected. Anything with a ``random()`` method
returning a float in [0, 1) works, so tests can pass a ``random.Random`` with
a fixed seed or a stub that returns canned values.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

from storyforge.core.config import get_settings
from storyforge.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform floats in [0, 1)."""

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        ...


def get_default_rng(*, seed: int | None = None) -> random.Random:
    """Build a fresh random source.

    Args:
        seed: Explicit seed; falls back to ``STORYFORGE_COMBAT_RNG_SEED``.

    Returns:
        A new ``random.Random``, seeded when a seed is configured.
    """
    if seed is None:
        seed = get_settings().combat.rng_seed
    logger.debug("Random source created", seed=seed)
    return random.Random(seed)


def roll_percent(rng: RandomSource) -> float:
    """Draw a percentage in [0, 100)."""
    return rng.random() * 100


__all__ = [
    "RandomSource",
    "get_default_rng",
    "roll_percent",
]
