"""Random and clamping utilities for the career engine.

Every helper that draws a random number takes the generator explicitly so a
whole career can be replayed from a single seed.
"""
from __future__ import annotations

import random
from typing import Dict, Sequence, TypeVar

T = TypeVar("T")


def make_rng(seed: int | None = None) -> random.Random:
    """Return a dedicated generator seeded with ``seed``."""

    return random.Random(seed)


def clamp(value: float, minimum: float = 0.0, maximum: float = 100.0) -> float:
    """Clamp ``value`` between ``minimum`` and ``maximum``."""
    return max(minimum, min(maximum, value))


def clamp01(value: float) -> float:
    """Clamp ``value`` to the inclusive ``0.0``–``1.0`` range."""
    return max(0.0, min(1.0, value))


def roll(rng: random.Random, chance: float) -> bool:
    """Return ``True`` with the given probability."""
    return rng.random() < clamp01(chance)


def roll_percent(rng: random.Random, percent: float) -> bool:
    """Return ``True`` with ``percent`` expressed on a ``0-100`` scale."""
    return rng.random() * 100.0 < percent


def jitter(rng: random.Random, mean: float, sd: float) -> float:
    """Draw from a normal distribution centred on ``mean``."""
    if sd <= 0:
        return mean
    return rng.gauss(mean, sd)


def uniform_noise(rng: random.Random, spread: float) -> float:
    """Return symmetric noise in ``[-spread / 2, spread / 2)``."""
    return (rng.random() - 0.5) * spread


def weighted_choice(
    rng: random.Random,
    weights: Dict[T, float] | Sequence[float],
    items: Sequence[T] | None = None,
) -> T:
    """Select an item based on provided ``weights``."""
    # Accept either a mapping of item->weight or parallel sequences.
    if isinstance(weights, dict):
        items, weights = zip(*weights.items())
    assert items is not None

    total = sum(weights)
    r = rng.random() * total
    upto = 0.0
    for item, weight in zip(items, weights):
        upto += weight
        if upto >= r:
            return item
    # Floating point rounding can leave ``r`` just past the final bucket.
    return items[-1]


__all__ = [
    "make_rng",
    "clamp",
    "clamp01",
    "roll",
    "roll_percent",
    "jitter",
    "uniform_noise",
    "weighted_choice",
]
