"""Attribute model: derived composite scores and bonus handling.

The technical and artistic composites are fixed weighted sums of the five
raw attributes.  Equipment and event bonuses are applied to the raw
attributes before derivation, never to the composites directly.
"""
from __future__ import annotations

from typing import Dict, Mapping, Tuple

from models.competitor import ATTRIBUTE_NAMES, Attributes, Competitor

from .probability import clamp

TECHNICAL_WEIGHTS: Dict[str, float] = {
    "jump": 0.4,
    "spin": 0.3,
    "step": 0.2,
    "endurance": 0.1,
}

ARTISTIC_WEIGHTS: Dict[str, float] = {
    "presence": 0.5,
    "step": 0.3,
    "endurance": 0.2,
}


def _weighted(attributes: Attributes, weights: Mapping[str, float]) -> float:
    return clamp(sum(attributes.get(name) * weight for name, weight in weights.items()))


def derive(attributes: Attributes) -> Tuple[float, float]:
    """Return ``(technical, artistic)`` for ``attributes``."""

    return _weighted(attributes, TECHNICAL_WEIGHTS), _weighted(attributes, ARTISTIC_WEIGHTS)


def apply_bonuses(attributes: Attributes, bonuses: Mapping[str, float] | None) -> Attributes:
    """Return a copy of ``attributes`` with per-attribute ``bonuses`` added.

    Unknown bonus keys are ignored; every result is clamped to ``0-100``.
    """

    total = attributes.copy()
    if not bonuses:
        return total
    for name in ATTRIBUTE_NAMES:
        delta = bonuses.get(name)
        if delta:
            setattr(total, name, total.get(name) + float(delta))
    return total


def expand_composites(technical: float, artistic: float) -> Attributes:
    """Approximate raw attributes for a competitor that only has composites."""

    return Attributes(
        jump=technical,
        spin=technical,
        step=(technical + artistic) / 2,
        presence=artistic,
        endurance=technical * 0.9,
    )


def competitor_attributes(competitor: Competitor) -> Attributes:
    """Return the attributes used when ``competitor`` performs."""

    if competitor.attributes is not None:
        return competitor.attributes.copy()
    return expand_composites(competitor.technical, competitor.artistic)


def refresh_composites(competitor: Competitor, bonuses: Mapping[str, float] | None = None) -> None:
    """Recompute ``competitor``'s composites from its attributes in place.

    Composite-only competitors are left untouched.
    """

    if competitor.attributes is None:
        return
    competitor.technical, competitor.artistic = derive(apply_bonuses(competitor.attributes, bonuses))


__all__ = [
    "TECHNICAL_WEIGHTS",
    "ARTISTIC_WEIGHTS",
    "derive",
    "apply_bonuses",
    "expand_composites",
    "competitor_attributes",
    "refresh_composites",
]
