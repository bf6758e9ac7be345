"""Rolling-score ranking used for qualification, seeding and standings."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List

from .config import EngineConfig, resolve


def rolling(competitor: Any, cfg: EngineConfig | None = None) -> int:
    """Return ``floor(points_current + points_last * priorSeasonWeight)``.

    ``competitor`` may be any object exposing ``points_current`` and
    ``points_last``.
    """

    cfg = resolve(cfg)
    blended = competitor.points_current + competitor.points_last * cfg.priorSeasonWeight
    # Guard against float error such as 500 * 0.7 == 349.99999999999994.
    return math.floor(round(blended, 6))


def event_points(point_pool: int, rank: int, cfg: EngineConfig | None = None) -> int:
    """Points awarded for finishing ``rank`` (1-based) in an event."""

    if rank < 1:
        raise ValueError("rank must be 1 or greater")
    cfg = resolve(cfg)
    return math.floor(point_pool / (rank * cfg.pointsRankSlope + cfg.pointsRankOffset))


def standings(competitors: Iterable[Any], cfg: EngineConfig | None = None) -> Dict[str, int]:
    """Snapshot ``competitor_id -> rolling score`` for a stable point in time."""

    return {c.competitor_id: rolling(c, cfg) for c in competitors}


def order_by_rolling(competitors: Iterable[Any], scores: Dict[str, int] | None = None) -> List[Any]:
    """Sort ``competitors`` by rolling score, highest first.

    ``scores`` may carry a snapshot from :func:`standings`; otherwise the
    live rolling score is used.  The sort is stable so ties keep their input
    order.
    """

    if scores is None:
        return sorted(competitors, key=lambda c: rolling(c), reverse=True)
    return sorted(competitors, key=lambda c: scores.get(c.competitor_id, 0), reverse=True)


def top_ids(competitors: Iterable[Any], count: int, scores: Dict[str, int] | None = None) -> set[str]:
    """Return the ids of the ``count`` best ranked competitors."""

    return {c.competitor_id for c in order_by_rolling(competitors, scores)[:count]}


__all__ = ["rolling", "event_points", "standings", "order_by_rolling", "top_ids"]
