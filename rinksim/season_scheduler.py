"""Monthly event resolution for simulated competitors.

Events of a month are processed in descending point-pool order so the
prestige events claim their fields first.  A competitor enters at most one
event per month; everyone chosen for an event is recorded in the
``consumed`` set shared across the month.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from models.competitor import Competitor, HonorRecord
from models.roster import Roster

from .actions import DEFAULT_CATALOG, ActionCatalog, get_template
from .calendar import Event
from .config import EngineConfig, resolve
from .match_simulator import simulate
from .ranking import event_points, order_by_rolling, standings, top_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    competitor_id: str
    name: str
    score: float
    rank: int
    points: int


@dataclass
class EventResult:
    event: Event
    placements: List[Placement] = field(default_factory=list)

    @property
    def winner(self) -> Optional[Placement]:
        return self.placements[0] if self.placements else None

    def placement_of(self, competitor_id: str) -> Optional[Placement]:
        return next((p for p in self.placements if p.competitor_id == competitor_id), None)

    def point_deltas(self) -> Dict[str, int]:
        return {p.competitor_id: p.points for p in self.placements}


class SeasonScheduler:
    """Selects fields, simulates events and distributes points."""

    def __init__(self, cfg: EngineConfig | None = None, catalog: ActionCatalog = DEFAULT_CATALOG) -> None:
        self.cfg = resolve(cfg)
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Field selection
    # ------------------------------------------------------------------
    def select_field(
        self,
        competitors: Sequence[Competitor],
        event: Event,
        scores: Dict[str, int],
        consumed: Set[str],
        capacity: int | None = None,
    ) -> List[Competitor]:
        """Return the simulated competitors who take part in ``event``.

        ``scores`` is the rolling-score snapshot taken when the month began;
        it drives both the qualification filter and the seeding order.
        """

        capacity = event.capacity if capacity is None else capacity
        candidates = [
            c
            for c in competitors
            if not c.retired
            and not c.injured
            and not c.is_user_controlled
            and c.competitor_id not in consumed
        ]
        if event.qualification_threshold > 0:
            candidates = [c for c in candidates if scores.get(c.competitor_id, 0) >= event.qualification_threshold]
        else:
            elite = top_ids(competitors, self.cfg.openTierExclusion, scores)
            candidates = [c for c in candidates if c.competitor_id not in elite]
        return order_by_rolling(candidates, scores)[: max(0, capacity)]

    # ------------------------------------------------------------------
    # Ranking and awards
    # ------------------------------------------------------------------
    def award(
        self,
        event: Event,
        entries: Iterable[Tuple[Competitor, float]],
        year: int,
    ) -> EventResult:
        """Rank ``entries`` by score and credit points and honors.

        Points are added to ``points_current`` so results from several
        events in one month accumulate.
        """

        ranked = sorted(entries, key=lambda item: item[1], reverse=True)
        result = EventResult(event)
        major = event.is_major(self.cfg)
        for index, (competitor, score) in enumerate(ranked):
            rank = index + 1
            points = event_points(event.point_pool, rank, self.cfg)
            competitor.points_current += points
            if rank == 1 or (major and rank <= 3):
                competitor.honors.append(HonorRecord(year, event.month, event.name, rank, points))
            result.placements.append(Placement(competitor.competitor_id, competitor.name, score, rank, points))
        return result

    def resolve_event(
        self,
        event: Event,
        participants: Sequence[Competitor],
        rng: random.Random,
        year: int,
    ) -> EventResult:
        template = get_template(event.template_id)
        entries = [(c, simulate(c, template, rng, self.catalog, self.cfg)) for c in participants]
        result = self.award(event, entries, year)
        if result.winner is not None:
            logger.debug(
                "%s: %d entrants, won by %s (%.2f)",
                event.name,
                len(participants),
                result.winner.name,
                result.winner.score,
            )
        else:
            logger.debug("%s: no eligible entrants", event.name)
        return result

    # ------------------------------------------------------------------
    # Monthly flow
    # ------------------------------------------------------------------
    def resolve_month(
        self,
        roster: Roster,
        events: Iterable[Event],
        rng: random.Random,
        year: int,
        consumed: Set[str] | None = None,
        skip: Iterable[str] = (),
        scores: Dict[str, int] | None = None,
    ) -> List[EventResult]:
        """Resolve this month's ``events`` excluding names in ``skip``."""

        consumed = set() if consumed is None else consumed
        skipped = set(skip)
        competitors = list(roster)
        scores = standings(competitors, self.cfg) if scores is None else scores
        results: List[EventResult] = []
        for event in sorted(events, key=lambda e: e.point_pool, reverse=True):
            if event.name in skipped:
                continue
            participants = self.select_field(competitors, event, scores, consumed)
            consumed.update(c.competitor_id for c in participants)
            results.append(self.resolve_event(event, participants, rng, year))
        return results

    def apply_season_boundary(self, roster: Roster) -> None:
        """Move current points into the prior season for every competitor."""

        for competitor in roster:
            competitor.points_last = competitor.points_current
            competitor.points_current = 0
        logger.info("Season boundary applied to %d competitors", len(roster))


__all__ = ["Placement", "EventResult", "SeasonScheduler"]
