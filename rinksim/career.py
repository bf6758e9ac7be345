"""Career orchestration: one user competitor against a simulated field.

:class:`CareerEngine` owns the roster, the random generator and the season
calendar.  Callers drive it one month at a time through
:meth:`CareerEngine.advance_month` and may enter the user into one of the
month's events before doing so.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from models.competitor import Attributes, Competitor
from models.roster import Roster
from utils.exceptions import EventEntryError

from .actions import DEFAULT_CATALOG, ActionCatalog, get_template
from .calendar import Event, build_season_calendar
from .config import EngineConfig, resolve
from .incidents import INCIDENTS, Incident, apply_incident, draw_incident
from .interactive import ProgramSession
from .match_simulator import simulate
from .population import PopulationManager, Retirement, create_user_competitor, generate_initial_population
from .probability import make_rng
from .program_planner import Strategy, generate
from .ranking import order_by_rolling, rolling, standings
from .ratings import apply_bonuses, refresh_composites
from .season_scheduler import EventResult, SeasonScheduler
from .training import COACH_TIERS, DEFAULT_SCHEDULE, CoachModifiers, apply_training, normalize_schedule, weekly_update

logger = logging.getLogger(__name__)

CalendarProvider = Callable[[int], Mapping[int, Sequence[Event]]]


@dataclass(frozen=True)
class MonthlySnapshot:
    year: int
    month: int
    technical: float
    artistic: float
    rolling: int
    points: int


@dataclass
class MonthReport:
    """Everything that happened during one call to ``advance_month``."""

    year: int
    month: int
    training_gains: Dict[str, float] = field(default_factory=dict)
    incident: Optional[Incident] = None
    incident_effects: Dict[str, float] = field(default_factory=dict)
    retirements: List[Retirement] = field(default_factory=list)
    results: List[EventResult] = field(default_factory=list)
    season_closed: bool = False


@dataclass
class PlayerEntry:
    """A pending user entry: the opponents' scores plus the user's routine."""

    event: Event
    session: ProgramSession
    opponents: List[Tuple[Competitor, float]] = field(default_factory=list)
    finalized: bool = False


class CareerEngine:
    def __init__(
        self,
        user_name: str = "Skater",
        seed: int | None = None,
        cfg: EngineConfig | None = None,
        catalog: ActionCatalog = DEFAULT_CATALOG,
        calendar_provider: CalendarProvider | None = None,
        coach: CoachModifiers | None = None,
        year: int = 2025,
        month: int = 7,
        rng: random.Random | None = None,
    ) -> None:
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid starting month {month}")
        self.cfg = resolve(cfg)
        self.catalog = catalog
        self.rng = rng if rng is not None else make_rng(seed)
        self.calendar_provider = calendar_provider or (lambda y: build_season_calendar(y, self.cfg))
        self.coach = coach or COACH_TIERS["basic"]
        self.year = year
        self.month = month

        user = create_user_competitor(user_name)
        rivals = generate_initial_population(self.rng, self.cfg.rosterSize, self.cfg)
        self.roster = Roster([user] + rivals)
        self.scheduler = SeasonScheduler(self.cfg, catalog)
        self.population = PopulationManager(self.cfg)

        self.schedule: Tuple[str, ...] = DEFAULT_SCHEDULE
        self.equipment_bonuses: Dict[str, float] = {}
        self.history: List[MonthlySnapshot] = []
        self.resolved_events: Set[str] = set()
        self._consumed: Set[str] = set()
        self._entered = False
        self._pending: Optional[PlayerEntry] = None
        self._calendar = self._load_calendar(year)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def user(self) -> Competitor:
        user = self.roster.user()
        if user is None:
            raise RuntimeError("Roster has no user-controlled competitor")
        return user

    def _load_calendar(self, year: int) -> Dict[int, List[Event]]:
        calendar = {m: [] for m in range(1, 13)}
        for month, events in self.calendar_provider(year).items():
            calendar[int(month)] = list(events)
        return calendar

    def current_events(self) -> List[Event]:
        return list(self._calendar.get(self.month, []))

    def effective_attributes(self) -> Attributes:
        """The user's attributes with the current equipment bonuses applied."""

        return apply_bonuses(self.user.attributes, self.equipment_bonuses)

    def set_schedule(self, schedule: Sequence[str]) -> None:
        self.schedule = normalize_schedule(schedule)

    def set_equipment_bonuses(self, bonuses: Mapping[str, float] | None) -> None:
        self.equipment_bonuses = dict(bonuses or {})
        refresh_composites(self.user, self.equipment_bonuses)

    def leaderboard(self, limit: int | None = None) -> List[Competitor]:
        ordered = order_by_rolling(self.roster.snapshot(), standings(self.roster, self.cfg))
        return ordered if limit is None else ordered[:limit]

    def get_competitor(self, competitor_id: str) -> Optional[Competitor]:
        competitor = self.roster.get(competitor_id)
        return competitor.copy() if competitor is not None else None

    # ------------------------------------------------------------------
    # User event entry
    # ------------------------------------------------------------------
    def _find_event(self, event_name: str) -> Event:
        for event in self.current_events():
            if event.name == event_name:
                if event.name in self.resolved_events:
                    raise EventEntryError(event_name, "the event has already been held")
                return event
        raise EventEntryError(event_name, "the event is not scheduled this month")

    def enter_event(self, event_name: str, strategy: Strategy | str = Strategy.BALANCED) -> PlayerEntry:
        """Enter the user into ``event_name`` and plan the routine.

        The opponents are drawn with the scheduler's own field rules, after
        this month's larger unresolved events have taken their fields, and
        their scores are simulated immediately.  Nothing is written to the
        roster until :meth:`finalize_entry`; a new call replaces any pending
        entry.
        """

        event = self._find_event(event_name)
        user = self.user
        if user.injured:
            raise EventEntryError(event_name, f"injured for {user.injury_months} more month(s)")
        if self._entered:
            raise EventEntryError(event_name, "already competed this month")
        if rolling(user, self.cfg) < event.qualification_threshold:
            raise EventEntryError(event_name, "rolling score below the qualification threshold")
        if user.stamina < self.match_stamina_fee():
            raise EventEntryError(event_name, "not enough stamina")

        competitors = list(self.roster)
        scores = standings(competitors, self.cfg)
        # Events ahead of this one in resolution order claim their fields first.
        claimed = set(self._consumed)
        for other in sorted(self.current_events(), key=lambda e: e.point_pool, reverse=True):
            if other.name == event.name:
                break
            if other.name in self.resolved_events:
                continue
            claimed.update(c.competitor_id for c in self.scheduler.select_field(competitors, other, scores, claimed))
        field_ = self.scheduler.select_field(competitors, event, scores, claimed, capacity=event.capacity - 1)
        template = get_template(event.template_id)
        opponents = [(c, simulate(c, template, self.rng, self.catalog, self.cfg)) for c in field_]

        attributes = self.effective_attributes()
        program = generate(attributes, template.phases, strategy, self.catalog, self.cfg)
        session = ProgramSession(program, attributes, user.stamina, self.catalog, self.cfg)
        self._pending = PlayerEntry(event, session, opponents)
        return self._pending

    def match_stamina_fee(self) -> float:
        cfg = self.cfg
        endurance = self.user.attributes.endurance
        return max(cfg.matchStaminaFeeFloor, cfg.matchStaminaFee * (1 - endurance / cfg.matchFeeEnduranceDivisor))

    def finalize_entry(self, entry: PlayerEntry) -> EventResult:
        """Rank a finished routine against the field and credit everyone."""

        if entry is not self._pending or entry.finalized:
            raise EventEntryError(entry.event.name, "the entry is no longer active")
        if not entry.session.finished:
            raise EventEntryError(entry.event.name, "the routine has not been completed")

        user = self.user
        entries = list(entry.opponents) + [(user, entry.session.total)]
        result = self.scheduler.award(entry.event, entries, self.year)
        self._consumed.update(c.competitor_id for c, _ in entries)
        user.stamina -= self.match_stamina_fee()

        entry.finalized = True
        self._pending = None
        self._entered = True
        self.resolved_events.add(entry.event.name)
        placement = result.placement_of(user.competitor_id)
        logger.info(
            "%s placed %d of %d at %s for %d points",
            user.name,
            placement.rank,
            len(result.placements),
            entry.event.name,
            placement.points,
        )
        return result

    # ------------------------------------------------------------------
    # Monthly tick
    # ------------------------------------------------------------------
    def _train_user(self, user: Competitor) -> Dict[str, float]:
        result = weekly_update(
            self.schedule, user.stamina, self.coach, user.age, user.attributes.endurance, self.cfg
        )
        gains = apply_training(user.attributes, result, self.rng, self.cfg)
        user.stamina = result.final_stamina
        refresh_composites(user, self.equipment_bonuses)
        return gains

    def _snapshot(self, user: Competitor) -> None:
        self.history.append(
            MonthlySnapshot(
                self.year,
                self.month,
                user.technical,
                user.artistic,
                rolling(user, self.cfg),
                user.points_current,
            )
        )
        overflow = len(self.history) - self.cfg.historyLength
        if overflow > 0:
            del self.history[:overflow]

    def _roll_month(self) -> None:
        self.month += 1
        if self.month > 12:
            self.month = 1
            self.year += 1
            self._calendar = self._load_calendar(self.year)
        self.resolved_events = set()
        self._consumed = set()
        self._entered = False

    def advance_month(self) -> MonthReport:
        user = self.user
        report = MonthReport(self.year, self.month)
        if self._pending is not None:
            logger.debug("Discarding unfinished entry for %s", self._pending.event.name)
            self._pending = None

        report.training_gains = self._train_user(user)

        report.incident = draw_incident(self.rng, INCIDENTS, self.cfg)
        if report.incident is not None:
            report.incident_effects = apply_incident(user, report.incident)
            refresh_composites(user, self.equipment_bonuses)
            logger.info("Incident for %s: %s", user.name, report.incident.name)

        report.retirements = self.population.tick(self.roster, self.rng)
        refresh_composites(user, self.equipment_bonuses)

        scores = standings(self.roster, self.cfg)
        report.results = self.scheduler.resolve_month(
            self.roster,
            self.current_events(),
            self.rng,
            self.year,
            consumed=self._consumed,
            skip=self.resolved_events,
            scores=scores,
        )
        self.resolved_events.update(r.event.name for r in report.results)

        self._snapshot(user)

        if self.month == 12:
            self.scheduler.apply_season_boundary(self.roster)
            report.season_closed = True

        self._roll_month()
        return report

    def run(self, months: int) -> List[MonthReport]:
        return [self.advance_month() for _ in range(months)]


__all__ = ["MonthlySnapshot", "MonthReport", "PlayerEntry", "CareerEngine"]
