"""Event records and the default season calendar.

The calendar is normally supplied by an outside collaborator as plain
records; :func:`events_from_records` converts those.  The default calendar
below gives the engine a complete season when nothing else is provided.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from .config import EngineConfig, resolve

CITIES = ("Beijing", "Shanghai", "Tokyo", "Paris", "Moscow", "New York", "Milan", "Seoul", "Vancouver")


@dataclass(frozen=True)
class Event:
    name: str
    month: int
    qualification_threshold: int
    capacity: int
    point_pool: int
    template_id: str
    major: bool = False

    @property
    def is_open(self) -> bool:
        return self.qualification_threshold <= 0

    def is_major(self, cfg: EngineConfig | None = None) -> bool:
        return self.major or self.point_pool >= resolve(cfg).majorPointPool


def events_from_records(records: Iterable[Mapping[str, object]]) -> List[Event]:
    """Build events from collaborator records.

    Records use the keys ``name``, ``month``, ``qualificationThreshold``,
    ``capacity``, ``pointPool`` and ``matchTemplateId`` with an optional
    ``major`` flag.  Negative thresholds and capacities are clamped to zero.
    """

    events = []
    for rec in records:
        month = int(rec["month"])
        if not 1 <= month <= 12:
            raise ValueError(f"Event {rec['name']} has invalid month {month}")
        events.append(
            Event(
                name=str(rec["name"]),
                month=month,
                qualification_threshold=max(0, int(rec.get("qualificationThreshold", 0))),
                capacity=max(0, int(rec["capacity"])),
                point_pool=max(0, int(rec["pointPool"])),
                template_id=str(rec.get("matchTemplateId", "low")),
                major=bool(rec.get("major", False)),
            )
        )
    return events


def group_by_month(events: Iterable[Event]) -> Dict[int, List[Event]]:
    calendar: Dict[int, List[Event]] = {m: [] for m in range(1, 13)}
    for event in events:
        calendar[event.month].append(event)
    return calendar


def is_olympic_year(year: int, cfg: EngineConfig | None = None) -> bool:
    return year % 4 == resolve(cfg).olympicBaseYear % 4


def build_season_calendar(year: int, cfg: EngineConfig | None = None) -> Dict[int, List[Event]]:
    """Return the default events for ``year`` keyed by month."""

    events = [
        Event("National Championships", 12, 600, 24, 840, "mid"),
        Event("World Championships", 3, 1500, 24, 1200, "high", major=True),
        Event("Grand Prix North America", 10, 1000, 12, 400, "mid"),
        Event("Grand Prix Japan", 11, 1200, 12, 400, "mid"),
        Event("Grand Prix Final", 11, 2000, 12, 800, "high", major=True),
    ]
    if is_olympic_year(year, cfg):
        events.append(Event("Winter Olympic Games", 2, 2500, 30, 1200, "high", major=True))

    calendar = group_by_month(events)
    for month, scheduled in calendar.items():
        if not scheduled:
            scheduled.append(Event(f"{CITIES[month % len(CITIES)]} Challenger", month, 0, 12, 300, "low"))
    return calendar


__all__ = [
    "CITIES",
    "Event",
    "events_from_records",
    "group_by_month",
    "is_olympic_year",
    "build_season_calendar",
]
