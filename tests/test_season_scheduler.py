import random

from models.roster import Roster
from rinksim.calendar import Event
from rinksim.ranking import standings
from rinksim.season_scheduler import SeasonScheduler


def _field(make_competitor, size=60):
    return [make_competitor(f"c{i:02d}", points_last=(size - i) * 100, technical=60, artistic=60) for i in range(size)]


def test_open_event_excludes_top_fifty(make_competitor):
    competitors = _field(make_competitor)
    event = Event("Open", 5, 0, 12, 300, "low")
    chosen = SeasonScheduler().select_field(competitors, event, standings(competitors), set())
    ids = [c.competitor_id for c in chosen]
    assert ids == [f"c{i:02d}" for i in range(50, 60)]


def test_threshold_event_seeds_by_rolling(make_competitor):
    competitors = _field(make_competitor)
    # rolling = (60 - i) * 70, so the threshold admits the first 46 slots.
    event = Event("Worlds", 3, 1050, 5, 1200, "high")
    chosen = SeasonScheduler().select_field(competitors, event, standings(competitors), set())
    assert [c.competitor_id for c in chosen] == ["c00", "c01", "c02", "c03", "c04"]

    narrow = Event("Final", 3, 4100, 24, 800, "high")
    chosen = SeasonScheduler().select_field(competitors, narrow, standings(competitors), set())
    assert len(chosen) == 2


def test_injured_user_and_consumed_are_skipped(make_competitor):
    competitors = _field(make_competitor, 5)
    competitors[0].injury_months = 2
    competitors[1].is_user_controlled = True
    event = Event("Cup", 3, 1, 10, 500, "mid")
    chosen = SeasonScheduler().select_field(competitors, event, standings(competitors), {"c02"})
    assert [c.competitor_id for c in chosen] == ["c03", "c04"]


def test_award_accumulates_points_and_honors(make_competitor):
    a = make_competitor("a", points_current=100)
    b = make_competitor("b")
    result = SeasonScheduler().award(Event("Cup", 4, 0, 12, 1000, "mid"), [(a, 10.0), (b, 20.0)], 2025)
    assert result.winner.competitor_id == "b"
    assert b.points_current == 1000
    assert a.points_current == 814
    assert len(b.honors) == 1
    assert b.honors[0].rank == 1
    assert a.honors == []
    assert result.point_deltas() == {"b": 1000, "a": 714}


def test_major_event_honors_podium(make_competitor):
    skaters = [make_competitor(f"p{i}") for i in range(5)]
    entries = [(s, float(10 - i)) for i, s in enumerate(skaters)]
    SeasonScheduler().award(Event("Worlds", 3, 0, 24, 1200, "high", major=True), entries, 2026)
    assert [len(s.honors) for s in skaters] == [1, 1, 1, 0, 0]
    assert skaters[2].honors[0].event_name == "Worlds"


def test_one_event_per_competitor_per_month(make_competitor):
    roster = Roster(_field(make_competitor))
    events = [Event("Small", 6, 0, 6, 300, "low"), Event("Big", 6, 0, 6, 500, "low")]
    results = SeasonScheduler().resolve_month(roster, events, random.Random(3), 2025)
    assert [r.event.name for r in results] == ["Big", "Small"]
    big = {p.competitor_id for p in results[0].placements}
    small = {p.competitor_id for p in results[1].placements}
    assert len(big) == 6
    assert len(small) == 4
    assert not big & small


def test_skipped_and_empty_events(make_competitor):
    roster = Roster(_field(make_competitor, 10))
    events = [Event("Elite", 6, 999999, 12, 800, "high"), Event("Held", 6, 0, 12, 300, "low")]
    results = SeasonScheduler().resolve_month(roster, events, random.Random(3), 2025, skip={"Held"})
    assert len(results) == 1
    assert results[0].placements == []
    assert all(c.points_current == 0 for c in roster)


def test_season_boundary(make_competitor):
    roster = Roster([make_competitor("a", points_current=300, points_last=50), make_competitor("b")])
    SeasonScheduler().apply_season_boundary(roster)
    a = roster.get("a")
    assert a.points_last == 300
    assert a.points_current == 0
    assert roster.get("b").points_last == 0
