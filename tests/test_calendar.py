import pytest

from rinksim.calendar import Event, build_season_calendar, events_from_records, is_olympic_year


def test_every_month_has_an_event():
    calendar = build_season_calendar(2025)
    assert sorted(calendar) == list(range(1, 13))
    assert all(calendar[month] for month in calendar)


def test_olympics_every_fourth_year():
    assert is_olympic_year(2026)
    assert not is_olympic_year(2027)
    assert is_olympic_year(2030)
    february = build_season_calendar(2026)[2]
    assert [e.name for e in february] == ["Winter Olympic Games"]
    assert build_season_calendar(2025)[2][0].is_open


def test_grand_prix_month():
    november = {e.name: e for e in build_season_calendar(2025)[11]}
    assert set(november) == {"Grand Prix Japan", "Grand Prix Final"}
    assert november["Grand Prix Final"].is_major()
    assert not november["Grand Prix Japan"].is_major()


def test_large_pool_counts_as_major():
    assert Event("Masters", 5, 0, 10, 2500, "high").is_major()


def test_events_from_records():
    events = events_from_records(
        [
            {"name": "Cup", "month": 4, "qualificationThreshold": -10, "capacity": 8, "pointPool": 500},
            {"name": "Open", "month": 6, "capacity": -1, "pointPool": 100, "matchTemplateId": "mid"},
        ]
    )
    assert events[0].qualification_threshold == 0
    assert events[0].template_id == "low"
    assert events[1].capacity == 0
    assert events[1].template_id == "mid"


def test_events_from_records_rejects_bad_month():
    with pytest.raises(ValueError):
        events_from_records([{"name": "Cup", "month": 13, "capacity": 8, "pointPool": 500}])
