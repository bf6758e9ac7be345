import pytest

from rinksim.config import EngineConfig
from rinksim.ranking import event_points, order_by_rolling, rolling, standings, top_ids


def test_rolling_score_blends_prior_season(make_competitor):
    skater = make_competitor(points_current=1000, points_last=500)
    assert rolling(skater) == 1350
    assert skater.rolling_score == 1350
    assert rolling(skater, EngineConfig({"priorSeasonWeight": 0.5})) == 1250
    assert skater.rolling_score == 1350


def test_event_points_by_rank():
    assert event_points(1000, 1) == 1000
    assert event_points(1000, 2) == 714
    assert event_points(300, 12) == 55
    with pytest.raises(ValueError):
        event_points(1000, 0)


def test_order_by_rolling_is_stable(make_competitor):
    a = make_competitor("a", points_current=100)
    b = make_competitor("b", points_current=300)
    c = make_competitor("c", points_current=100)
    assert [x.competitor_id for x in order_by_rolling([a, b, c])] == ["b", "a", "c"]


def test_snapshot_drives_ordering(make_competitor):
    a = make_competitor("a", points_current=100)
    b = make_competitor("b", points_current=300)
    scores = standings([a, b])
    a.points_current = 1000
    assert [x.competitor_id for x in order_by_rolling([a, b], scores)] == ["b", "a"]
    assert top_ids([a, b], 1, scores) == {"b"}
