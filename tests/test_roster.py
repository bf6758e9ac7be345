import pytest

from models.roster import Roster


def test_lookup_and_slot_order(make_competitor):
    roster = Roster([make_competitor("a"), make_competitor("b")])
    assert len(roster) == 2
    assert "b" in roster
    assert roster.slot_of("b") == 1
    assert [c.competitor_id for c in roster] == ["a", "b"]
    assert roster.get("zzz") is None
    with pytest.raises(KeyError):
        roster.slot_of("zzz")


def test_duplicate_ids_rejected(make_competitor):
    with pytest.raises(ValueError):
        Roster([make_competitor("a"), make_competitor("a")])
    roster = Roster([make_competitor("a"), make_competitor("b")])
    with pytest.raises(ValueError):
        roster.replace_slot(0, make_competitor("b"))


def test_replace_slot_keeps_size(make_competitor):
    roster = Roster([make_competitor("a"), make_competitor("b")])
    previous = roster.replace_slot(0, make_competitor("n"))
    assert previous.competitor_id == "a"
    assert len(roster) == 2
    assert "a" not in roster
    assert roster.slot_of("n") == 0


def test_user_and_simulated_split(make_competitor):
    roster = Roster([make_competitor("u", is_user_controlled=True), make_competitor("r")])
    assert roster.user().competitor_id == "u"
    assert [c.competitor_id for c in roster.simulated()] == ["r"]


def test_snapshot_is_detached(make_competitor):
    roster = Roster([make_competitor("a", attributes={"jump": 10})])
    copy = roster.snapshot()[0]
    copy.points_current = 999
    copy.attributes.jump = 90
    assert roster.get("a").points_current == 0
    assert roster.get("a").attributes.jump == 10


def test_competitor_values_are_clamped(make_competitor):
    skater = make_competitor()
    skater.stamina = 140
    skater.technical = -3
    skater.injury_months = -2
    assert skater.stamina == 100
    assert skater.technical == 0
    assert skater.injury_months == 0
