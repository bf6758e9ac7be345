import pytest

from models.competitor import Attributes
from rinksim.ratings import apply_bonuses, competitor_attributes, derive, expand_composites, refresh_composites


def test_attributes_are_clamped_on_write():
    attrs = Attributes(jump=120, spin=-5, step=50, presence=50, endurance=50)
    assert attrs.jump == 100
    assert attrs.spin == 0
    attrs.step = 130
    assert attrs.step == 100


def test_derive_uses_weighted_sums():
    technical, artistic = derive(Attributes(50, 50, 50, 50, 50))
    assert technical == pytest.approx(50)
    assert artistic == pytest.approx(50)

    technical, artistic = derive(Attributes(jump=100, spin=0, step=0, presence=100, endurance=0))
    assert technical == pytest.approx(40)
    assert artistic == pytest.approx(50)


def test_apply_bonuses_returns_clamped_copy():
    base = Attributes(jump=95, spin=40, step=40, presence=40, endurance=40)
    boosted = apply_bonuses(base, {"jump": 10, "presence": 5, "style": 99})
    assert boosted.jump == 100
    assert boosted.presence == 45
    assert base.jump == 95
    assert apply_bonuses(base, None) == base


def test_expand_composites():
    attrs = expand_composites(60, 40)
    assert attrs.jump == 60
    assert attrs.spin == 60
    assert attrs.step == 50
    assert attrs.presence == 40
    assert attrs.endurance == pytest.approx(54)


def test_competitor_attributes_prefers_real_attributes(make_competitor):
    rival = make_competitor(technical=70, artistic=30)
    assert competitor_attributes(rival).jump == 70

    skater = make_competitor(attributes={"jump": 20, "spin": 20, "step": 20, "presence": 20, "endurance": 20})
    copy = competitor_attributes(skater)
    copy.jump = 90
    assert skater.attributes.jump == 20


def test_refresh_composites_includes_bonuses(make_competitor):
    skater = make_competitor(attributes={"jump": 50, "spin": 50, "step": 50, "presence": 50, "endurance": 50})
    refresh_composites(skater, {"jump": 10})
    assert skater.technical == pytest.approx(54)
    assert skater.artistic == pytest.approx(50)
