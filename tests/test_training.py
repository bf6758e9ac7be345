import pytest

from models.competitor import Attributes
from rinksim.training import (
    COACH_TIERS,
    CoachModifiers,
    TrainingResult,
    age_multiplier,
    apply_training,
    normalize_schedule,
    preview,
    session_efficiency,
    weekly_update,
)

BASIC = COACH_TIERS["basic"]


def test_rest_week_restores_stamina():
    result = weekly_update(["rest"] * 7, 50, BASIC, 20, 0)
    assert result.final_stamina == 100
    assert all(gain == 0 for gain in result.gains.values())


def test_late_sessions_in_heavy_week_gain_less():
    result = weekly_update(["jump"] * 7, 100, BASIC, 20, 0)
    # Four full sessions, one at low stamina, two with nothing left.
    assert result.gains["jump"] == pytest.approx(1.2 * 4 + 1.2 * 0.3)
    assert result.final_stamina == 0


def test_endurance_reduces_task_cost():
    tired = weekly_update(["jump"] * 7, 100, BASIC, 20, 0)
    fit = weekly_update(["jump"] * 7, 100, BASIC, 20, 100)
    assert fit.final_stamina == pytest.approx(100 - 7 * 22 * 0.6)
    assert fit.gains["jump"] == pytest.approx(7 * 1.2 * 1.2)
    assert fit.gains["jump"] > tired.gains["jump"]


def test_short_schedule_is_padded_with_rest():
    assert normalize_schedule(["jump", "spin"]) == ("jump", "spin", "rest", "rest", "rest", "rest", "rest")


def test_invalid_schedules_raise():
    with pytest.raises(ValueError):
        normalize_schedule(["rest"] * 8)
    with pytest.raises(ValueError):
        normalize_schedule(["jump", "nap"])


def test_age_multiplier_bands():
    assert age_multiplier(15) == 1.3
    assert age_multiplier(20) == 1.0
    assert age_multiplier(23) == 1.0
    assert age_multiplier(28) == 0.6


def test_session_efficiency():
    assert session_efficiency(100, 0) == 1.0
    assert session_efficiency(100, 100) == pytest.approx(1.2)
    assert session_efficiency(10, 100) == pytest.approx(0.5)
    assert session_efficiency(0, 100) == 0.0


def test_coach_modifiers_map_to_attributes():
    coach = CoachModifiers(technical_modifier=1.4, artistic_modifier=1.0)
    assert coach.for_attribute("jump") == 1.4
    assert coach.for_attribute("presence") == 1.0
    assert coach.for_attribute("step") == pytest.approx(1.2)
    better = weekly_update(["presence"], 100, COACH_TIERS["legend"], 20, 0)
    assert better.gains["presence"] == pytest.approx(1.8)


def test_apply_training_caps_gain_and_attribute(fixed_rng):
    attrs = Attributes(jump=99, spin=10, step=10, presence=10, endurance=10)
    result = TrainingResult(final_stamina=50)
    result.gains["jump"] = 10
    result.gains["spin"] = 10
    applied = apply_training(attrs, result, fixed_rng())
    assert attrs.jump == 100
    assert applied["jump"] == pytest.approx(1)
    assert attrs.spin == 13
    assert applied["presence"] == 0


def test_preview_reports_final_stamina():
    summary = preview(["jump", "spin"], 100, None, 20, 0)
    assert summary["jump"] == pytest.approx(1.2)
    assert summary["spin"] == pytest.approx(0.9)
    assert summary["stamina"] == 100
