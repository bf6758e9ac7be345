import random

import pytest

from rinksim.actions import get_template
from rinksim.match_simulator import run_program, simulate


def test_simulation_is_deterministic_for_a_seed(make_competitor):
    rival = make_competitor(technical=75, artistic=70)
    template = get_template("high")
    first = simulate(rival, template, random.Random(7))
    second = simulate(rival, template, random.Random(7))
    assert first == second
    assert first > 0


def test_run_program_scores_each_phase(make_competitor):
    rival = make_competitor(technical=60, artistic=60)
    elements = run_program(rival, get_template("low"), random.Random(3))
    assert len(elements) == 6
    assert all(e.score >= 0 for e in elements)


def test_match_does_not_touch_monthly_stamina(make_competitor):
    rival = make_competitor(technical=90, artistic=90, stamina=40)
    simulate(rival, get_template("high"), random.Random(1))
    assert rival.stamina == 40


def test_judging_variance_bounds(make_competitor, fixed_rng):
    rival = make_competitor(technical=50, artistic=50)
    template = get_template("mid")
    base = sum(e.score for e in run_program(rival, template, fixed_rng(0.5)))
    assert simulate(rival, template, fixed_rng(0.5)) == pytest.approx(base)
    high = sum(e.score for e in run_program(rival, template, fixed_rng(0.99)))
    assert simulate(rival, template, fixed_rng(0.99)) == pytest.approx(high * 1.049)


def test_stronger_competitor_scores_higher_on_average(make_competitor):
    strong = make_competitor("s", technical=85, artistic=85)
    weak = make_competitor("w", technical=30, artistic=30)
    template = get_template("high")
    rng = random.Random(11)
    strong_total = sum(simulate(strong, template, rng) for _ in range(20))
    weak_total = sum(simulate(weak, template, rng) for _ in range(20))
    assert strong_total > weak_total
