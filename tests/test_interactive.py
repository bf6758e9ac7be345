import random

import pytest

from models.competitor import Attributes
from rinksim.actions import get_template
from rinksim.interactive import ProgramSession, execute_element
from rinksim.program_planner import generate
from utils.exceptions import ProgramConfigError


def _attrs():
    return Attributes(jump=80, spin=50, step=50, presence=50, endurance=50)


def _session(stamina=100):
    attrs = _attrs()
    program = generate(attrs, get_template("high").phases, "balanced")
    return ProgramSession(program, attrs, stamina)


def test_execute_element_carries_stamina(fixed_rng):
    session = _session()
    step = execute_element(session.program, 0, _attrs(), 100, fixed_rng(0.5))
    assert step.next_stamina == pytest.approx(100 - step.element.cost)
    with pytest.raises(IndexError):
        execute_element(session.program, 7, _attrs(), 100, fixed_rng(0.5))


def test_session_runs_one_element_at_a_time():
    session = _session()
    rng = random.Random(8)
    first = session.execute_next(rng)
    assert session.phase_index == 1
    assert session.stamina == first.next_stamina
    total = session.run_to_end(rng)
    assert session.finished
    assert len(session.history) == 7
    assert total == pytest.approx(sum(step.element.score for step in session.history))
    with pytest.raises(IndexError):
        session.execute_next(rng)


def test_stamina_never_goes_negative():
    session = _session(stamina=10)
    session.run_to_end(random.Random(2))
    assert session.stamina == 0
    assert all(step.element.fatigue_factor == 0.6 for step in session.history)


def test_program_locked_after_first_step():
    session = _session()
    session.override(0, "j_4t")
    session.reorder(0, 1)
    session.execute_next(random.Random(1))
    with pytest.raises(ProgramConfigError):
        session.override(1, "j_1t")
    with pytest.raises(ProgramConfigError):
        session.reorder(0, 1)


def test_session_works_on_a_copy_of_attributes():
    attrs = _attrs()
    program = generate(attrs, get_template("low").phases, "conservative")
    session = ProgramSession(program, attrs, 100)
    session.attributes.jump = 0
    assert attrs.jump == 80


def test_preview_describes_next_element():
    session = _session()
    preview = session.preview()
    assert preview.action.action_id == session.program.elements[0].action_id
    assert 2 <= preview.fail_probability <= 90
    assert preview.fatigue_factor == 1.0
