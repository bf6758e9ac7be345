import logging

import pytest

from models.competitor import Attributes
from rinksim.actions import (
    ACTION_LIBRARY,
    DEFAULT_CATALOG,
    ActionCatalog,
    Phase,
    get_template,
    validate_catalog,
)
from utils.exceptions import CatalogConfigError


def test_every_phase_has_a_free_action():
    for phase in Phase:
        assert any(not a.prerequisites for a in DEFAULT_CATALOG.for_phase(phase))


def test_validation_lists_every_uncovered_phase():
    solo_only = [a for a in ACTION_LIBRARY if a.phase is Phase.JUMP_SOLO]
    with pytest.raises(CatalogConfigError) as excinfo:
        ActionCatalog(solo_only)
    assert len(excinfo.value.failures) == len(Phase) - 1


def test_validation_rejects_duplicate_ids():
    with pytest.raises(CatalogConfigError):
        validate_catalog(list(ACTION_LIBRARY) + [ACTION_LIBRARY[0]])


def test_best_available_ignores_risk():
    attrs = Attributes(jump=80, spin=50, step=50, presence=50, endurance=50)
    assert DEFAULT_CATALOG.best_available(Phase.JUMP_SOLO, attrs).action_id == "j_4t"


def test_eligible_respects_prerequisites():
    attrs = Attributes(jump=20, spin=0, step=0, presence=0, endurance=0)
    ids = {a.action_id for a in DEFAULT_CATALOG.eligible(Phase.JUMP_SOLO, attrs)}
    assert "j_2lo" in ids
    assert "j_2f" not in ids


def test_fallback_is_lowest_prerequisite_action():
    action = DEFAULT_CATALOG.fallback(Phase.STEP)
    assert action.action_id == "st_base"
    assert action.prerequisite_total == 0


def test_unknown_action_raises_key_error():
    with pytest.raises(KeyError):
        DEFAULT_CATALOG.get("j_5t")


def test_templates():
    assert len(get_template("low").phases) == 6
    assert Phase.SPIN3 not in get_template("low").phases
    assert get_template("high").phases == tuple(Phase)


def test_unknown_template_falls_back_to_low(caplog):
    with caplog.at_level(logging.WARNING):
        template = get_template("gala")
    assert template.template_id == "low"
    assert "gala" in caplog.text
