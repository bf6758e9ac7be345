import random

from rinksim.config import EngineConfig
from rinksim.incidents import INCIDENTS, Incident, apply_incident, draw_incident
from rinksim.population import create_user_competitor


def test_no_incident_when_chance_is_zero():
    cfg = EngineConfig({"incidentChance": 0.0})
    rng = random.Random(1)
    assert all(draw_incident(rng, cfg=cfg) is None for _ in range(50))


def test_incidents_drawn_from_table():
    cfg = EngineConfig({"incidentChance": 1.0})
    rng = random.Random(4)
    drawn = {draw_incident(rng, cfg=cfg).incident_id for _ in range(200)}
    assert drawn <= {i.incident_id for i in INCIDENTS}
    assert "fan_letters" in drawn


def test_apply_incident_clamps_values():
    user = create_user_competitor("Me")
    user.stamina = 10
    applied = apply_incident(user, Incident("crash", "Crash", 1.0, {"stamina": -25, "jump": -50}))
    assert user.stamina == 0
    assert user.attributes.jump == 0
    assert applied == {"stamina": -10, "jump": -40}


def test_injury_incident_sets_cooldown():
    user = create_user_competitor("Me")
    sprain = next(i for i in INCIDENTS if i.incident_id == "ankle_sprain")
    apply_incident(user, sprain)
    assert user.injury_months == 4
    assert user.injured
