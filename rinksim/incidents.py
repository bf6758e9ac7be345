"""Random monthly incidents affecting the user competitor.

Incidents are drawn at most once per month.  Only the sporting side of an
incident is modelled here (attributes, stamina, injury); money and fame
effects belong to the market layer.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from models.competitor import ATTRIBUTE_NAMES, Competitor

from .config import EngineConfig, resolve
from .probability import roll, weighted_choice


@dataclass(frozen=True)
class Incident:
    incident_id: str
    name: str
    chance: float
    effect: Mapping[str, float] = field(default_factory=dict)
    rare: bool = False


INCIDENTS: Tuple[Incident, ...] = (
    Incident("fan_letters", "Letters from fans", 0.5, {"stamina": 10}),
    Incident("fresh_ice", "Freshly resurfaced ice", 0.4, {"jump": 1, "step": 2}),
    Incident("yoga_session", "Deep stretching class", 0.4, {"spin": 2, "presence": 1, "stamina": -5}),
    Incident("night_practice", "Late-night practice", 0.3, {"jump": 3, "stamina": -15}),
    Incident("music_inspiration", "Musical inspiration", 0.3, {"presence": 3}),
    Incident("poor_sleep", "Pre-competition nerves", 0.4, {"stamina": -20, "endurance": -2}),
    Incident("dull_blades", "Dull blades", 0.3, {"jump": -2, "step": -1}),
    Incident("head_cold", "Head cold", 0.3, {"stamina": -25, "endurance": -3}),
    Incident("costume_tear", "Torn costume", 0.2, {"presence": -2}),
    Incident("diet_slip", "Diet slip", 0.3, {"jump": -1, "endurance": -1, "stamina": -10}),
    Incident("ankle_sprain", "Severe ankle sprain", 0.03, {"jump": -5, "step": -5, "injury_months": 4}, rare=True),
    Incident("masterclass", "Masterclass with a champion", 0.04, {"jump": 3, "spin": 3, "step": 3, "presence": 3}, rare=True),
    Incident("boot_failure", "Boot failure", 0.02, {"jump": -4, "step": -2, "stamina": -15}, rare=True),
    Incident("breakthrough", "Mental breakthrough", 0.06, {"jump": 5, "presence": 3}, rare=True),
)


def draw_incident(
    rng: random.Random,
    incidents: Tuple[Incident, ...] = INCIDENTS,
    cfg: EngineConfig | None = None,
) -> Optional[Incident]:
    """Roll for this month's incident; ``None`` when nothing happens."""

    cfg = resolve(cfg)
    if not incidents or not roll(rng, cfg.incidentChance):
        return None
    return weighted_choice(rng, [i.chance for i in incidents], incidents)


def apply_incident(competitor: Competitor, incident: Incident) -> Dict[str, float]:
    """Apply ``incident`` to ``competitor`` and return the applied deltas."""

    applied: Dict[str, float] = {}
    for key, delta in incident.effect.items():
        if key in ATTRIBUTE_NAMES:
            if competitor.attributes is None:
                continue
            before = competitor.attributes.get(key)
            setattr(competitor.attributes, key, before + delta)
            applied[key] = competitor.attributes.get(key) - before
        elif key == "stamina":
            before = competitor.stamina
            competitor.stamina = before + delta
            applied[key] = competitor.stamina - before
        elif key == "injury_months":
            competitor.injury_months = max(competitor.injury_months, int(delta))
            applied[key] = competitor.injury_months
    return applied


__all__ = ["Incident", "INCIDENTS", "draw_incident", "apply_incident"]
