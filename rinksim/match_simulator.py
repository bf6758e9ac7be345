"""Full-program simulation for non-interactive competitors."""
from __future__ import annotations

import random
from typing import List

from models.competitor import Competitor

from .actions import DEFAULT_CATALOG, ActionCatalog, MatchTemplate
from .config import EngineConfig, resolve
from .probability import clamp
from .ratings import competitor_attributes
from .scoring import ElementScore, score_action


def run_program(
    competitor: Competitor,
    template: MatchTemplate,
    rng: random.Random,
    catalog: ActionCatalog = DEFAULT_CATALOG,
    cfg: EngineConfig | None = None,
) -> List[ElementScore]:
    """Score every phase of ``template`` with a best-available policy.

    A match-local stamina pool starts full and is drained by each element;
    the competitor's own monthly stamina is untouched.
    """

    cfg = resolve(cfg)
    attributes = competitor_attributes(competitor)
    stamina = 100.0
    elements: List[ElementScore] = []
    for phase in template.phases:
        action = catalog.best_available(phase, attributes)
        result = score_action(action, attributes, stamina, False, rng, cfg)
        elements.append(result)
        stamina = clamp(stamina - result.cost)
    return elements


def simulate(
    competitor: Competitor,
    template: MatchTemplate,
    rng: random.Random,
    catalog: ActionCatalog = DEFAULT_CATALOG,
    cfg: EngineConfig | None = None,
) -> float:
    """Return ``competitor``'s aggregate score with judging variance applied."""

    cfg = resolve(cfg)
    total = sum(e.score for e in run_program(competitor, template, rng, catalog, cfg))
    variance = cfg.judgingVariance
    return total * (1 - variance + rng.random() * 2 * variance)


__all__ = ["run_program", "simulate"]
