"""Element scoring: base value plus execution grade.

:func:`score_action` resolves a single execution of an :class:`Action`.  It
is stateless; callers thread stamina through a sequence of elements
themselves, which is what makes element order matter for fatigue.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from models.competitor import Attributes

from .actions import PHASE_RELEVANT, Action
from .config import EngineConfig, resolve
from .probability import clamp, roll_percent, uniform_noise


@dataclass(frozen=True)
class ElementScore:
    """Outcome of executing one element."""

    score: float
    cost: float
    is_fail: bool
    fatigue_factor: float
    goe_grade: float
    base_value: float


def effective_cost(action: Action, attributes: Attributes, cfg: EngineConfig | None = None) -> float:
    """Stamina spent on ``action``; endurance trims up to 40% of the cost."""

    cfg = resolve(cfg)
    return max(1.0, action.cost * (1 - attributes.endurance / cfg.costEnduranceDivisor))


def relevant_average(action: Action, attributes: Attributes) -> float:
    names = PHASE_RELEVANT[action.phase]
    return sum(attributes.get(name) for name in names) / len(names)


def fail_probability(
    action: Action,
    attributes: Attributes,
    is_interactive: bool,
    cfg: EngineConfig | None = None,
) -> float:
    """Chance of a fall on a ``0-100`` scale.

    Simulated rivals fail at a fraction of the interactive rate, modelling
    their steadier consistency.
    """

    cfg = resolve(cfg)
    base = clamp(
        action.risk * 100 - relevant_average(action, attributes) * cfg.failSkillWeight,
        cfg.failFloor,
        cfg.failCeiling,
    )
    return base if is_interactive else base * cfg.simulatedFailMultiplier


def fatigue_factor(stamina: float, cfg: EngineConfig | None = None) -> float:
    cfg = resolve(cfg)
    if stamina < cfg.fatigueSevereStamina:
        return cfg.fatigueSevereFactor
    if stamina < cfg.fatigueMildStamina:
        return cfg.fatigueMildFactor
    return 1.0


def score_action(
    action: Action,
    attributes: Attributes,
    current_stamina: float,
    is_interactive: bool,
    rng: random.Random,
    cfg: EngineConfig | None = None,
) -> ElementScore:
    """Resolve one execution of ``action`` into an :class:`ElementScore`."""

    cfg = resolve(cfg)
    cost = effective_cost(action, attributes, cfg)
    average = relevant_average(action, attributes)
    is_fail = roll_percent(rng, fail_probability(action, attributes, is_interactive, cfg))
    fatigue = fatigue_factor(current_stamina, cfg)

    if is_fail:
        grade = cfg.failGrade
    else:
        skill = (average - cfg.gradeSkillPivot) / cfg.gradeSkillDivisor
        penalty = (1 - fatigue) * -cfg.gradeFatigueWeight
        noise = uniform_noise(rng, cfg.gradeNoiseRange)
        grade = clamp(skill + penalty + noise, cfg.gradeMin, cfg.gradeMax)

    element = action.base_value * (1 + cfg.gradeStep * grade)
    bonus = attributes.presence * cfg.presenceBonus
    return ElementScore(
        score=max(0.0, element + bonus),
        cost=cost,
        is_fail=is_fail,
        fatigue_factor=fatigue,
        goe_grade=grade,
        base_value=action.base_value,
    )


__all__ = [
    "ElementScore",
    "effective_cost",
    "relevant_average",
    "fail_probability",
    "fatigue_factor",
    "score_action",
]
