"""Monthly training resolution for the user competitor.

A month of training is described by a seven slot schedule of task ids.
Tasks are processed in order against a shrinking stamina pool, so a heavy
week front-loads its gains and late sessions run at reduced efficiency.

* :func:`weekly_update` computes the raw, deterministic gains.
* :func:`apply_training` jitters those gains and writes them to attributes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from models.competitor import ATTRIBUTE_NAMES, Attributes

from .config import EngineConfig, resolve
from .probability import clamp, jitter

SCHEDULE_LENGTH = 7


@dataclass(frozen=True)
class TrainingTask:
    task_id: str
    name: str
    target: Optional[str]
    base_gain: float
    stamina_cost: float  # negative values restore stamina


TRAINING_TASKS: Dict[str, TrainingTask] = {
    "jump": TrainingTask("jump", "Quad Jump Drills", "jump", 1.2, 22),
    "spin": TrainingTask("spin", "Flexibility & Spins", "spin", 0.9, 12),
    "step": TrainingTask("step", "Edge & Step Work", "step", 0.9, 14),
    "presence": TrainingTask("presence", "Performance Coaching", "presence", 1.0, 12),
    "endurance": TrainingTask("endurance", "Core Endurance", "endurance", 0.8, 18),
    "rest": TrainingTask("rest", "Recovery & Physio", None, 0.0, -28),
}

DEFAULT_SCHEDULE: Tuple[str, ...] = ("rest",) * SCHEDULE_LENGTH


@dataclass(frozen=True)
class CoachModifiers:
    """Coach record supplied by the market; the engine ignores ``salary``."""

    technical_modifier: float = 1.0
    artistic_modifier: float = 1.0
    salary: int = 0

    def for_attribute(self, name: str) -> float:
        if name == "presence":
            return self.artistic_modifier
        if name == "step":
            return (self.technical_modifier + self.artistic_modifier) / 2
        return self.technical_modifier


COACH_TIERS: Dict[str, CoachModifiers] = {
    "basic": CoachModifiers(1.0, 1.0, 1000),
    "pro": CoachModifiers(1.25, 1.15, 3500),
    "national": CoachModifiers(1.4, 1.4, 8000),
    "legend": CoachModifiers(1.7, 1.8, 20000),
}


@dataclass(slots=True)
class TrainingResult:
    final_stamina: float
    gains: Dict[str, float] = field(default_factory=lambda: dict.fromkeys(ATTRIBUTE_NAMES, 0.0))


def normalize_schedule(schedule: Sequence[str]) -> Tuple[str, ...]:
    """Validate ``schedule`` and pad it with rest days to seven slots."""

    tasks = tuple(schedule)
    if len(tasks) > SCHEDULE_LENGTH:
        raise ValueError(f"A schedule holds at most {SCHEDULE_LENGTH} tasks")
    unknown = [t for t in tasks if t not in TRAINING_TASKS]
    if unknown:
        raise ValueError(f"Unknown training tasks: {', '.join(unknown)}")
    return tasks + ("rest",) * (SCHEDULE_LENGTH - len(tasks))


def age_multiplier(age: float, cfg: EngineConfig | None = None) -> float:
    cfg = resolve(cfg)
    if age < cfg.youthAge:
        return cfg.youthTrainingMult
    if age <= cfg.primeAge:
        return cfg.primeTrainingMult
    return cfg.veteranTrainingMult


def session_efficiency(stamina: float, endurance: float, cfg: EngineConfig | None = None) -> float:
    """Efficiency of a single session started with ``stamina`` remaining."""

    cfg = resolve(cfg)
    bonus = endurance / cfg.trainingEfficiencyDivisor
    if stamina <= 0:
        return 0.0
    if stamina < cfg.lowStaminaThreshold:
        efficiency = cfg.lowStaminaEfficiency + bonus
    else:
        efficiency = 1.0 + bonus
    return min(efficiency, cfg.trainingEfficiencyCap)


def weekly_update(
    schedule: Sequence[str],
    stamina: float,
    coach: CoachModifiers,
    age: float,
    endurance: float,
    cfg: EngineConfig | None = None,
) -> TrainingResult:
    """Run ``schedule`` against ``stamina`` and return raw gains.

    External inputs are clamped before use: stamina and endurance to
    ``0-100``.
    """

    cfg = resolve(cfg)
    tasks = normalize_schedule(schedule)
    stamina = clamp(stamina)
    endurance = clamp(endurance)
    age_mod = age_multiplier(age, cfg)
    cost_scale = 1 - endurance / cfg.costEnduranceDivisor

    result = TrainingResult(final_stamina=stamina)
    for task_id in tasks:
        task = TRAINING_TASKS[task_id]
        efficiency = session_efficiency(stamina, endurance, cfg)
        if task.target is not None:
            result.gains[task.target] += (
                task.base_gain * coach.for_attribute(task.target) * age_mod * efficiency
            )
        stamina = clamp(stamina - task.stamina_cost * cost_scale)
    result.final_stamina = stamina
    return result


def apply_training(
    attributes: Attributes,
    result: TrainingResult,
    rng: random.Random,
    cfg: EngineConfig | None = None,
) -> Dict[str, float]:
    """Apply jittered gains from ``result`` to ``attributes`` in place.

    Returns the gain actually applied per attribute after clamping.
    """

    cfg = resolve(cfg)
    applied: Dict[str, float] = {}
    for name in ATTRIBUTE_NAMES:
        gain = clamp(jitter(rng, result.gains.get(name, 0.0), cfg.trainingGainSpread), 0.0, cfg.trainingGainCap)
        before = attributes.get(name)
        setattr(attributes, name, before + gain)
        applied[name] = attributes.get(name) - before
    return applied


def preview(
    schedule: Sequence[str],
    stamina: float,
    coach: CoachModifiers | None,
    age: float,
    endurance: float,
    cfg: EngineConfig | None = None,
) -> Mapping[str, float]:
    """Convenience wrapper returning expected gains plus final stamina."""

    result = weekly_update(schedule, stamina, coach or COACH_TIERS["basic"], age, endurance, cfg)
    summary = dict(result.gains)
    summary["stamina"] = result.final_stamina
    return summary


__all__ = [
    "SCHEDULE_LENGTH",
    "TrainingTask",
    "TRAINING_TASKS",
    "DEFAULT_SCHEDULE",
    "CoachModifiers",
    "COACH_TIERS",
    "TrainingResult",
    "normalize_schedule",
    "age_multiplier",
    "session_efficiency",
    "weekly_update",
    "apply_training",
    "preview",
]
