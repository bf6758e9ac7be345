"""Step-by-step execution of a user program.

The caller paces the routine: each call to :meth:`ProgramSession.execute_next`
scores one element and carries stamina forward.  A session works on a copy
of the competitor's attributes and never touches roster state, so an
abandoned session leaves nothing behind.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from models.competitor import Attributes
from utils.exceptions import ProgramConfigError

from .actions import DEFAULT_CATALOG, Action, ActionCatalog, Phase
from .config import EngineConfig, resolve
from .probability import clamp
from .program_planner import ProgramConfiguration, override, reorder
from .scoring import ElementScore, effective_cost, fail_probability, fatigue_factor, score_action


@dataclass(frozen=True)
class StepResult:
    phase: Phase
    action: Action
    element: ElementScore
    next_stamina: float


@dataclass(frozen=True)
class StepPreview:
    action: Action
    fail_probability: float
    cost: float
    fatigue_factor: float


def execute_element(
    program: ProgramConfiguration,
    phase_index: int,
    attributes: Attributes,
    stamina: float,
    rng: random.Random,
    catalog: ActionCatalog = DEFAULT_CATALOG,
    cfg: EngineConfig | None = None,
) -> StepResult:
    """Score element ``phase_index`` of ``program`` and return the next stamina."""

    cfg = resolve(cfg)
    if not 0 <= phase_index < len(program.elements):
        raise IndexError(f"Program has no element {phase_index}")
    element = program.elements[phase_index]
    action = catalog.get(element.action_id)
    stamina = clamp(stamina)
    scored = score_action(action, attributes, stamina, True, rng, cfg)
    return StepResult(element.phase, action, scored, clamp(stamina - scored.cost))


@dataclass
class ProgramSession:
    program: ProgramConfiguration
    attributes: Attributes
    stamina: float
    catalog: ActionCatalog = DEFAULT_CATALOG
    cfg: EngineConfig | None = None
    phase_index: int = 0
    total: float = 0.0
    history: List[StepResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.attributes = self.attributes.copy()
        self.stamina = clamp(self.stamina)
        self.cfg = resolve(self.cfg)

    @property
    def started(self) -> bool:
        return self.phase_index > 0

    @property
    def finished(self) -> bool:
        return self.phase_index >= len(self.program.elements)

    def _ensure_editable(self) -> None:
        if self.started:
            raise ProgramConfigError("The program cannot change once the routine has started")

    def override(self, index: int, action_id: str) -> None:
        self._ensure_editable()
        self.program = override(self.program, index, action_id, self.attributes, self.catalog)

    def reorder(self, from_index: int, to_index: int) -> None:
        self._ensure_editable()
        self.program = reorder(self.program, from_index, to_index)

    def preview(self) -> StepPreview:
        """Describe the next element without rolling any dice."""

        if self.finished:
            raise IndexError("The routine is complete")
        action = self.catalog.get(self.program.elements[self.phase_index].action_id)
        return StepPreview(
            action=action,
            fail_probability=fail_probability(action, self.attributes, True, self.cfg),
            cost=effective_cost(action, self.attributes, self.cfg),
            fatigue_factor=fatigue_factor(self.stamina, self.cfg),
        )

    def execute_next(self, rng: random.Random) -> StepResult:
        if self.finished:
            raise IndexError("The routine is complete")
        step = execute_element(
            self.program, self.phase_index, self.attributes, self.stamina, rng, self.catalog, self.cfg
        )
        self.history.append(step)
        self.total += step.element.score
        self.stamina = step.next_stamina
        self.phase_index += 1
        return step

    def run_to_end(self, rng: random.Random) -> float:
        while not self.finished:
            self.execute_next(rng)
        return self.total


__all__ = ["StepResult", "StepPreview", "execute_element", "ProgramSession"]
