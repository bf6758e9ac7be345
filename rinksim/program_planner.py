"""Program planning: choose one action per phase under a risk strategy.

Strategies are plain selection functions looked up in :data:`_SELECTORS`;
each receives the prerequisite-eligible actions for a phase and returns the
chosen one (or ``None`` to request the catalog fallback).  Risk caps only
apply to jump phases.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models.competitor import Attributes
from utils.exceptions import ProgramConfigError

from .actions import DEFAULT_CATALOG, Action, ActionCatalog, Phase
from .config import EngineConfig, resolve

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ProgramElement:
    phase: Phase
    action_id: str


@dataclass(frozen=True)
class ProgramConfiguration:
    """Ordered elements of a routine plus the strategy that produced them."""

    elements: Tuple[ProgramElement, ...]
    strategy: Strategy = Strategy.CUSTOM

    def __len__(self) -> int:
        return len(self.elements)

    def actions(self, catalog: ActionCatalog = DEFAULT_CATALOG) -> List[Action]:
        return [catalog.get(e.action_id) for e in self.elements]

    def total_base_value(self, catalog: ActionCatalog = DEFAULT_CATALOG) -> float:
        return sum(a.base_value for a in self.actions(catalog))

    def average_risk(self, catalog: ActionCatalog = DEFAULT_CATALOG) -> float:
        actions = self.actions(catalog)
        return sum(a.risk for a in actions) / len(actions) if actions else 0.0


def risk_cap(strategy: Strategy, cfg: EngineConfig | None = None) -> Optional[float]:
    """Maximum jump risk accepted by ``strategy``; ``None`` means uncapped."""

    cfg = resolve(cfg)
    if strategy is Strategy.CONSERVATIVE:
        return cfg.conservativeRiskCap
    if strategy is Strategy.AGGRESSIVE:
        return None
    return cfg.balancedRiskCap


def _within_cap(action: Action, cap: Optional[float]) -> bool:
    return cap is None or not action.phase.is_jump or action.risk <= cap


Selector = Callable[[Sequence[Action], Optional[float], EngineConfig], Optional[Action]]


def _select_conservative(eligible: Sequence[Action], cap: Optional[float], cfg: EngineConfig) -> Optional[Action]:
    compliant = [a for a in eligible if _within_cap(a, cap)]
    if compliant:
        return max(compliant, key=lambda a: a.base_value)
    if eligible:
        return min(eligible, key=lambda a: a.risk)
    return None


def _select_balanced(eligible: Sequence[Action], cap: Optional[float], cfg: EngineConfig) -> Optional[Action]:
    compliant = [a for a in eligible if _within_cap(a, cap)]
    if not compliant:
        return None
    return max(compliant, key=lambda a: a.base_value / (1 + cfg.balancedRiskPenalty * a.risk))


def _select_aggressive(eligible: Sequence[Action], cap: Optional[float], cfg: EngineConfig) -> Optional[Action]:
    return max(eligible, key=lambda a: a.base_value) if eligible else None


_SELECTORS: Dict[Strategy, Selector] = {
    Strategy.CONSERVATIVE: _select_conservative,
    Strategy.BALANCED: _select_balanced,
    Strategy.AGGRESSIVE: _select_aggressive,
    # Hand-tuned programs start from the balanced plan.
    Strategy.CUSTOM: _select_balanced,
}


def select_action(
    phase: Phase,
    attributes: Attributes,
    strategy: Strategy,
    catalog: ActionCatalog = DEFAULT_CATALOG,
    cfg: EngineConfig | None = None,
) -> Action:
    cfg = resolve(cfg)
    strategy = Strategy(strategy)
    chosen = _SELECTORS[strategy](catalog.eligible(phase, attributes), risk_cap(strategy, cfg), cfg)
    if chosen is None:
        logger.warning("No %s action fits the %s plan; using fallback", Phase(phase).value, strategy.value)
        chosen = catalog.fallback(phase)
    return chosen


def generate(
    attributes: Attributes,
    phases: Sequence[Phase],
    strategy: Strategy | str,
    catalog: ActionCatalog = DEFAULT_CATALOG,
    cfg: EngineConfig | None = None,
) -> ProgramConfiguration:
    """Build a program with one element per phase in ``phases`` order."""

    strategy = Strategy(strategy)
    elements = tuple(
        ProgramElement(Phase(phase), select_action(phase, attributes, strategy, catalog, cfg).action_id)
        for phase in phases
    )
    return ProgramConfiguration(elements, strategy)


def override(
    program: ProgramConfiguration,
    index: int,
    action_id: str,
    attributes: Attributes,
    catalog: ActionCatalog = DEFAULT_CATALOG,
) -> ProgramConfiguration:
    """Return ``program`` with element ``index`` swapped to ``action_id``."""

    if not 0 <= index < len(program.elements):
        raise ProgramConfigError(f"Element index {index} out of range")
    if action_id not in catalog:
        raise ProgramConfigError(f"Unknown action '{action_id}'")
    action = catalog.get(action_id)
    element = program.elements[index]
    if action.phase is not element.phase:
        raise ProgramConfigError(
            f"{action.name} is a {action.phase.value} element, slot {index} needs {element.phase.value}"
        )
    if not action.available_to(attributes):
        raise ProgramConfigError(f"Prerequisites for {action.name} are not met")
    elements = list(program.elements)
    elements[index] = replace(element, action_id=action_id)
    return ProgramConfiguration(tuple(elements), Strategy.CUSTOM)


def reorder(program: ProgramConfiguration, from_index: int, to_index: int) -> ProgramConfiguration:
    """Move one element; only fatigue timing changes, never base values."""

    size = len(program.elements)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise ProgramConfigError("Element index out of range")
    elements = list(program.elements)
    elements.insert(to_index, elements.pop(from_index))
    return ProgramConfiguration(tuple(elements), Strategy.CUSTOM)


__all__ = [
    "Strategy",
    "ProgramElement",
    "ProgramConfiguration",
    "risk_cap",
    "select_action",
    "generate",
    "override",
    "reorder",
]
