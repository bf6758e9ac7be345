"""Static catalog of competitive actions and match templates.

Base values follow the simplified scale of values used throughout the
engine.  Each action belongs to exactly one :class:`Phase`; a routine is a
:class:`MatchTemplate` listing the phases it requires.  The catalog is
validated on construction: every phase must offer at least one action
without prerequisites so planners always have something to fall back on.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from models.competitor import Attributes
from utils.exceptions import CatalogConfigError

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """The seven element slots of a routine."""

    JUMP_SOLO = "jump_solo"
    JUMP_COMBO = "jump_combo"
    JUMP_AXEL = "jump_axel"
    SPIN1 = "spin1"
    SPIN2 = "spin2"
    SPIN3 = "spin3"
    STEP = "step"

    @property
    def is_jump(self) -> bool:
        return self in JUMP_PHASES


JUMP_PHASES = frozenset({Phase.JUMP_SOLO, Phase.JUMP_COMBO, Phase.JUMP_AXEL})

# Attributes averaged when judging an element of each phase.
PHASE_RELEVANT: Dict[Phase, Tuple[str, ...]] = {
    Phase.JUMP_SOLO: ("jump",),
    Phase.JUMP_COMBO: ("jump", "endurance"),
    Phase.JUMP_AXEL: ("jump",),
    Phase.SPIN1: ("spin",),
    Phase.SPIN2: ("spin",),
    Phase.SPIN3: ("spin",),
    Phase.STEP: ("step", "presence"),
}


@dataclass(frozen=True)
class Action:
    action_id: str
    name: str
    phase: Phase
    base_value: float
    cost: float
    risk: float
    prerequisites: Mapping[str, float] = field(default_factory=dict)

    def available_to(self, attributes: Attributes) -> bool:
        """Return ``True`` when ``attributes`` meet every prerequisite."""

        return all(attributes.get(name) >= minimum for name, minimum in self.prerequisites.items())

    @property
    def prerequisite_total(self) -> float:
        return sum(self.prerequisites.values())


@dataclass(frozen=True)
class MatchTemplate:
    template_id: str
    name: str
    phases: Tuple[Phase, ...]


def _a(action_id, name, phase, base_value, cost, risk, **prereq) -> Action:
    return Action(action_id, name, phase, base_value, cost, risk, dict(prereq))


ACTION_LIBRARY: Tuple[Action, ...] = (
    # Solo jumps
    _a("j_1t", "Single Toe Loop (1T)", Phase.JUMP_SOLO, 0.4, 2, 0.0),
    _a("j_1s", "Single Salchow (1S)", Phase.JUMP_SOLO, 0.4, 2, 0.0),
    _a("j_1lo", "Single Loop (1Lo)", Phase.JUMP_SOLO, 0.5, 3, 0.0),
    _a("j_1f", "Single Flip (1F)", Phase.JUMP_SOLO, 0.5, 3, 0.0),
    _a("j_1lz", "Single Lutz (1Lz)", Phase.JUMP_SOLO, 0.6, 3, 0.0),
    _a("j_2t", "Double Toe Loop (2T)", Phase.JUMP_SOLO, 1.3, 5, 0.03, jump=15),
    _a("j_2s", "Double Salchow (2S)", Phase.JUMP_SOLO, 1.3, 5, 0.03, jump=15),
    _a("j_2lo", "Double Loop (2Lo)", Phase.JUMP_SOLO, 1.7, 6, 0.05, jump=20),
    _a("j_2f", "Double Flip (2F)", Phase.JUMP_SOLO, 1.8, 6, 0.05, jump=25),
    _a("j_2lz", "Double Lutz (2Lz)", Phase.JUMP_SOLO, 2.1, 7, 0.08, jump=30),
    _a("j_3t", "Triple Toe Loop (3T)", Phase.JUMP_SOLO, 4.2, 10, 0.15, jump=45),
    _a("j_3s", "Triple Salchow (3S)", Phase.JUMP_SOLO, 4.3, 10, 0.15, jump=45),
    _a("j_3lo", "Triple Loop (3Lo)", Phase.JUMP_SOLO, 4.9, 12, 0.20, jump=55),
    _a("j_3f", "Triple Flip (3F)", Phase.JUMP_SOLO, 5.3, 13, 0.22, jump=60),
    _a("j_3lz", "Triple Lutz (3Lz)", Phase.JUMP_SOLO, 5.9, 15, 0.25, jump=65),
    _a("j_4t", "Quad Toe Loop (4T)", Phase.JUMP_SOLO, 9.5, 22, 0.45, jump=80),
    _a("j_4s", "Quad Salchow (4S)", Phase.JUMP_SOLO, 9.7, 23, 0.45, jump=82),
    _a("j_4lo", "Quad Loop (4Lo)", Phase.JUMP_SOLO, 10.5, 25, 0.50, jump=85),
    _a("j_4f", "Quad Flip (4F)", Phase.JUMP_SOLO, 11.0, 27, 0.55, jump=88),
    _a("j_4lz", "Quad Lutz (4Lz)", Phase.JUMP_SOLO, 11.5, 30, 0.60, jump=92),
    # Axels
    _a("a_1a", "Single Axel (1A)", Phase.JUMP_AXEL, 1.1, 4, 0.02),
    _a("a_2a", "Double Axel (2A)", Phase.JUMP_AXEL, 3.3, 8, 0.10, jump=35),
    _a("a_3a", "Triple Axel (3A)", Phase.JUMP_AXEL, 8.0, 20, 0.40, jump=75),
    _a("a_4a", "Quad Axel (4A)", Phase.JUMP_AXEL, 12.5, 35, 0.70, jump=98),
    # Jump combinations
    _a("c_1t1t", "1T+1T", Phase.JUMP_COMBO, 0.8, 4, 0.0),
    _a("c_2t2t", "2T+2T", Phase.JUMP_COMBO, 2.6, 8, 0.05, jump=20, endurance=10),
    _a("c_2a2t", "2A+2T", Phase.JUMP_COMBO, 4.6, 12, 0.12, jump=40, endurance=15),
    _a("c_3t2t", "3T+2T", Phase.JUMP_COMBO, 5.5, 15, 0.18, jump=50, endurance=20),
    _a("c_3s3t", "3S+3T", Phase.JUMP_COMBO, 8.5, 18, 0.25, jump=60, endurance=30),
    _a("c_3t3t", "3T+3T", Phase.JUMP_COMBO, 8.4, 18, 0.28, jump=60, endurance=30),
    _a("c_3f3t", "3F+3T", Phase.JUMP_COMBO, 9.5, 20, 0.30, jump=65, endurance=35),
    _a("c_3lz3t", "3Lz+3T", Phase.JUMP_COMBO, 10.1, 22, 0.35, jump=70, endurance=40),
    _a("c_3a3t", "3A+3T", Phase.JUMP_COMBO, 12.2, 28, 0.45, jump=80, endurance=50),
    _a("c_4t3t", "4T+3T", Phase.JUMP_COMBO, 13.7, 32, 0.55, jump=85, endurance=60),
    _a("c_4s3t", "4S+3T", Phase.JUMP_COMBO, 13.9, 33, 0.55, jump=87, endurance=60),
    _a("c_4lz3t", "4Lz+3T", Phase.JUMP_COMBO, 15.7, 40, 0.70, jump=95, endurance=75),
    # Spins
    _a("s1_upright", "Upright Spin (USp)", Phase.SPIN1, 1.0, 4, 0.0),
    _a("s1_upright2", "Upright Spin Lv2 (USp2)", Phase.SPIN1, 1.5, 5, 0.05, spin=20),
    _a("s1_upright3", "Upright Spin Lv3 (USp3)", Phase.SPIN1, 1.9, 6, 0.08, spin=40),
    _a("s1_upright4", "Upright Spin Lv4 (USp4)", Phase.SPIN1, 2.4, 7, 0.10, spin=60),
    _a("s2_sit", "Sit Spin (SSp)", Phase.SPIN2, 1.1, 5, 0.02),
    _a("s2_sit2", "Sit Spin Lv2 (SSp2)", Phase.SPIN2, 1.6, 6, 0.05, spin=25),
    _a("s2_sit3", "Sit Spin Lv3 (SSp3)", Phase.SPIN2, 2.1, 7, 0.08, spin=45),
    _a("s2_sit4", "Sit Spin Lv4 (SSp4)", Phase.SPIN2, 2.5, 8, 0.10, spin=65),
    _a("s3_camel", "Camel Spin (CSp)", Phase.SPIN3, 1.1, 5, 0.02),
    _a("s3_camel2", "Camel Spin Lv2 (CSp2)", Phase.SPIN3, 1.8, 6, 0.05, spin=25),
    _a("s3_camel3", "Camel Spin Lv3 (CSp3)", Phase.SPIN3, 2.3, 7, 0.08, spin=50),
    _a("s3_camel4", "Camel Spin Lv4 (CSp4)", Phase.SPIN3, 2.6, 8, 0.10, spin=70),
    _a("s3_combo", "Change Combination Spin (CoSp)", Phase.SPIN3, 1.5, 6, 0.05, spin=30),
    _a("s3_combo4", "Change Combination Spin Lv4 (CoSp4)", Phase.SPIN3, 3.5, 10, 0.15, spin=80),
    _a("s3_fly", "Flying Camel Spin Lv4 (FCSp4)", Phase.SPIN3, 3.2, 9, 0.12, spin=75, jump=40),
    # Step sequences
    _a("st_base", "Step Sequence Lv1 (StSq1)", Phase.STEP, 1.8, 8, 0.05),
    _a("st_mid", "Step Sequence Lv2 (StSq2)", Phase.STEP, 2.6, 12, 0.10, step=35),
    _a("st_high", "Step Sequence Lv3 (StSq3)", Phase.STEP, 3.3, 16, 0.15, step=60),
    _a("st_pro", "Step Sequence Lv4 (StSq4)", Phase.STEP, 3.9, 20, 0.20, step=85),
)

MATCH_TEMPLATES: Dict[str, MatchTemplate] = {
    "low": MatchTemplate(
        "low",
        "Regional format",
        (Phase.JUMP_SOLO, Phase.JUMP_COMBO, Phase.JUMP_AXEL, Phase.SPIN1, Phase.SPIN2, Phase.STEP),
    ),
    "mid": MatchTemplate("mid", "Standard format", tuple(Phase)),
    "high": MatchTemplate("high", "Championship format", tuple(Phase)),
}

DEFAULT_TEMPLATE = "low"


def get_template(template_id: str) -> MatchTemplate:
    """Return the template ``template_id`` falling back to the regional one."""

    template = MATCH_TEMPLATES.get(template_id)
    if template is None:
        logger.warning("Unknown match template %r; using %r", template_id, DEFAULT_TEMPLATE)
        template = MATCH_TEMPLATES[DEFAULT_TEMPLATE]
    return template


def validate_catalog(actions: Iterable[Action]) -> None:
    """Raise :class:`CatalogConfigError` unless every phase has a free action."""

    failures: List[str] = []
    actions = list(actions)
    seen: set[str] = set()
    for action in actions:
        if action.action_id in seen:
            failures.append(f"Duplicate action id {action.action_id}.")
        seen.add(action.action_id)
    for phase in Phase:
        if not any(a.phase is phase and not a.prerequisites for a in actions):
            failures.append(f"Phase {phase.value} has no zero-prerequisite action.")
    if failures:
        raise CatalogConfigError(failures)


class ActionCatalog:
    """Indexed view over a validated sequence of actions."""

    def __init__(self, actions: Sequence[Action] = ACTION_LIBRARY) -> None:
        validate_catalog(actions)
        self.actions: Tuple[Action, ...] = tuple(actions)
        self._by_id = {a.action_id: a for a in self.actions}
        self._by_phase: Dict[Phase, Tuple[Action, ...]] = {
            phase: tuple(a for a in self.actions if a.phase is phase) for phase in Phase
        }

    def __len__(self) -> int:
        return len(self.actions)

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._by_id

    def get(self, action_id: str) -> Action:
        try:
            return self._by_id[action_id]
        except KeyError:
            raise KeyError(f"Unknown action '{action_id}'") from None

    def for_phase(self, phase: Phase) -> Tuple[Action, ...]:
        return self._by_phase[Phase(phase)]

    def eligible(self, phase: Phase, attributes: Attributes) -> List[Action]:
        """Actions of ``phase`` whose prerequisites ``attributes`` satisfy."""

        return [a for a in self.for_phase(phase) if a.available_to(attributes)]

    def fallback(self, phase: Phase) -> Action:
        """The lowest-prerequisite action of ``phase`` (first in catalog order)."""

        return min(self.for_phase(phase), key=lambda a: a.prerequisite_total)

    def best_available(self, phase: Phase, attributes: Attributes) -> Action:
        """Highest base value action ``attributes`` can perform, ignoring risk."""

        candidates = self.eligible(phase, attributes)
        if not candidates:
            logger.warning("No eligible %s action; using catalog fallback", Phase(phase).value)
            return self.fallback(phase)
        return max(candidates, key=lambda a: a.base_value)


DEFAULT_CATALOG = ActionCatalog()


__all__ = [
    "Phase",
    "JUMP_PHASES",
    "PHASE_RELEVANT",
    "Action",
    "MatchTemplate",
    "ACTION_LIBRARY",
    "MATCH_TEMPLATES",
    "DEFAULT_TEMPLATE",
    "get_template",
    "validate_catalog",
    "ActionCatalog",
    "DEFAULT_CATALOG",
]
