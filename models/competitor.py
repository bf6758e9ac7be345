from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import ClassVar, Dict, List, Optional

ATTRIBUTE_NAMES = ("jump", "spin", "step", "presence", "endurance")


def _bounded(value: float) -> float:
    return 100.0 if value > 100 else 0.0 if value < 0 else float(value)


@dataclass
class Attributes:
    """The five trainable skill scalars, each held on a ``0-100`` scale."""

    jump: float = 0.0
    spin: float = 0.0
    step: float = 0.0
    presence: float = 0.0
    endurance: float = 0.0

    def __setattr__(self, name: str, value) -> None:
        if name in ATTRIBUTE_NAMES and isinstance(value, (int, float)):
            value = _bounded(value)
        super().__setattr__(name, value)

    def get(self, name: str) -> float:
        return getattr(self, name)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def copy(self) -> "Attributes":
        return replace(self)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "Attributes":
        return cls(**{name: data.get(name, 0.0) for name in ATTRIBUTE_NAMES})


@dataclass(frozen=True)
class HonorRecord:
    year: int
    month: int
    event_name: str
    rank: int
    points: int


@dataclass
class Competitor:
    competitor_id: str
    name: str
    age: float
    technical: float = 0.0
    artistic: float = 0.0
    stamina: float = 100.0
    attributes: Optional[Attributes] = None  # simulated rivals may carry composites only
    points_current: int = 0
    points_last: int = 0
    injury_months: int = 0
    is_user_controlled: bool = False
    retired: bool = False
    honors: List[HonorRecord] = field(default_factory=list)

    _rating_fields: ClassVar[set[str]] = {"technical", "artistic", "stamina"}

    def __setattr__(self, name: str, value) -> None:
        rating_fields = getattr(type(self), "_rating_fields", set())
        if name in rating_fields and isinstance(value, (int, float)):
            value = _bounded(value)
        elif name == "injury_months" and isinstance(value, int):
            value = max(0, value)
        super().__setattr__(name, value)

    @property
    def rolling_score(self) -> int:
        """Rolling score under the default prior-season weight.

        Engines running with overrides rank through
        ``rinksim.ranking.rolling(competitor, cfg)`` instead.
        """

        from rinksim.ranking import rolling

        return rolling(self)

    @property
    def injured(self) -> bool:
        return self.injury_months > 0

    def copy(self) -> "Competitor":
        """Return a detached copy safe to hand to callers outside the engine."""

        return replace(
            self,
            attributes=self.attributes.copy() if self.attributes is not None else None,
            honors=list(self.honors),
        )


__all__ = ["ATTRIBUTE_NAMES", "Attributes", "HonorRecord", "Competitor"]
