import random

import pytest

from models.competitor import Attributes, Competitor


def pytest_sessionstart(session):
    """Reseed the global RNG so no test can depend on its state."""
    random.seed()


class FixedRandom:
    """Stand-in generator returning the same draw every time."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value

    def gauss(self, mu: float, sigma: float) -> float:
        return mu


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def make_competitor():
    def _make(
        competitor_id: str = "c1",
        age: float = 20.0,
        points_current: int = 0,
        points_last: int = 0,
        attributes: dict | None = None,
        technical: float = 50.0,
        artistic: float = 50.0,
        **kwargs,
    ) -> Competitor:
        return Competitor(
            competitor_id=competitor_id,
            name=f"Skater {competitor_id}",
            age=age,
            technical=technical,
            artistic=artistic,
            attributes=Attributes.from_dict(attributes) if attributes is not None else None,
            points_current=points_current,
            points_last=points_last,
            **kwargs,
        )

    return _make
