"""Population lifecycle: aging, growth and retirement.

Every monthly tick each competitor ages by one month, works off injury
cooldown and grows a little.  Simulated rivals past the retirement ages
leave the sport and their roster slot is overwritten with a fresh junior,
keeping the population size constant.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from models.competitor import ATTRIBUTE_NAMES, Attributes, Competitor
from models.roster import Roster
from utils.name_generator import generate_name

from .config import EngineConfig, resolve
from .probability import clamp, jitter, roll
from .ratings import derive

logger = logging.getLogger(__name__)

MONTH = 1.0 / 12.0

USER_START_ATTRIBUTES = {"jump": 40, "spin": 40, "step": 40, "presence": 30, "endurance": 30}


@dataclass(frozen=True)
class Retirement:
    slot: int
    retired: Competitor
    replacement: Competitor


def _initial_points(slot: int, rng: random.Random, cfg: EngineConfig) -> int:
    if slot < cfg.eliteSlots:
        points = 5500 - slot * 133 + (rng.random() - 0.5) * 300
    elif slot < cfg.proSlots:
        points = 3500 - (slot - cfg.eliteSlots) * 57 + (rng.random() - 0.5) * 200
    else:
        points = 1500 - (slot - cfg.proSlots) * 13 + (rng.random() - 0.5) * 150
    return max(0, math.floor(points))


def _tier_base(slot: int, cfg: EngineConfig) -> float:
    if slot < cfg.eliteSlots:
        return cfg.eliteBase
    if slot < cfg.proSlots:
        return cfg.proBase
    return cfg.rookieBase


def generate_initial_population(
    rng: random.Random,
    size: int | None = None,
    cfg: EngineConfig | None = None,
) -> List[Competitor]:
    """Create the starting field of simulated rivals.

    Early slots form an elite tier with large prior-season point totals,
    followed by a professional tier and a long tail of rookies.  Rivals only
    carry composite scores.
    """

    cfg = resolve(cfg)
    size = cfg.rosterSize if size is None else size
    spread = cfg.initialCompositeSpread
    field_: List[Competitor] = []
    for slot in range(size):
        base = _tier_base(slot, cfg)
        field_.append(
            Competitor(
                competitor_id=f"ai_{slot:03d}",
                name=generate_name(rng),
                age=cfg.initialAgeMin + rng.random() * (cfg.initialAgeMax - cfg.initialAgeMin),
                technical=clamp(base + jitter(rng, 0.0, spread)),
                artistic=clamp(base + jitter(rng, 0.0, spread)),
                points_last=_initial_points(slot, rng, cfg),
            )
        )
    return field_


def create_user_competitor(name: str, competitor_id: str = "user") -> Competitor:
    attributes = Attributes.from_dict(USER_START_ATTRIBUTES)
    technical, artistic = derive(attributes)
    return Competitor(
        competitor_id=competitor_id,
        name=name,
        age=14.1,
        technical=technical,
        artistic=artistic,
        stamina=100.0,
        attributes=attributes,
        is_user_controlled=True,
    )


def generate_replacement(rng: random.Random, serial: int, cfg: EngineConfig | None = None) -> Competitor:
    """Return a fresh junior with attributes seeded inside the configured band."""

    cfg = resolve(cfg)
    low, high = cfg.replacementAttrMin, cfg.replacementAttrMax
    attributes = Attributes(**{name: low + rng.random() * (high - low) for name in ATTRIBUTE_NAMES})
    technical, artistic = derive(attributes)
    return Competitor(
        competitor_id=f"ai_g{serial:05d}",
        name=generate_name(rng),
        age=cfg.replacementAgeMin + rng.random() * (cfg.replacementAgeMax - cfg.replacementAgeMin),
        technical=technical,
        artistic=artistic,
        attributes=attributes,
    )


def grow(competitor: Competitor, cfg: EngineConfig | None = None) -> None:
    """Apply one month of passive growth."""

    cfg = resolve(cfg)
    amount = cfg.youthGrowthPerMonth if competitor.age < cfg.youthGrowthAge else cfg.veteranGrowthPerMonth
    if competitor.attributes is None:
        competitor.technical += amount
        competitor.artistic += amount
        return
    for name in ATTRIBUTE_NAMES:
        setattr(competitor.attributes, name, competitor.attributes.get(name) + amount)
    competitor.technical, competitor.artistic = derive(competitor.attributes)


def should_retire(competitor: Competitor, rng: random.Random, cfg: EngineConfig | None = None) -> bool:
    cfg = resolve(cfg)
    if competitor.age > cfg.forcedRetirementAge:
        return True
    return competitor.age > cfg.retirementRiskAge and roll(rng, cfg.retirementChance)


class PopulationManager:
    """Ages, grows and retires competitors on a :class:`Roster`."""

    def __init__(
        self,
        cfg: EngineConfig | None = None,
        generator: Callable[[random.Random, int, EngineConfig], Competitor] | None = None,
    ) -> None:
        self.cfg = resolve(cfg)
        self.generator = generator or generate_replacement
        self.serial = 0

    def age_one(self, competitor: Competitor) -> None:
        competitor.age += MONTH
        if competitor.injury_months > 0:
            competitor.injury_months -= 1
        grow(competitor, self.cfg)

    def _replace(self, roster: Roster, slot: int, rng: random.Random) -> Optional[Retirement]:
        current = roster.slots[slot]
        try:
            replacement = self.generator(rng, self.serial, self.cfg)
            while replacement.competitor_id in roster:
                self.serial += 1
                replacement = self.generator(rng, self.serial, self.cfg)
        except Exception:
            logger.exception(
                "Could not generate a replacement for %s; retrying next month", current.competitor_id
            )
            return None
        self.serial += 1
        previous = roster.replace_slot(slot, replacement)
        previous.retired = True
        logger.info(
            "%s retired at %.1f; slot %d now held by %s",
            previous.name,
            previous.age,
            slot,
            replacement.name,
        )
        return Retirement(slot, previous, replacement)

    def tick(self, roster: Roster, rng: random.Random) -> List[Retirement]:
        """Advance every competitor by one month in slot order."""

        retirements: List[Retirement] = []
        for slot in range(len(roster)):
            competitor = roster.slots[slot]
            self.age_one(competitor)
            if competitor.is_user_controlled or competitor.retired:
                continue
            if should_retire(competitor, rng, self.cfg):
                retirement = self._replace(roster, slot, rng)
                if retirement is not None:
                    retirements.append(retirement)
        return retirements


__all__ = [
    "MONTH",
    "USER_START_ATTRIBUTES",
    "Retirement",
    "generate_initial_population",
    "create_user_competitor",
    "generate_replacement",
    "grow",
    "should_retire",
    "PopulationManager",
]
