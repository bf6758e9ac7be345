"""Configuration loader for the career simulation engine.

All tuning values used by the engine live in :data:`_DEFAULTS`.  An optional
JSON file may override individual entries without touching the code; by
default ``data/engine_overrides.json`` relative to the project root is read
when present.  Overrides are flat ``{"key": value}`` objects and every key
must already exist in the defaults table.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_DEFAULTS: Dict[str, Any] = {
    # Population ----------------------------------------------------
    "rosterSize": 150,
    "eliteSlots": 15,
    "proSlots": 50,
    "eliteBase": 80.0,
    "proBase": 60.0,
    "rookieBase": 35.0,
    "initialAgeMin": 15.0,
    "initialAgeMax": 27.0,
    "initialCompositeSpread": 5.0,
    "youthGrowthAge": 23.0,
    "youthGrowthPerMonth": 0.15,
    "veteranGrowthPerMonth": 0.05,
    "forcedRetirementAge": 33.0,
    "retirementRiskAge": 28.0,
    "retirementChance": 0.05,
    "replacementAgeMin": 14.0,
    "replacementAgeMax": 16.0,
    "replacementAttrMin": 35.0,
    "replacementAttrMax": 55.0,
    # Ranking -------------------------------------------------------
    "priorSeasonWeight": 0.7,
    "openTierExclusion": 50,
    "pointsRankSlope": 0.4,
    "pointsRankOffset": 0.6,
    "majorPointPool": 2500,
    # Scoring -------------------------------------------------------
    "costEnduranceDivisor": 250.0,
    "failSkillWeight": 0.6,
    "failFloor": 2.0,
    "failCeiling": 90.0,
    "simulatedFailMultiplier": 0.4,
    "fatigueMildStamina": 30.0,
    "fatigueSevereStamina": 15.0,
    "fatigueMildFactor": 0.85,
    "fatigueSevereFactor": 0.6,
    "gradeSkillPivot": 40.0,
    "gradeSkillDivisor": 12.0,
    "gradeFatigueWeight": 8.0,
    "gradeNoiseRange": 1.5,
    "gradeMin": -4.0,
    "gradeMax": 5.0,
    "failGrade": -5.0,
    "gradeStep": 0.10,
    "presenceBonus": 0.03,
    "judgingVariance": 0.05,
    # Training ------------------------------------------------------
    "youthAge": 18.0,
    "primeAge": 23.0,
    "youthTrainingMult": 1.3,
    "primeTrainingMult": 1.0,
    "veteranTrainingMult": 0.6,
    "trainingEfficiencyDivisor": 500.0,
    "trainingEfficiencyCap": 1.2,
    "lowStaminaThreshold": 20.0,
    "lowStaminaEfficiency": 0.3,
    "trainingGainSpread": 0.1,
    "trainingGainCap": 3.0,
    # Planning ------------------------------------------------------
    "conservativeRiskCap": 0.25,
    "balancedRiskCap": 0.40,
    "balancedRiskPenalty": 2.0,
    # User competition ----------------------------------------------
    "matchStaminaFee": 20.0,
    "matchStaminaFeeFloor": 5.0,
    "matchFeeEnduranceDivisor": 200.0,
    # Monthly flow --------------------------------------------------
    "incidentChance": 0.2,
    "historyLength": 36,
    "olympicBaseYear": 2026,
}

_OVERRIDE_PATH = Path(__file__).resolve().parents[1] / "data" / "engine_overrides.json"


class EngineConfig:
    """Attribute style access to engine tuning values.

    Values supplied at construction take precedence; anything else resolves
    through :data:`_DEFAULTS`.  Accessing an unknown key raises
    :class:`AttributeError` so typos surface immediately.
    """

    def __init__(self, values: Dict[str, Any] | None = None) -> None:
        values = dict(values or {})
        unknown = set(values) - set(_DEFAULTS)
        if unknown:
            unknown_list = ", ".join(sorted(unknown))
            raise KeyError(f"Unknown engine config keys: {unknown_list}")
        object.__setattr__(self, "values", values)

    def __getattr__(self, item: str) -> Any:
        values = object.__getattribute__(self, "values")
        if item in values:
            return values[item]
        if item in _DEFAULTS:
            return _DEFAULTS[item]
        raise AttributeError(item)

    def __setattr__(self, key: str, value: Any) -> None:
        if key not in _DEFAULTS:
            raise KeyError(f"Unknown engine config key '{key}'")
        self.values[key] = value

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return ``key`` or ``default`` when the key is unknown."""

        try:
            return getattr(self, key)
        except AttributeError:
            return default

    def as_dict(self) -> Dict[str, Any]:
        merged = dict(_DEFAULTS)
        merged.update(self.values)
        return merged

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create an instance from a flat ``data`` mapping of overrides."""

        return cls(data)


def load_config(overrides_path: str | Path | None = None) -> EngineConfig:
    """Load the engine configuration with optional JSON overrides.

    Relative paths are resolved against the project root so the loader works
    regardless of the current working directory.
    """

    if overrides_path is None:
        path = _OVERRIDE_PATH
    else:
        path = Path(overrides_path)
        if not path.is_absolute():
            path = _OVERRIDE_PATH.parents[1] / path

    if not path.exists():
        return EngineConfig()

    try:
        with path.open("r", encoding="utf-8") as fh:
            overrides = json.load(fh)
    except (OSError, json.JSONDecodeError):
        logger.warning("Ignoring unreadable engine overrides at %s", path)
        return EngineConfig()

    if not isinstance(overrides, dict):
        logger.warning("Engine overrides at %s are not a JSON object", path)
        return EngineConfig()
    return EngineConfig.from_dict(overrides)


DEFAULT_CONFIG = EngineConfig()


def resolve(cfg: EngineConfig | None) -> EngineConfig:
    """Return ``cfg`` or the shared default configuration."""

    return cfg if cfg is not None else DEFAULT_CONFIG


__all__ = ["EngineConfig", "load_config", "resolve", "DEFAULT_CONFIG"]
