"""Figure skating career simulation engine.

The engine models a field of competitors who train, age, retire and compete
in a monthly season calendar.  One competitor is controlled by the user;
the rest are simulated.  Every random draw goes through an explicit
``random.Random`` so runs are reproducible from a seed.
"""

from .config import EngineConfig, load_config  # noqa: F401
from .probability import (  # noqa: F401
    make_rng,
    clamp,
    clamp01,
    roll,
    weighted_choice,
    jitter,
)
from .ratings import derive, apply_bonuses  # noqa: F401
from .actions import (  # noqa: F401
    Phase,
    Action,
    ActionCatalog,
    MatchTemplate,
    MATCH_TEMPLATES,
    DEFAULT_CATALOG,
    get_template,
    validate_catalog,
)
from .scoring import ElementScore, score_action, fail_probability  # noqa: F401
from .training import CoachModifiers, TrainingResult, weekly_update, apply_training  # noqa: F401
from .program_planner import (  # noqa: F401
    Strategy,
    ProgramConfiguration,
    generate,
    override,
    reorder,
)
from .match_simulator import simulate  # noqa: F401
from .ranking import rolling, event_points, standings  # noqa: F401
from .population import PopulationManager, generate_initial_population  # noqa: F401
from .calendar import Event, build_season_calendar, events_from_records  # noqa: F401
from .season_scheduler import EventResult, SeasonScheduler  # noqa: F401
from .interactive import ProgramSession, execute_element  # noqa: F401
from .career import CareerEngine, MonthReport  # noqa: F401

__all__ = [
    "EngineConfig",
    "load_config",
    "make_rng",
    "clamp",
    "clamp01",
    "roll",
    "weighted_choice",
    "jitter",
    "derive",
    "apply_bonuses",
    "Phase",
    "Action",
    "ActionCatalog",
    "MatchTemplate",
    "MATCH_TEMPLATES",
    "DEFAULT_CATALOG",
    "get_template",
    "validate_catalog",
    "ElementScore",
    "score_action",
    "fail_probability",
    "CoachModifiers",
    "TrainingResult",
    "weekly_update",
    "apply_training",
    "Strategy",
    "ProgramConfiguration",
    "generate",
    "override",
    "reorder",
    "simulate",
    "rolling",
    "event_points",
    "standings",
    "PopulationManager",
    "generate_initial_population",
    "Event",
    "build_season_calendar",
    "events_from_records",
    "EventResult",
    "SeasonScheduler",
    "ProgramSession",
    "execute_element",
    "CareerEngine",
    "MonthReport",
]
