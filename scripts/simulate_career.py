#!/usr/bin/env python3

"""Simulate a skating career month by month and report the standings.

Run with ``--auto-enter`` to let the user competitor enter the richest event
it qualifies for each month using the chosen planning strategy.
"""

from __future__ import annotations

from pathlib import Path
import argparse
import logging
import sys

import pandas as pd
from tqdm import tqdm

# Ensure project root is on the path when running this script directly
sys.path.append(str(Path(__file__).resolve().parent.parent))

from rinksim.career import CareerEngine
from rinksim.config import load_config
from rinksim.program_planner import Strategy
from rinksim.ranking import rolling
from rinksim.training import TRAINING_TASKS
from utils.exceptions import EventEntryError

logger = logging.getLogger(__name__)


def try_enter(engine: CareerEngine, strategy: Strategy) -> None:
    """Enter and complete the richest event the user can enter this month."""

    for event in sorted(engine.current_events(), key=lambda e: e.point_pool, reverse=True):
        try:
            entry = engine.enter_event(event.name, strategy)
        except EventEntryError as exc:
            logger.debug("%s", exc)
            continue
        entry.session.run_to_end(engine.rng)
        engine.finalize_entry(entry)
        return


def leaderboard_frame(engine: CareerEngine, top: int | None = None) -> pd.DataFrame:
    rows = [
        {
            "rank": index + 1,
            "id": c.competitor_id,
            "name": c.name,
            "age": round(c.age, 1),
            "technical": round(c.technical, 1),
            "artistic": round(c.artistic, 1),
            "points_current": c.points_current,
            "points_last": c.points_last,
            "rolling": rolling(c, engine.cfg),
            "honors": len(c.honors),
            "user": c.is_user_controlled,
        }
        for index, c in enumerate(engine.leaderboard(top))
    ]
    return pd.DataFrame(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--months", type=int, default=24, help="number of months to simulate")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible runs")
    parser.add_argument("--name", default="Skater", help="display name of the user competitor")
    parser.add_argument(
        "--schedule",
        nargs="*",
        default=["jump", "spin", "rest", "step", "presence", "endurance", "rest"],
        choices=sorted(TRAINING_TASKS),
        help="weekly training tasks (padded with rest to seven slots)",
    )
    parser.add_argument(
        "--strategy",
        default=Strategy.BALANCED.value,
        choices=[s.value for s in Strategy if s is not Strategy.CUSTOM],
        help="program planning strategy for the user's routines",
    )
    parser.add_argument("--auto-enter", action="store_true", help="enter the user into events")
    parser.add_argument(
        "--overrides",
        type=Path,
        default=None,
        help="engine overrides JSON (default: data/engine_overrides.json)",
    )
    parser.add_argument("--export", type=Path, default=None, help="write the final leaderboard to CSV")
    parser.add_argument("--top", type=int, default=10, help="leaderboard rows to print")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    engine = CareerEngine(args.name, seed=args.seed, cfg=load_config(args.overrides))
    engine.set_schedule(args.schedule)
    strategy = Strategy(args.strategy)

    retirements = 0
    for _ in tqdm(range(max(args.months, 0)), desc="Months", unit="month"):
        if args.auto_enter:
            try_enter(engine, strategy)
        report = engine.advance_month()
        retirements += len(report.retirements)

    user = engine.user
    print(f"Finished in {engine.month:02d}/{engine.year}; {retirements} retirements")
    print(
        f"{user.name}: age {user.age:.1f}, technical {user.technical:.1f}, "
        f"artistic {user.artistic:.1f}, rolling {rolling(user, engine.cfg)}, "
        f"honors {len(user.honors)}"
    )
    print(leaderboard_frame(engine, max(args.top, 0)).to_string(index=False))

    if args.export:
        args.export.parent.mkdir(parents=True, exist_ok=True)
        leaderboard_frame(engine).to_csv(args.export, index=False)
        print(f"Wrote leaderboard to {args.export}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
