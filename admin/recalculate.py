"""Admin CLI — recalculate standings, reactivate participants, log workouts.

Usage:
    python -m admin.recalculate all                   # recalculate every active participant
    python -m admin.recalculate reactivate <id>       # reverse an elimination
    python -m admin.recalculate toggle <id> <week> <day> [--undo] [--type steps]
    python -m admin.recalculate leaderboard
    python -m admin.recalculate --week 6 all          # override the resolved current week
"""

from __future__ import annotations

import argparse
import logging
import sys

from challenge_store import ChallengeService, ChallengeStoreError, JsonChallengeStore
from consistency_engine.engine import ConsistencyEngine
from consistency_engine.math.adherence import leaderboard
from consistency_engine.math.calendar import ChallengeCalendar

from admin.config import (
    CHALLENGE_DATA_PATH,
    CHALLENGE_END_DATE,
    CHALLENGE_START_DATE,
    CHALLENGE_TZ_OFFSET_MINUTES,
    STEP_POLICY,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_service(week: int | None = None) -> ChallengeService:
    """Wire the JSON store, engine and week resolver from configuration."""
    store = JsonChallengeStore(CHALLENGE_DATA_PATH)
    calendar = ChallengeCalendar(
        start_date=CHALLENGE_START_DATE,
        end_date=CHALLENGE_END_DATE,
        tz_offset_minutes=CHALLENGE_TZ_OFFSET_MINUTES,
    )
    resolver = (lambda: week) if week is not None else calendar.current_week
    return ChallengeService(store, ConsistencyEngine(STEP_POLICY), resolver)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fitness challenge admin tools")
    parser.add_argument("--week", type=int, default=None, help="Override the current week")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("all", help="Recalculate every active participant")

    reactivate = sub.add_parser("reactivate", help="Reactivate an eliminated participant")
    reactivate.add_argument("participant_id")

    toggle = sub.add_parser("toggle", help="Mark a workout day done (or undone)")
    toggle.add_argument("participant_id")
    toggle.add_argument("week", type=int)
    toggle.add_argument("day", type=int)
    toggle.add_argument("--undo", action="store_true", help="Mark as not completed")
    toggle.add_argument("--type", dest="workout_type", default=None)

    sub.add_parser("leaderboard", help="Print the current leaderboard")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    service = build_service(args.week)

    try:
        if args.command == "all":
            report = service.recalculate_all()
            logger.info(
                "Recalculated %d participants, %d changed", report.evaluated, len(report.mutations)
            )
            if report.has_failures:
                return 1
        elif args.command == "reactivate":
            participant = service.reactivate(args.participant_id)
            logger.info(
                "%s is %s at tier %d",
                participant.name,
                "active" if participant.active else "still eliminated",
                participant.tier,
            )
        elif args.command == "toggle":
            service.toggle_workout(
                args.participant_id,
                args.week,
                args.day,
                completed=not args.undo,
                workout_type=args.workout_type,
                marked_by="admin",
            )
        elif args.command == "leaderboard":
            board = leaderboard(service.store.list_participants())
            print(board.to_string(index=False))
    except ChallengeStoreError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
