"""ChallengeService — runs a recalculation after every event that can move standings.

Workout toggles, goal completions and admin actions each trigger one
synchronous recalculation. The triggering write and the resulting
snapshot writes land as separate, independently visible writes.
"""

from __future__ import annotations

import logging
from typing import Callable

from consistency_engine.engine import ConsistencyEngine
from consistency_engine.math.calendar import ChallengeCalendar
from consistency_engine.models.participant import Goal, Participant, WorkoutRecord
from consistency_engine.models.snapshot import RecalculationReport

from challenge_store.store import ChallengeStore

logger = logging.getLogger(__name__)


class ChallengeService:
    """Event-driven facade over a ChallengeStore and a ConsistencyEngine.

    Usage:
        service = ChallengeService(store)
        service.toggle_workout("p1", week=2, day=3, completed=True)
        report = service.recalculate_all()
    """

    def __init__(
        self,
        store: ChallengeStore,
        engine: ConsistencyEngine | None = None,
        week_resolver: Callable[[], int] | None = None,
    ) -> None:
        self.store = store
        self.engine = engine or ConsistencyEngine()
        self._week_resolver = week_resolver or ChallengeCalendar().current_week

    @property
    def current_week(self) -> int:
        return self._week_resolver()

    # ------------------------------------------------------------------
    # Event triggers
    # ------------------------------------------------------------------

    def toggle_workout(
        self,
        participant_id: str,
        week: int,
        day: int,
        completed: bool,
        workout_type: str | None = None,
        notes: str | None = None,
        marked_by: str = "user",
    ) -> WorkoutRecord:
        """Record a workout day, then recalculate standings."""
        record = self.store.upsert_workout(
            participant_id, week, day, completed,
            workout_type=workout_type, notes=notes, marked_by=marked_by,
        )
        self.recalculate_all()
        return record

    def set_goal_completed(self, goal_id: str, completed: bool = True) -> Goal:
        """Mark a goal (un)completed, then recalculate standings."""
        goal = self.store.set_goal_completed(goal_id, completed)
        self.recalculate_all()
        return goal

    # ------------------------------------------------------------------
    # Admin actions
    # ------------------------------------------------------------------

    def recalculate_all(self) -> RecalculationReport:
        """Re-run the engine over every active participant and persist changes."""
        week = self.current_week
        report = self.engine.recalculate(
            self.store.list_participants(), self.store, self.store, week
        )
        report = self.engine.apply(report, self.store)
        if report.has_failures:
            logger.warning(
                "Recalculation for week %d: %d updated, %d failed (%s)",
                week,
                len(report.mutations),
                len(report.failures),
                ", ".join(f.participant_id for f in report.failures),
            )
        else:
            logger.info(
                "Recalculation for week %d: %d evaluated, %d updated",
                week, report.evaluated, len(report.mutations),
            )
        return report

    def reactivate(self, participant_id: str) -> Participant:
        """Reverse an elimination: clean slate from the current week on.

        Sets the reactivation checkpoint to the current week, flips the
        participant back to active and recalculates.
        """
        week = max(self.current_week, 1)
        self.store.set_reactivation_checkpoint(participant_id, week)
        logger.info("Reactivated %s from week %d", participant_id, week)
        self.recalculate_all()
        return self.store.get_participant(participant_id)
