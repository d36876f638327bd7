"""ConsistencyEngine — runs the progression replay for every active participant."""

from __future__ import annotations

import logging
from typing import Iterable

from consistency_engine.models.enums import StepPolicy
from consistency_engine.models.participant import Participant, WorkoutRecord
from consistency_engine.models.snapshot import (
    ParticipantFailure,
    ParticipantSnapshot,
    RecalculationReport,
)
from consistency_engine.rules.elimination import track_elimination
from consistency_engine.rules.points import total_points
from consistency_engine.rules.progression import simulate_progression
from consistency_engine.sources import GoalSource, SnapshotSink, WorkoutHistorySource

logger = logging.getLogger(__name__)


class ConsistencyEngine:
    """Derives participant snapshots from raw workout history.

    Every call re-derives everything from full history; the engine holds
    no state besides its step policy.

    Usage:
        engine = ConsistencyEngine()
        snapshot = engine.evaluate(participant, history, current_week=5, completed_goals=2)
        report = engine.recalculate(participants, store, store, current_week=5)
    """

    def __init__(self, step_policy: StepPolicy = StepPolicy.UNRESTRICTED) -> None:
        self.step_policy = step_policy

    def evaluate(
        self,
        participant: Participant,
        history: Iterable[WorkoutRecord],
        current_week: int,
        completed_goals: int,
    ) -> ParticipantSnapshot:
        """Run progression → elimination → points for one participant.

        Args:
            participant: Participant record (ceiling and checkpoint are read).
            history: The participant's workout records, any order.
            current_week: 1-indexed in-progress week (0 = not started).
            completed_goals: Number of goals the participant has completed.

        Returns:
            The snapshot the participant should now hold.
        """
        progression = simulate_progression(
            participant, history, current_week, step_policy=self.step_policy
        )
        verdict = track_elimination(participant, progression)

        return ParticipantSnapshot(
            participant_id=participant.participant_id,
            tier=progression.tier,
            clean_weeks=progression.clean_weeks,
            missed_weeks=progression.missed_weeks,
            total_points=total_points(progression.clean_weeks, completed_goals),
            active=not verdict.eliminated,
        )

    def recalculate(
        self,
        participants: Iterable[Participant],
        history_source: WorkoutHistorySource,
        goal_source: GoalSource,
        current_week: int,
    ) -> RecalculationReport:
        """Evaluate every active participant and collect changed snapshots.

        A mutation is emitted only when the derived snapshot differs from
        the persisted one. A failure for one participant is logged and
        reported; the batch carries on with the rest.

        Args:
            participants: All participants; inactive ones are skipped.
            history_source: Where workout records are read from.
            goal_source: Where completed-goal counts are read from.
            current_week: 1-indexed in-progress week.

        Returns:
            RecalculationReport with mutations and per-participant failures.
        """
        mutations: list[ParticipantSnapshot] = []
        failures: list[ParticipantFailure] = []
        evaluated = 0

        for participant in participants:
            if not participant.active:
                continue
            evaluated += 1
            try:
                history = history_source.workouts_for(
                    participant.participant_id, max(current_week - 1, 0)
                )
                completed_goals = goal_source.completed_goal_count(participant.participant_id)
                snapshot = self.evaluate(participant, history, current_week, completed_goals)
            except Exception as exc:
                logger.exception("Recalculation failed for %s", participant.participant_id)
                failures.append(
                    ParticipantFailure(participant_id=participant.participant_id, error=str(exc))
                )
                continue

            if snapshot != participant.snapshot:
                logger.info(
                    "Snapshot changed for %s: tier %d→%d, clean %d→%d, missed %d→%d, "
                    "points %d→%d, active %s→%s",
                    participant.participant_id,
                    participant.tier,
                    snapshot.tier,
                    participant.clean_weeks,
                    snapshot.clean_weeks,
                    participant.missed_weeks,
                    snapshot.missed_weeks,
                    participant.total_points,
                    snapshot.total_points,
                    participant.active,
                    snapshot.active,
                )
                mutations.append(snapshot)

        return RecalculationReport(
            mutations=tuple(mutations),
            failures=tuple(failures),
            evaluated=evaluated,
        )

    @staticmethod
    def apply(report: RecalculationReport, sink: SnapshotSink) -> RecalculationReport:
        """Write every mutation of *report* to *sink*.

        A write that raises is logged and recorded as a failure for that
        participant; the remaining mutations are still written.

        Returns:
            RecalculationReport holding only the snapshots actually written,
            with write failures appended to the evaluation failures.
        """
        written: list[ParticipantSnapshot] = []
        failures = list(report.failures)
        for snapshot in report.mutations:
            try:
                sink.write_snapshot(snapshot)
            except Exception as exc:
                logger.exception("Snapshot write failed for %s", snapshot.participant_id)
                failures.append(
                    ParticipantFailure(participant_id=snapshot.participant_id, error=str(exc))
                )
                continue
            written.append(snapshot)

        return RecalculationReport(
            mutations=tuple(written),
            failures=tuple(failures),
            evaluated=report.evaluated,
        )
