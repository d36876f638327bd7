"""Interfaces the engine reads its inputs from and writes its results to."""

from __future__ import annotations

from typing import Protocol, Sequence

from consistency_engine.models.participant import WorkoutRecord
from consistency_engine.models.snapshot import ParticipantSnapshot


class WorkoutHistorySource(Protocol):
    """Supplies every workout record of a participant up to a week bound.

    No ordering guarantee is required.
    """

    def workouts_for(self, participant_id: str, up_to_week: int) -> Sequence[WorkoutRecord]:
        ...


class GoalSource(Protocol):
    def completed_goal_count(self, participant_id: str) -> int:
        ...


class SnapshotSink(Protocol):
    """Persists a snapshot as one atomic whole-record replace."""

    def write_snapshot(self, snapshot: ParticipantSnapshot) -> None:
        ...
