"""Data models for the consistency engine."""

from consistency_engine.models.enums import GoalCategory, StepPolicy, Tier
from consistency_engine.models.participant import Goal, Participant, WorkoutRecord
from consistency_engine.models.snapshot import (
    ParticipantFailure,
    ParticipantSnapshot,
    RecalculationReport,
)
from consistency_engine.models.week_status import (
    EliminationVerdict,
    ProgressionResult,
    WeekStatus,
)

__all__ = [
    "EliminationVerdict",
    "Goal",
    "GoalCategory",
    "Participant",
    "ParticipantFailure",
    "ParticipantSnapshot",
    "ProgressionResult",
    "RecalculationReport",
    "StepPolicy",
    "Tier",
    "WeekStatus",
    "WorkoutRecord",
]
