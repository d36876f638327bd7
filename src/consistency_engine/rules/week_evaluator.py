"""Count completed workouts for one (participant, week) and judge the week.

The required count is always supplied by the caller: the evaluator has no
notion of which tier a past week was played at.
"""

from __future__ import annotations

from typing import Iterable

from consistency_engine.models.enums import (
    HARDEST_TIER,
    MAX_STEP_WORKOUTS_PER_WEEK,
    STEP_WORKOUT_TYPES,
    StepPolicy,
    Tier,
)
from consistency_engine.models.participant import WorkoutRecord


def is_step_workout(record: WorkoutRecord) -> bool:
    """True if the record's workout type is a step-based workout."""
    if record.workout_type is None:
        return False
    return record.workout_type.strip().lower() in STEP_WORKOUT_TYPES


def count_completed(
    history: Iterable[WorkoutRecord],
    participant_id: str,
    week: int,
    tier: Tier | None = None,
    step_policy: StepPolicy = StepPolicy.UNRESTRICTED,
) -> int:
    """Count completed workout records for a participant in one week.

    Under StepPolicy.CAPPED, step workouts count at most
    MAX_STEP_WORKOUTS_PER_WEEK times and only while *tier* is the hardest
    tier. Under the default policy every completed record counts.

    Args:
        history: Workout records in any order, possibly for many participants.
        participant_id: Whose workouts to count.
        week: 1-indexed challenge week.
        tier: Tier active during the week (only used by CAPPED).
        step_policy: How step workouts are credited.

    Returns:
        Number of credited completed workouts (0 when there are none).
    """
    completed = 0
    step_credits = 0
    for record in history:
        if record.participant_id != participant_id or record.week != week:
            continue
        if not record.completed:
            continue
        if step_policy == StepPolicy.CAPPED and is_step_workout(record):
            if tier != HARDEST_TIER or step_credits >= MAX_STEP_WORKOUTS_PER_WEEK:
                continue
            step_credits += 1
        completed += 1
    return completed


def evaluate_week(
    participant_id: str,
    week: int,
    required: int,
    history: Iterable[WorkoutRecord],
    tier: Tier | None = None,
    step_policy: StepPolicy = StepPolicy.UNRESTRICTED,
) -> tuple[int, bool]:
    """Return (completed_count, clean) for one week against *required*.

    Extra workouts beyond *required* make the week clean but earn nothing more.
    """
    completed = count_completed(history, participant_id, week, tier, step_policy)
    return completed, completed >= required
