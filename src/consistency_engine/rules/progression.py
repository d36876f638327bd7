"""Chronological tier replay over a participant's full workout history.

The requirement for any past week depends on the tier active at that
point, and that tier depends on every earlier week. The only correct
evaluation is therefore a full forward replay from week 1, re-run from
raw history on every call. Nothing is cached between calls.

Rules:
    - 3 consecutive clean weeks at a tier above 3 → tier − 1, streak reset.
    - Any miss → streak reset; below tier 5 the tier rises by one,
      but never past the participant's ceiling.
    - The ceiling bounds regression only; progression may go below it.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from consistency_engine.models.enums import (
    CLEAN_STREAK_TO_PROGRESS,
    EASIEST_TIER,
    HARDEST_TIER,
    StepPolicy,
    Tier,
)
from consistency_engine.models.participant import Participant, WorkoutRecord
from consistency_engine.models.week_status import ProgressionResult, WeekStatus
from consistency_engine.rules.requirement import required_workouts
from consistency_engine.rules.week_evaluator import evaluate_week


def group_by_week(
    history: Iterable[WorkoutRecord], participant_id: str, up_to_week: int
) -> dict[int, list[WorkoutRecord]]:
    """Bucket a participant's records by week, dropping weeks after *up_to_week*.

    The history source gives no ordering guarantee, so the engine does its
    own grouping.
    """
    by_week: dict[int, list[WorkoutRecord]] = defaultdict(list)
    for record in history:
        if record.participant_id == participant_id and 1 <= record.week <= up_to_week:
            by_week[record.week].append(record)
    return by_week


def next_tier(tier: Tier, clean: bool, streak: int, ceiling: Tier) -> tuple[Tier, int]:
    """Apply one week's outcome to (tier, streak).

    Args:
        tier: Tier active during the week.
        clean: Whether the week met its requirement.
        streak: Consecutive clean weeks before this one.
        ceiling: Least-demanding tier a regression may return to.

    Returns:
        (tier_after, streak_after).
    """
    if clean:
        streak += 1
        if streak >= CLEAN_STREAK_TO_PROGRESS and tier > EASIEST_TIER:
            return Tier(tier - 1), 0
        return tier, streak

    if tier < HARDEST_TIER:
        return Tier(min(tier + 1, ceiling)), 0
    return tier, 0


def simulate_progression(
    participant: Participant,
    history: Iterable[WorkoutRecord],
    current_week: int,
    step_policy: StepPolicy = StepPolicy.UNRESTRICTED,
) -> ProgressionResult:
    """Replay every completed week and derive the participant's current tier.

    Only weeks strictly before *current_week* are evaluated; the current
    week is still in progress.

    Args:
        participant: Participant whose ceiling bounds regression.
        history: Workout records in any order.
        current_week: 1-indexed in-progress week (0 or less = not started).
        step_policy: How step workouts are credited.

    Returns:
        ProgressionResult with final tier, per-week statuses and totals.
    """
    ceiling = participant.ceiling_tier
    completed_weeks = current_week - 1
    if completed_weeks <= 0:
        return ProgressionResult(tier=ceiling)

    by_week = group_by_week(history, participant.participant_id, completed_weeks)

    tier = ceiling
    streak = 0
    statuses: list[WeekStatus] = []

    for week in range(1, completed_weeks + 1):
        required = required_workouts(tier)
        completed, clean = evaluate_week(
            participant.participant_id,
            week,
            required,
            by_week.get(week, ()),
            tier=tier,
            step_policy=step_policy,
        )
        tier_after, streak = next_tier(tier, clean, streak, ceiling)
        statuses.append(
            WeekStatus(
                week=week,
                tier=tier,
                required=required,
                completed=completed,
                clean=clean,
                tier_after=tier_after,
            )
        )
        tier = tier_after

    clean_weeks = sum(1 for s in statuses if s.clean)
    return ProgressionResult(
        tier=tier,
        statuses=tuple(statuses),
        clean_weeks=clean_weeks,
        missed_weeks=len(statuses) - clean_weeks,
        streak=streak,
    )
