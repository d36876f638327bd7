"""Adherence analytics over workout records: counts, heatmap matrix, leaderboard.

These feed presentation layers; the progression replay itself does not
depend on them.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from consistency_engine.models.enums import DAYS_PER_WEEK, MAX_WEEK_COUNTER
from consistency_engine.models.participant import Participant, WorkoutRecord

_WORKOUT_COLUMNS = ["participant_id", "week", "day", "completed", "workout_type"]


def workouts_frame(records: Iterable[WorkoutRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per workout record."""
    rows = [
        (r.participant_id, r.week, r.day, bool(r.completed), r.workout_type)
        for r in records
    ]
    df = pd.DataFrame(rows, columns=_WORKOUT_COLUMNS)
    return df.astype({"week": np.int64, "day": np.int64, "completed": bool})


def weekly_completion_counts(
    records: Iterable[WorkoutRecord], participant_id: str, up_to_week: int
) -> dict[int, int]:
    """Completed workouts per week for weeks 1..up_to_week (missing weeks → 0)."""
    if up_to_week <= 0:
        return {}
    df = workouts_frame(records)
    df = df[(df["participant_id"] == participant_id) & df["completed"]]
    counts = df.groupby("week").size()
    return {week: int(counts.get(week, 0)) for week in range(1, up_to_week + 1)}


def completion_matrix(
    records: Iterable[WorkoutRecord], participant_id: str, weeks: int
) -> np.ndarray:
    """Return a (weeks × 7) array of 0/1 completion flags for heatmaps.

    Row i is week i + 1, column j is day j + 1. Records outside the grid
    are ignored.
    """
    matrix = np.zeros((max(weeks, 0), DAYS_PER_WEEK), dtype=np.int8)
    for r in records:
        if r.participant_id != participant_id or not r.completed:
            continue
        if 1 <= r.week <= weeks and 1 <= r.day <= DAYS_PER_WEEK:
            matrix[r.week - 1, r.day - 1] = 1
    return matrix


def workout_stats(records: Iterable[WorkoutRecord], participant_id: str) -> dict[str, int]:
    """Summary statistics of a participant's logged workout days.

    Returns:
        Dict with total_workouts, completed_workouts, weeks_with_data,
        latest_week and completion_rate (rounded percent).
    """
    df = workouts_frame(records)
    df = df[df["participant_id"] == participant_id]
    total = int(len(df))
    completed = int(df["completed"].sum()) if total else 0
    return {
        "total_workouts": total,
        "completed_workouts": completed,
        "weeks_with_data": int(df["week"].nunique()) if total else 0,
        "latest_week": int(df["week"].max()) if total else 0,
        "completion_rate": int(round(completed / total * 100)) if total else 0,
    }


def leaderboard(participants: Iterable[Participant]) -> pd.DataFrame:
    """Rank participants by total points, then clean weeks.

    Ties share a rank (minimum method). Inactive participants stay on the
    board with their counters intact.
    """
    rows = [
        {
            "participant_id": p.participant_id,
            "name": p.name,
            "tier": int(p.tier),
            "clean_weeks": p.clean_weeks,
            "missed_weeks": p.missed_weeks,
            "total_points": p.total_points,
            "active": p.active,
        }
        for p in participants
    ]
    columns = [
        "rank", "participant_id", "name", "tier",
        "clean_weeks", "missed_weeks", "total_points", "active",
    ]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    df = df.sort_values(
        ["total_points", "clean_weeks", "name"], ascending=[False, False, True]
    ).reset_index(drop=True)
    # clean weeks never exceed MAX_WEEK_COUNTER, so this orders points first
    score = df["total_points"] * (MAX_WEEK_COUNTER + 1) + df["clean_weeks"]
    df["rank"] = score.rank(method="min", ascending=False).astype(int)
    return df[columns]
