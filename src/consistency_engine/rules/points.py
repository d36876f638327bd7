"""Leaderboard points: one per clean week plus one per completed goal."""

from __future__ import annotations


def total_points(clean_weeks: int, completed_goals: int) -> int:
    """Return clean_weeks + completed_goals. No bonus for extra workouts."""
    return clean_weeks + completed_goals
