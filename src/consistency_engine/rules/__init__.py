"""Consistency rules: requirement, week evaluation, progression, elimination, points."""

from consistency_engine.rules.elimination import count_stint_misses, track_elimination
from consistency_engine.rules.points import total_points
from consistency_engine.rules.progression import simulate_progression
from consistency_engine.rules.requirement import required_workouts
from consistency_engine.rules.week_evaluator import count_completed, evaluate_week

__all__ = [
    "count_completed",
    "count_stint_misses",
    "evaluate_week",
    "required_workouts",
    "simulate_progression",
    "total_points",
    "track_elimination",
]
