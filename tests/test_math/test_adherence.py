"""Tests for adherence analytics: weekly counts, heatmap matrix, stats, leaderboard."""

from __future__ import annotations

import numpy as np

from consistency_engine.math.adherence import (
    completion_matrix,
    leaderboard,
    weekly_completion_counts,
    workout_stats,
    workouts_frame,
)
from consistency_engine.models.enums import Tier
from consistency_engine.models.participant import Participant, WorkoutRecord


class TestWorkoutsFrame:
    def test_empty_frame_has_columns(self) -> None:
        df = workouts_frame([])
        assert list(df.columns) == ["participant_id", "week", "day", "completed", "workout_type"]
        assert len(df) == 0


class TestWeeklyCompletionCounts:
    def test_counts_per_week_with_gaps(self, make_history) -> None:
        records = make_history("alice", [5, 0, 3])
        assert weekly_completion_counts(records, "alice", 4) == {1: 5, 2: 0, 3: 3, 4: 0}

    def test_ignores_uncompleted_and_other_participants(self, make_history) -> None:
        records = make_history("alice", [2]) + (
            WorkoutRecord("alice", 1, 5, False),
            WorkoutRecord("bob", 1, 1, True),
        )
        assert weekly_completion_counts(records, "alice", 1) == {1: 2}

    def test_not_started_is_empty(self, make_history) -> None:
        assert weekly_completion_counts(make_history("alice", [5]), "alice", 0) == {}


class TestCompletionMatrix:
    def test_shape_and_flags(self, make_history) -> None:
        matrix = completion_matrix(make_history("alice", [2, 0, 7]), "alice", 3)
        assert matrix.shape == (3, 7)
        assert matrix[0].tolist() == [1, 1, 0, 0, 0, 0, 0]
        assert matrix[1].sum() == 0
        assert matrix[2].sum() == 7

    def test_out_of_range_records_ignored(self) -> None:
        records = [WorkoutRecord("alice", 9, 1, True)]
        assert np.count_nonzero(completion_matrix(records, "alice", 2)) == 0


class TestWorkoutStats:
    def test_summary(self, make_history) -> None:
        records = make_history("alice", [3, 1]) + (WorkoutRecord("alice", 2, 6, False),)
        stats = workout_stats(records, "alice")
        assert stats == {
            "total_workouts": 5,
            "completed_workouts": 4,
            "weeks_with_data": 2,
            "latest_week": 2,
            "completion_rate": 80,
        }

    def test_no_data(self) -> None:
        stats = workout_stats([], "alice")
        assert stats["total_workouts"] == 0
        assert stats["completion_rate"] == 0


class TestLeaderboard:
    def test_orders_by_points_then_clean_weeks(self) -> None:
        participants = [
            Participant("a", "Ann", total_points=5, clean_weeks=3),
            Participant("b", "Ben", total_points=7, clean_weeks=4, tier=Tier.FOUR),
            Participant("c", "Cat", total_points=5, clean_weeks=5),
        ]
        board = leaderboard(participants)
        assert board["participant_id"].tolist() == ["b", "c", "a"]
        assert board["rank"].tolist() == [1, 2, 3]
        assert board["tier"].tolist() == [4, 5, 5]

    def test_ties_share_rank(self) -> None:
        participants = [
            Participant("a", "Ann", total_points=4, clean_weeks=2),
            Participant("b", "Ben", total_points=4, clean_weeks=2),
            Participant("c", "Cat", total_points=1, clean_weeks=1),
        ]
        board = leaderboard(participants)
        assert board["rank"].tolist() == [1, 1, 3]

    def test_eliminated_participants_stay_listed(self) -> None:
        board = leaderboard([Participant("a", "Ann", active=False, missed_weeks=2)])
        assert board["active"].tolist() == [False]

    def test_empty(self) -> None:
        assert leaderboard([]).empty
