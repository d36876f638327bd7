"""Custom exception hierarchy for the challenge store."""

from __future__ import annotations


class ChallengeStoreError(Exception):
    """Base exception for all challenge_store errors."""


class ValidationError(ChallengeStoreError):
    """A write was rejected at the persistence boundary."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidTierError(ValidationError):
    """Tier outside {3, 4, 5}."""

    def __init__(self, value: object, field: str = "tier") -> None:
        super().__init__(f"{field} must be 3, 4, or 5, got {value!r}", field=field)
        self.value = value


class ParticipantNotFoundError(ChallengeStoreError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(f"Participant not found: {participant_id}")
        self.participant_id = participant_id


class GoalNotFoundError(ChallengeStoreError):
    def __init__(self, goal_id: str) -> None:
        super().__init__(f"Goal not found: {goal_id}")
        self.goal_id = goal_id


class WorkoutNotFoundError(ChallengeStoreError):
    def __init__(self, participant_id: str, week: int, day: int) -> None:
        super().__init__(f"No workout for {participant_id} week {week} day {day}")
        self.participant_id = participant_id
        self.week = week
        self.day = day
