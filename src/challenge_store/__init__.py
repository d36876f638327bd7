"""Challenge data store — all persistence of participants, workouts and goals lives here."""

from challenge_store.exceptions import (
    ChallengeStoreError,
    GoalNotFoundError,
    InvalidTierError,
    ParticipantNotFoundError,
    ValidationError,
    WorkoutNotFoundError,
)
from challenge_store.json_store import JsonChallengeStore
from challenge_store.service import ChallengeService
from challenge_store.store import ChallengeStore

__all__ = [
    "ChallengeService",
    "ChallengeStore",
    "ChallengeStoreError",
    "GoalNotFoundError",
    "InvalidTierError",
    "JsonChallengeStore",
    "ParticipantNotFoundError",
    "ValidationError",
    "WorkoutNotFoundError",
]
