"""Shared test fixtures: participants, workout histories, stores."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from challenge_store.store import ChallengeStore
from consistency_engine.models.enums import Tier
from consistency_engine.models.participant import Participant, WorkoutRecord


def history_from_counts(
    participant_id: str, weekly_counts: Sequence[int], start_week: int = 1
) -> tuple[WorkoutRecord, ...]:
    """Build completed workout records: weekly_counts[i] days done in week start_week + i."""
    records: list[WorkoutRecord] = []
    for offset, count in enumerate(weekly_counts):
        week = start_week + offset
        for day in range(1, count + 1):
            records.append(
                WorkoutRecord(participant_id=participant_id, week=week, day=day, completed=True)
            )
    return tuple(records)


@pytest.fixture
def make_history() -> Callable[..., tuple[WorkoutRecord, ...]]:
    return history_from_counts


@pytest.fixture
def default_participant() -> Participant:
    """New participant at the default ceiling (tier 5)."""
    return Participant(participant_id="alice", name="Alice")


@pytest.fixture
def bonus_participant() -> Participant:
    """Participant who starts with an earned head start: ceiling tier 4."""
    return Participant(
        participant_id="subhash",
        name="Subhash",
        ceiling_tier=Tier.FOUR,
        tier=Tier.FOUR,
    )


@pytest.fixture
def store() -> ChallengeStore:
    """Store with two participants: alice (ceiling 5) and bob (ceiling 4)."""
    s = ChallengeStore()
    s.add_participant("Alice", participant_id="alice")
    s.add_participant("Bob", ceiling_tier=4, participant_id="bob")
    return s


@pytest.fixture
def log_weeks() -> Callable[[ChallengeStore, str, Sequence[int]], None]:
    """Write weekly completed counts into a store for one participant."""

    def _log(s: ChallengeStore, participant_id: str, weekly_counts: Sequence[int]) -> None:
        for record in history_from_counts(participant_id, weekly_counts):
            s.upsert_workout(participant_id, record.week, record.day, True)

    return _log
