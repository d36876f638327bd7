"""Participant, workout and goal records — frozen inputs to the engine."""

from __future__ import annotations

from dataclasses import dataclass

from consistency_engine.models.enums import DEFAULT_CEILING_TIER, GoalCategory, Tier
from consistency_engine.models.snapshot import ParticipantSnapshot


@dataclass(frozen=True)
class Participant:
    """Immutable participant record as held by the store.

    The last six fields are the persisted snapshot: they are overwritten
    wholesale on every recalculation and never read back by the engine.
    """

    participant_id: str
    name: str
    ceiling_tier: Tier = DEFAULT_CEILING_TIER
    reactivation_checkpoint: int | None = None  # week index, None = never reactivated

    # Persisted snapshot
    tier: Tier = DEFAULT_CEILING_TIER
    clean_weeks: int = 0
    missed_weeks: int = 0
    total_points: int = 0
    active: bool = True

    @property
    def snapshot(self) -> ParticipantSnapshot:
        return ParticipantSnapshot(
            participant_id=self.participant_id,
            tier=self.tier,
            clean_weeks=self.clean_weeks,
            missed_weeks=self.missed_weeks,
            total_points=self.total_points,
            active=self.active,
        )


@dataclass(frozen=True)
class WorkoutRecord:
    """One day's workout entry for a participant."""

    participant_id: str
    week: int  # 1-indexed challenge week
    day: int  # 1=Monday, 7=Sunday
    completed: bool
    workout_type: str | None = None
    notes: str | None = None
    marked_by: str = "user"  # "user" or "admin"


@dataclass(frozen=True)
class Goal:
    """A participant goal. Only completed goals matter to the engine."""

    goal_id: str
    participant_id: str
    category: GoalCategory
    description: str
    is_difficult: bool = False
    is_completed: bool = False
