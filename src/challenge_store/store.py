"""Thread-safe in-memory store for participants, workouts, goals and snapshots.

Implements the engine's WorkoutHistorySource, GoalSource and SnapshotSink.
Every write is validated here, at the persistence boundary.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import uuid

from consistency_engine.models.enums import DEFAULT_CEILING_TIER, GoalCategory, Tier
from consistency_engine.models.participant import Goal, Participant, WorkoutRecord
from consistency_engine.models.snapshot import ParticipantSnapshot

from challenge_store.exceptions import (
    GoalNotFoundError,
    ParticipantNotFoundError,
    ValidationError,
    WorkoutNotFoundError,
)
from challenge_store.validation import (
    validate_category,
    validate_day,
    validate_name,
    validate_points,
    validate_tier,
    validate_week,
    validate_week_counter,
)

logger = logging.getLogger(__name__)

_WorkoutKey = tuple[str, int, int]  # (participant_id, week, day)


class ChallengeStore:
    """In-memory challenge data with one lock guarding every read and write.

    Snapshot writes replace the participant record as a whole, so a reader
    never sees a new tier alongside stale points.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._participants: dict[str, Participant] = {}
        self._workouts: dict[_WorkoutKey, WorkoutRecord] = {}
        self._goals: dict[str, Goal] = {}

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------

    def add_participant(
        self,
        name: str,
        ceiling_tier: Tier | int = DEFAULT_CEILING_TIER,
        participant_id: str | None = None,
    ) -> Participant:
        """Create a participant starting at their ceiling tier with zeroed counters."""
        clean_name = validate_name(name)
        ceiling = validate_tier(ceiling_tier, field="ceiling_tier")
        participant = Participant(
            participant_id=participant_id or uuid.uuid4().hex,
            name=clean_name,
            ceiling_tier=ceiling,
            tier=ceiling,
        )
        with self._lock:
            if participant.participant_id in self._participants:
                raise ValidationError(
                    f"Participant already exists: {participant.participant_id}",
                    field="participant_id",
                )
            self._participants[participant.participant_id] = participant
        logger.info("Added participant %s (%s)", participant.name, participant.participant_id)
        self._after_write()
        return participant

    def get_participant(self, participant_id: str) -> Participant:
        with self._lock:
            return self._get(participant_id)

    def list_participants(self) -> list[Participant]:
        with self._lock:
            return list(self._participants.values())

    def update_participant(self, participant_id: str, **changes: object) -> Participant:
        """Validate and apply field changes to a participant.

        Accepts: name, ceiling_tier, tier, clean_weeks, missed_weeks,
        total_points, active, reactivation_checkpoint.
        """
        validated: dict[str, object] = {}
        for key, value in changes.items():
            if key == "name":
                validated[key] = validate_name(value)
            elif key in ("tier", "ceiling_tier"):
                validated[key] = validate_tier(value, field=key)
            elif key in ("clean_weeks", "missed_weeks"):
                validated[key] = validate_week_counter(value, key)
            elif key == "total_points":
                validated[key] = validate_points(value)
            elif key == "active":
                if not isinstance(value, bool):
                    raise ValidationError("active must be a boolean", field=key)
                validated[key] = value
            elif key == "reactivation_checkpoint":
                validated[key] = None if value is None else validate_week(value, key)
            else:
                raise ValidationError(f"Unknown participant field: {key}", field=key)

        with self._lock:
            updated = dataclasses.replace(self._get(participant_id), **validated)
            self._participants[participant_id] = updated
        self._after_write()
        return updated

    def delete_participant(self, participant_id: str) -> None:
        """Remove a participant together with their workouts and goals."""
        with self._lock:
            self._get(participant_id)
            del self._participants[participant_id]
            self._workouts = {
                k: v for k, v in self._workouts.items() if k[0] != participant_id
            }
            self._goals = {
                k: g for k, g in self._goals.items() if g.participant_id != participant_id
            }
        logger.info("Deleted participant %s", participant_id)
        self._after_write()

    def set_reactivation_checkpoint(self, participant_id: str, week: int) -> Participant:
        """Grant a clean slate from *week* on and mark the participant active."""
        return self.update_participant(
            participant_id, reactivation_checkpoint=week, active=True
        )

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def upsert_workout(
        self,
        participant_id: str,
        week: int,
        day: int,
        completed: bool,
        workout_type: str | None = None,
        notes: str | None = None,
        marked_by: str = "user",
    ) -> WorkoutRecord:
        """Insert or replace the workout for (participant, week, day)."""
        record = WorkoutRecord(
            participant_id=participant_id,
            week=validate_week(week),
            day=validate_day(day),
            completed=bool(completed),
            workout_type=workout_type or None,
            notes=notes or None,
            marked_by=marked_by if marked_by in ("user", "admin") else "admin",
        )
        with self._lock:
            self._get(participant_id)
            self._workouts[(participant_id, record.week, record.day)] = record
        logger.debug(
            "Upserted workout for %s week %d day %d (completed=%s)",
            participant_id, record.week, record.day, record.completed,
        )
        self._after_write()
        return record

    def get_workout(self, participant_id: str, week: int, day: int) -> WorkoutRecord | None:
        with self._lock:
            return self._workouts.get((participant_id, week, day))

    def delete_workout(self, participant_id: str, week: int, day: int) -> None:
        with self._lock:
            if (participant_id, week, day) not in self._workouts:
                raise WorkoutNotFoundError(participant_id, week, day)
            del self._workouts[(participant_id, week, day)]
        self._after_write()

    def workouts_for(self, participant_id: str, up_to_week: int) -> list[WorkoutRecord]:
        """All records of a participant in weeks 1..up_to_week, unordered."""
        with self._lock:
            self._get(participant_id)
            return [
                r for (pid, week, _), r in self._workouts.items()
                if pid == participant_id and week <= up_to_week
            ]

    def all_workouts(self) -> list[WorkoutRecord]:
        with self._lock:
            return list(self._workouts.values())

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def add_goal(
        self,
        participant_id: str,
        category: GoalCategory | str,
        description: str,
        is_difficult: bool = False,
        goal_id: str | None = None,
    ) -> Goal:
        goal = Goal(
            goal_id=goal_id or uuid.uuid4().hex,
            participant_id=participant_id,
            category=validate_category(category),
            description=validate_name(description, field="description"),
            is_difficult=bool(is_difficult),
        )
        with self._lock:
            self._get(participant_id)
            self._goals[goal.goal_id] = goal
        self._after_write()
        return goal

    def set_goal_completed(self, goal_id: str, completed: bool = True) -> Goal:
        with self._lock:
            goal = self._goals.get(goal_id)
            if goal is None:
                raise GoalNotFoundError(goal_id)
            updated = dataclasses.replace(goal, is_completed=bool(completed))
            self._goals[goal_id] = updated
        self._after_write()
        return updated

    def delete_goal(self, goal_id: str) -> None:
        with self._lock:
            if goal_id not in self._goals:
                raise GoalNotFoundError(goal_id)
            del self._goals[goal_id]
        self._after_write()

    def goals_for(self, participant_id: str) -> list[Goal]:
        with self._lock:
            return [g for g in self._goals.values() if g.participant_id == participant_id]

    def completed_goal_count(self, participant_id: str) -> int:
        with self._lock:
            self._get(participant_id)
            return sum(
                1 for g in self._goals.values()
                if g.participant_id == participant_id and g.is_completed
            )

    # ------------------------------------------------------------------
    # Snapshot sink
    # ------------------------------------------------------------------

    def write_snapshot(self, snapshot: ParticipantSnapshot) -> None:
        """Replace a participant's persisted standing in one step."""
        tier = validate_tier(snapshot.tier)
        clean_weeks = validate_week_counter(snapshot.clean_weeks, "clean_weeks")
        missed_weeks = validate_week_counter(snapshot.missed_weeks, "missed_weeks")
        points = validate_points(snapshot.total_points)
        with self._lock:
            current = self._get(snapshot.participant_id)
            self._participants[snapshot.participant_id] = dataclasses.replace(
                current,
                tier=tier,
                clean_weeks=clean_weeks,
                missed_weeks=missed_weeks,
                total_points=points,
                active=snapshot.active,
            )
        self._after_write()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, participant_id: str) -> Participant:
        """Look up a participant. Caller must hold the lock."""
        participant = self._participants.get(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(participant_id)
        return participant

    def _after_write(self) -> None:
        """Hook run after every successful write. No-op in memory."""
