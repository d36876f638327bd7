"""JSON-file persistence for the challenge store.

The whole store is rewritten after every write, via a temp file and an
atomic rename, so the file on disk is always a complete document.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from consistency_engine.models.enums import GoalCategory, Tier
from consistency_engine.models.participant import Goal, Participant, WorkoutRecord

from challenge_store.exceptions import ChallengeStoreError
from challenge_store.store import ChallengeStore

logger = logging.getLogger(__name__)

_SCHEMA_VERSION = 1


def _participant_to_dict(p: Participant) -> dict[str, Any]:
    return {
        "participant_id": p.participant_id,
        "name": p.name,
        "ceiling_tier": int(p.ceiling_tier),
        "reactivation_checkpoint": p.reactivation_checkpoint,
        "tier": int(p.tier),
        "clean_weeks": p.clean_weeks,
        "missed_weeks": p.missed_weeks,
        "total_points": p.total_points,
        "active": p.active,
    }


def _participant_from_dict(d: dict[str, Any]) -> Participant:
    return Participant(
        participant_id=d["participant_id"],
        name=d["name"],
        ceiling_tier=Tier(d.get("ceiling_tier", 5)),
        reactivation_checkpoint=d.get("reactivation_checkpoint"),
        tier=Tier(d.get("tier", d.get("ceiling_tier", 5))),
        clean_weeks=d.get("clean_weeks", 0),
        missed_weeks=d.get("missed_weeks", 0),
        total_points=d.get("total_points", 0),
        active=d.get("active", True),
    )


def _workout_to_dict(w: WorkoutRecord) -> dict[str, Any]:
    return {
        "participant_id": w.participant_id,
        "week": w.week,
        "day": w.day,
        "completed": w.completed,
        "workout_type": w.workout_type,
        "notes": w.notes,
        "marked_by": w.marked_by,
    }


def _goal_to_dict(g: Goal) -> dict[str, Any]:
    return {
        "goal_id": g.goal_id,
        "participant_id": g.participant_id,
        "category": g.category.value,
        "description": g.description,
        "is_difficult": g.is_difficult,
        "is_completed": g.is_completed,
    }


def _goal_from_dict(d: dict[str, Any]) -> Goal:
    return Goal(
        goal_id=d["goal_id"],
        participant_id=d["participant_id"],
        category=GoalCategory(d["category"]),
        description=d["description"],
        is_difficult=d.get("is_difficult", False),
        is_completed=d.get("is_completed", False),
    )


class JsonChallengeStore(ChallengeStore):
    """ChallengeStore backed by a single JSON document on disk."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self._path = Path(path)
        self._io_lock = threading.Lock()
        if self._path.exists():
            self._load()
        else:
            logger.info("No data file at %s, starting empty", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ChallengeStoreError(f"Cannot read {self._path}: {exc}") from exc

        try:
            participants = [_participant_from_dict(d) for d in data.get("participants", [])]
            workouts = [WorkoutRecord(**d) for d in data.get("workouts", [])]
            goals = [_goal_from_dict(d) for d in data.get("goals", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise ChallengeStoreError(f"Malformed data in {self._path}: {exc}") from exc

        with self._lock:
            self._participants = {p.participant_id: p for p in participants}
            self._workouts = {(w.participant_id, w.week, w.day): w for w in workouts}
            self._goals = {g.goal_id: g for g in goals}
        logger.info(
            "Loaded %d participants, %d workouts, %d goals from %s",
            len(participants), len(workouts), len(goals), self._path,
        )

    def _after_write(self) -> None:
        # Held from snapshot through rename: the file always matches the latest state
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with self._io_lock:
            with self._lock:
                document = {
                    "version": _SCHEMA_VERSION,
                    "participants": [_participant_to_dict(p) for p in self._participants.values()],
                    "workouts": [_workout_to_dict(w) for w in self._workouts.values()],
                    "goals": [_goal_to_dict(g) for g in self._goals.values()],
                }
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self._path)
