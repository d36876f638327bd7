"""Snapshot and batch report models produced by the consistency engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from consistency_engine.models.enums import Tier


@dataclass(frozen=True)
class ParticipantSnapshot:
    """Derived standing of one participant.

    This is both what the store persists and the mutation the engine emits.
    It is always written as a single whole record.
    """

    participant_id: str
    tier: Tier
    clean_weeks: int
    missed_weeks: int
    total_points: int
    active: bool


@dataclass(frozen=True)
class ParticipantFailure:
    """A participant whose recalculation raised during a batch run."""

    participant_id: str
    error: str


@dataclass(frozen=True)
class RecalculationReport:
    """Outcome of one batch recalculation over all active participants."""

    mutations: tuple[ParticipantSnapshot, ...] = field(default_factory=tuple)
    failures: tuple[ParticipantFailure, ...] = field(default_factory=tuple)
    evaluated: int = 0

    @property
    def changed_ids(self) -> list[str]:
        return [m.participant_id for m in self.mutations]

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0
