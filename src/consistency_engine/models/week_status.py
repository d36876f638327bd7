"""Week-by-week replay results: WeekStatus, ProgressionResult, EliminationVerdict."""

from __future__ import annotations

from dataclasses import dataclass, field

from consistency_engine.models.enums import Tier


@dataclass(frozen=True)
class WeekStatus:
    """Outcome of one completed week during a progression replay.

    ``tier`` is the tier simulated as active during the week, which is
    what ``required`` was derived from. ``tier_after`` is the tier the
    participant carries into the next week.
    """

    week: int
    tier: Tier
    required: int
    completed: int
    clean: bool
    tier_after: Tier

    @property
    def progressed(self) -> bool:
        return self.tier_after < self.tier

    @property
    def regressed(self) -> bool:
        return self.tier_after > self.tier


@dataclass(frozen=True)
class ProgressionResult:
    """Output of simulate_progression(): final tier plus per-week statuses."""

    tier: Tier
    statuses: tuple[WeekStatus, ...] = field(default_factory=tuple)
    clean_weeks: int = 0
    missed_weeks: int = 0
    streak: int = 0  # clean streak carried into the in-progress week

    @property
    def completed_weeks(self) -> int:
        return len(self.statuses)


@dataclass(frozen=True)
class EliminationVerdict:
    """Result of tracking misses within the current hardest-tier stint."""

    stint_missed: int = 0
    eliminated: bool = False
