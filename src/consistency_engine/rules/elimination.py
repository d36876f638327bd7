"""Hardest-tier stint tracking and the elimination verdict.

Misses only count while the replayed tier is 5, and only within the
current stint at tier 5. A stint starts fresh at simulation start, on every
regression that lands on tier 5, after every progression that leaves it,
and at the participant's reactivation checkpoint. Weeks strictly before
the checkpoint never count.
"""

from __future__ import annotations

from consistency_engine.models.enums import HARDEST_TIER, STINT_MISSES_TO_ELIMINATE
from consistency_engine.models.participant import Participant
from consistency_engine.models.week_status import EliminationVerdict, ProgressionResult


def count_stint_misses(
    progression: ProgressionResult, reactivation_checkpoint: int | None = None
) -> int:
    """Walk the replayed weeks in order and return misses in the current stint.

    Args:
        progression: Result of simulate_progression() for the participant.
        reactivation_checkpoint: First week that counts again after a
            reactivation, or None.

    Returns:
        Missed weeks at tier 5 since the current stint began.
    """
    checkpoint = reactivation_checkpoint or 0
    stint_missed = 0

    for status in progression.statuses:
        if status.week < checkpoint:
            continue
        if status.week == checkpoint:
            stint_missed = 0

        if status.tier == HARDEST_TIER and not status.clean:
            stint_missed += 1

        left_hardest = status.tier == HARDEST_TIER and status.tier_after != HARDEST_TIER
        entered_hardest = status.tier != HARDEST_TIER and status.tier_after == HARDEST_TIER
        if left_hardest or entered_hardest:
            stint_missed = 0

    return stint_missed


def track_elimination(
    participant: Participant, progression: ProgressionResult
) -> EliminationVerdict:
    """Decide whether the participant is eliminated.

    Eliminated iff the final tier is 5 and the current stint holds at least
    STINT_MISSES_TO_ELIMINATE misses. With no completed weeks nothing is
    evaluated.
    """
    if not progression.statuses:
        return EliminationVerdict()

    stint_missed = count_stint_misses(progression, participant.reactivation_checkpoint)
    eliminated = (
        progression.tier == HARDEST_TIER
        and stint_missed >= STINT_MISSES_TO_ELIMINATE
    )
    return EliminationVerdict(stint_missed=stint_missed, eliminated=eliminated)
