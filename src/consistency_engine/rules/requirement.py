"""Weekly workout requirement per tier."""

from __future__ import annotations

from consistency_engine.models.enums import MIN_REQUIRED_WORKOUTS, Tier


def required_workouts(tier: Tier) -> int:
    """Return the number of completed workouts a clean week needs at *tier*.

    Tiers 3 and 4 both require MIN_REQUIRED_WORKOUTS; tier 5 requires 5.

    Args:
        tier: The tier active during the week being evaluated.

    Returns:
        Required completed-workout count.
    """
    if tier <= MIN_REQUIRED_WORKOUTS:
        return MIN_REQUIRED_WORKOUTS
    return int(tier)
