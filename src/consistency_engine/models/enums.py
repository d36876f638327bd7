"""Enumerations and rule constants for the consistency engine."""

from enum import Enum, IntEnum, auto


class Tier(IntEnum):
    """Difficulty tier — lower value = easier to hold, harder to fall from.

    Tiers 3 and 4 share the same weekly workload; tier 3 is a reward that
    takes an extra miss to lose, not a lighter week.
    """

    THREE = 3
    FOUR = 4
    FIVE = 5


class StepPolicy(IntEnum):
    """How step-based workouts count toward the weekly requirement."""

    UNRESTRICTED = auto()  # every completed record counts
    CAPPED = auto()  # at most one step workout per week, tier 5 only


class GoalCategory(str, Enum):
    """Goal categories a participant can pursue."""

    CARDIO = "cardio"
    STRENGTH = "strength"
    CONSISTENCY = "consistency"
    SPORTS = "sports"
    PERSONAL_GROWTH = "personal-growth"


# ---------------------------------------------------------------------------
# Tier rules
# ---------------------------------------------------------------------------
# Tier a new participant starts at, and the default regression ceiling
DEFAULT_CEILING_TIER = Tier.FIVE

# Hardest tier: the only one where misses count toward elimination
HARDEST_TIER = Tier.FIVE

# Easiest tier a participant can earn
EASIEST_TIER = Tier.THREE

# Weekly workouts required at every tier up to and including this one
MIN_REQUIRED_WORKOUTS = 4

# Consecutive clean weeks that earn a one-tier progression
CLEAN_STREAK_TO_PROGRESS = 3

# Misses within one hardest-tier stint that eliminate a participant
STINT_MISSES_TO_ELIMINATE = 2

# ---------------------------------------------------------------------------
# Week structure
# ---------------------------------------------------------------------------
DAYS_PER_WEEK = 7

# Workout types treated as step-based under StepPolicy.CAPPED
STEP_WORKOUT_TYPES = frozenset({"steps", "step", "walk"})

# Step workouts credited per week under StepPolicy.CAPPED
MAX_STEP_WORKOUTS_PER_WEEK = 1

# ---------------------------------------------------------------------------
# Boundary validation limits
# ---------------------------------------------------------------------------
MAX_NAME_LENGTH = 100
MAX_WEEK_COUNTER = 52
MAX_TOTAL_POINTS = 10000
