"""Challenge calendar: which week is in progress, and how far along we are.

All day arithmetic happens between midnights in one fixed reference
timezone, so a participant in another zone sees the same week number.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from consistency_engine.models.enums import DAYS_PER_WEEK

# Original challenge window and reference timezone (IST, UTC+05:30)
DEFAULT_START_DATE = date(2026, 1, 19)
DEFAULT_END_DATE = date(2026, 7, 31)
DEFAULT_TZ_OFFSET_MINUTES = 330


def reference_timezone(offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES) -> timezone:
    """Fixed-offset timezone that decides where each challenge day begins."""
    return timezone(timedelta(minutes=offset_minutes))


def local_today(
    now: datetime | None = None, offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES
) -> date:
    """Return the calendar date of *now* in the reference timezone.

    Naive datetimes are taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(reference_timezone(offset_minutes)).date()


def days_since_start(
    start_date: date = DEFAULT_START_DATE,
    now: datetime | None = None,
    offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES,
) -> int:
    """Days elapsed since the start date (negative before the start)."""
    return (local_today(now, offset_minutes) - start_date).days


def current_week(
    start_date: date = DEFAULT_START_DATE,
    now: datetime | None = None,
    offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES,
) -> int:
    """Return the 1-indexed in-progress challenge week, or 0 before the start.

    Args:
        start_date: First day of week 1.
        now: Instant to resolve (None → current time).
        offset_minutes: Reference timezone offset from UTC in minutes.

    Returns:
        0 if the challenge has not started, else days_since_start // 7 + 1.
    """
    days = days_since_start(start_date, now, offset_minutes)
    if days < 0:
        return 0
    return days // DAYS_PER_WEEK + 1


def days_until_start(
    start_date: date = DEFAULT_START_DATE,
    now: datetime | None = None,
    offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES,
) -> int:
    """Days remaining before the start date (0 or negative once started)."""
    return -days_since_start(start_date, now, offset_minutes)


def total_challenge_days(
    start_date: date = DEFAULT_START_DATE, end_date: date = DEFAULT_END_DATE
) -> int:
    """Length of the challenge window in days."""
    return (end_date - start_date).days


def challenge_progress(
    start_date: date = DEFAULT_START_DATE,
    end_date: date = DEFAULT_END_DATE,
    now: datetime | None = None,
    offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES,
) -> tuple[int, int, float]:
    """Return (days_passed, total_days, progress_pct) with pct clamped to 0-100."""
    total = total_challenge_days(start_date, end_date)
    passed = max(0, days_since_start(start_date, now, offset_minutes))
    if total <= 0:
        return passed, total, 100.0
    pct = min(100.0, max(0.0, passed / total * 100.0))
    return passed, total, pct


@dataclass(frozen=True)
class ChallengeCalendar:
    """Fixed challenge window plus reference timezone."""

    start_date: date = DEFAULT_START_DATE
    end_date: date = DEFAULT_END_DATE
    tz_offset_minutes: int = DEFAULT_TZ_OFFSET_MINUTES

    def current_week(self, now: datetime | None = None) -> int:
        return current_week(self.start_date, now, self.tz_offset_minutes)

    def progress(self, now: datetime | None = None) -> tuple[int, int, float]:
        return challenge_progress(self.start_date, self.end_date, now, self.tz_offset_minutes)

    @property
    def total_weeks(self) -> int:
        return -(-total_challenge_days(self.start_date, self.end_date) // DAYS_PER_WEEK)
