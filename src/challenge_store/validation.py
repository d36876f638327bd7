"""Boundary validation: nothing illegal reaches the engine through the store."""

from __future__ import annotations

from consistency_engine.models.enums import (
    DAYS_PER_WEEK,
    MAX_NAME_LENGTH,
    MAX_TOTAL_POINTS,
    MAX_WEEK_COUNTER,
    GoalCategory,
    Tier,
)

from challenge_store.exceptions import InvalidTierError, ValidationError


def validate_tier(value: object, field: str = "tier") -> Tier:
    """Coerce *value* to a Tier or raise InvalidTierError."""
    if isinstance(value, bool):
        raise InvalidTierError(value, field)
    try:
        return Tier(int(value))  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidTierError(value, field) from exc


def validate_name(value: object, field: str = "name") -> str:
    """Trim and strip angle brackets; require 1..MAX_NAME_LENGTH characters."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    cleaned = value.strip().replace("<", "").replace(">", "")
    if not 1 <= len(cleaned) <= MAX_NAME_LENGTH:
        raise ValidationError(
            f"{field} must be between 1 and {MAX_NAME_LENGTH} characters", field=field
        )
    return cleaned


def validate_count(value: object, field: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if not 0 <= value <= maximum:
        raise ValidationError(f"{field} must be between 0 and {maximum}", field=field)
    return value


def validate_week_counter(value: object, field: str) -> int:
    return validate_count(value, field, MAX_WEEK_COUNTER)


def validate_points(value: object, field: str = "total_points") -> int:
    return validate_count(value, field, MAX_TOTAL_POINTS)


def validate_week(value: object, field: str = "week") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", field=field)
    return value


def validate_day(value: object, field: str = "day") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= DAYS_PER_WEEK:
        raise ValidationError(f"{field} must be between 1 and {DAYS_PER_WEEK}", field=field)
    return value


def validate_category(value: object, field: str = "category") -> GoalCategory:
    try:
        return GoalCategory(value)
    except ValueError as exc:
        allowed = ", ".join(c.value for c in GoalCategory)
        raise ValidationError(f"{field} must be one of: {allowed}", field=field) from exc
