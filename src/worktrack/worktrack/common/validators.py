from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_HOURS_WORKED, MIN_HOURS_WORKED
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def parse_hours(value, field_name: str = "Hours worked") -> float:
    """Parse a form value for hours worked and check it is within the allowed range."""
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if hours < MIN_HOURS_WORKED or hours > MAX_HOURS_WORKED:
        raise ValidationError(f"{field_name} must be between {MIN_HOURS_WORKED} and {MAX_HOURS_WORKED}")
    return hours


def parse_positive_id(value, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return parsed
