from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import BUSINESS_TZ
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are read as business time."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid ISO-8601 timestamp: {value!r}")
    return to_business(parsed)


def to_business(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=BUSINESS_TZ)
    return value.astimezone(BUSINESS_TZ)


def business_date(value: datetime) -> date:
    """Calendar date of ``value`` in the business timezone (not UTC)."""
    return to_business(value).date()


def at_business_time(work_date: date, t: time) -> datetime:
    return datetime.combine(work_date, t, tzinfo=BUSINESS_TZ)


def format_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return to_business(value).isoformat()
