from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"The {field_name} field must match the format Y-m-d.", field=field_name)


def parse_hhmm(value: str, field_name: str) -> time:
    """Parse HH:MM string into time (seconds are not accepted)."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"The {field_name} field must match the format H:i.", field=field_name)


def format_time(value: Optional[time], fmt: str = "%H:%M:%S") -> Optional[str]:
    return value.strftime(fmt) if value is not None else None


def seconds_between(start: time, end: time) -> int:
    """Seconds from start to end on the same day (negative when end < start)."""
    anchor = date(2000, 1, 1)
    return int((datetime.combine(anchor, end) - datetime.combine(anchor, start)).total_seconds())


def add_minutes(value: time, minutes: int) -> time:
    anchor = date(2000, 1, 1)
    shifted = datetime.combine(anchor, value) + timedelta(minutes=minutes)
    if shifted.date() != anchor:
        return time(23, 59, 59)
    return shifted.time()


def round_hours(seconds: int) -> Decimal:
    """Convert seconds to hours rounded half-up to 2 decimal places."""
    return (Decimal(seconds) / Decimal(3600)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
