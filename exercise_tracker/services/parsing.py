"""
Exercise Tracker — Input Coercion & Date Rendering
====================================================

What:  Pure helpers that turn raw request values into storable ones and
       render stored dates back out.
How:   Parsers raise ValueError; the services decide which application
       exception that becomes (InternalFailure for dates and durations,
       ClientInputError for limits).
"""

import math
from datetime import date, datetime, timezone
from typing import Optional, Union

# "Mon May 01 2023"
CALENDAR_FORMAT = "%a %b %d %Y"

# Range of exercises.duration (Integer column, 32-bit signed)
DURATION_MIN = -(2**31)
DURATION_MAX = 2**31 - 1

# Largest value a SQL LIMIT accepts (64-bit signed)
LIMIT_MAX = 2**63 - 1


def today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def parse_calendar_date(value: str) -> date:
    """
    Parse an ISO 8601 date or datetime into a calendar date.

    Accepts "2023-05-01" as well as full datetimes such as
    "2023-05-01T23:30:00+02:00"; aware datetimes are converted to UTC
    before the date is taken.

    Raises:
        ValueError: value is not ISO 8601
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def format_calendar_date(value: date) -> str:
    return value.strftime(CALENDAR_FORMAT)


def coerce_duration(value: Union[int, float, str]) -> int:
    """
    Parse a duration permissively into whole minutes.

    Integers pass through; floats and numeric strings ("30", " 45 ", "30.5",
    "1e2") are truncated toward zero. Booleans count as 1 and 0.

    Raises:
        ValueError: value is not a finite number, or does not fit the
            duration column
    """
    if isinstance(value, int):
        minutes = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            minutes = int(text)
        except ValueError:
            minutes = _truncate(float(text), value)
    else:
        minutes = _truncate(float(value), value)

    if not DURATION_MIN <= minutes <= DURATION_MAX:
        raise ValueError(f"duration out of range, got {value!r}")
    return minutes


def _truncate(number: float, original) -> int:
    if not math.isfinite(number):
        raise ValueError(f"duration must be finite, got {original!r}")
    return int(number)


def parse_limit(value: Optional[str]) -> Optional[int]:
    """
    Parse the `limit` query parameter.

    Absent, empty or zero means unbounded (None). A negative limit is read
    as its absolute value. A limit larger than any LIMIT the store accepts
    also means unbounded.

    Raises:
        ValueError: value is not an integer
    """
    if value is None or not value.strip():
        return None
    limit = abs(int(value.strip()))
    if limit > LIMIT_MAX:
        return None
    return limit or None
