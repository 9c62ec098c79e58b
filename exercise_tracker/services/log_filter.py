"""
Exercise Tracker — Log Query Value Type
=========================================

What:  `LogFilter`, the explicit form of GET /api/users/{id}/logs's query:
       optional inclusive date bounds plus an optional row limit.
How:   Built once from the raw query strings (`from_query`), then applied to
       a SQLAlchemy select (`apply`). The service never inspects it further.

Filtering rules:
    from and to  → from <= date <= to
    from only    → date >= from
    to only      → date <= to
    neither      → every exercise of the user
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import Select

from exercise_tracker.exceptions import ClientInputError, InternalFailure
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.services.parsing import parse_calendar_date, parse_limit


@dataclass(frozen=True)
class LogFilter:
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    limit: Optional[int] = None

    @classmethod
    def from_query(
        cls,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "LogFilter":
        """
        Build a filter from raw query-string values.

        Raises:
            InternalFailure: a date bound is not ISO 8601
            ClientInputError: limit is not an integer
        """
        return cls(
            date_from=_parse_bound("from", date_from),
            date_to=_parse_bound("to", date_to),
            limit=_parse_limit(limit),
        )

    def apply(self, stmt: Select) -> Select:
        """Add the date bounds and limit to a select over Exercise."""
        if self.date_from is not None:
            stmt = stmt.where(Exercise.date >= self.date_from)
        if self.date_to is not None:
            stmt = stmt.where(Exercise.date <= self.date_to)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        return stmt


def _parse_bound(name: str, value: Optional[str]) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return parse_calendar_date(value)
    except ValueError as e:
        raise InternalFailure(
            context={"parameter": name, "value": value, "original_error": str(e)},
        ) from e


def _parse_limit(value: Optional[str]) -> Optional[int]:
    try:
        return parse_limit(value)
    except ValueError as e:
        raise ClientInputError(
            message="limit must be an integer",
            field="limit",
            context={"value": value},
        ) from e
