"""
Exercise Tracker — Coercion & Date Rendering Tests
====================================================

What:  Tests for the permissive parsers and the calendar-string renderer.
"""

from datetime import date

import pytest

from exercise_tracker.services.parsing import (
    DURATION_MAX,
    DURATION_MIN,
    LIMIT_MAX,
    coerce_duration,
    format_calendar_date,
    parse_calendar_date,
    parse_limit,
)


class TestParseCalendarDate:
    """ISO 8601 input to calendar date."""

    def test_plain_iso_date(self):
        """YYYY-MM-DD parses directly."""
        assert parse_calendar_date("2023-05-01") == date(2023, 5, 1)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_calendar_date("  2023-05-01 ") == date(2023, 5, 1)

    def test_naive_datetime_keeps_its_date(self):
        """A datetime without offset keeps its own calendar day."""
        assert parse_calendar_date("2023-05-01T23:59:00") == date(2023, 5, 1)

    def test_aware_datetime_is_converted_to_utc(self):
        """An offset datetime is moved to UTC before the day is taken."""
        # 01:30 at +02:00 is still the previous day in UTC
        assert parse_calendar_date("2023-05-02T01:30:00+02:00") == date(2023, 5, 1)

    def test_zulu_suffix(self):
        assert parse_calendar_date("2023-05-01T10:00:00Z") == date(2023, 5, 1)

    @pytest.mark.parametrize("value", ["not-a-date", "2023-13-01", "May 1st", "2023-02-30"])
    def test_unparseable_raises(self, value):
        """Anything that is not ISO 8601 raises ValueError."""
        with pytest.raises(ValueError):
            parse_calendar_date(value)


class TestFormatCalendarDate:
    """Calendar date to "Mon May 01 2023"."""

    def test_fixed_format(self):
        assert format_calendar_date(date(2023, 5, 1)) == "Mon May 01 2023"

    def test_single_digit_day_is_zero_padded(self):
        """Days below 10 are padded to two digits."""
        assert format_calendar_date(date(2024, 1, 1)) == "Mon Jan 01 2024"


class TestCoerceDuration:
    """Permissive duration parsing into whole minutes."""

    def test_int_passes_through(self):
        assert coerce_duration(30) == 30

    def test_numeric_string(self):
        """A digit string becomes an int."""
        assert coerce_duration("45") == 45

    def test_padded_string(self):
        assert coerce_duration(" 45 ") == 45

    def test_float_is_truncated(self):
        """Fractions are dropped, not rounded."""
        assert coerce_duration(30.9) == 30

    def test_float_string_is_truncated(self):
        assert coerce_duration("30.5") == 30

    def test_exponent_string(self):
        assert coerce_duration("1e2") == 100

    def test_booleans_count_as_numbers(self):
        """True and False read as 1 and 0, and come back as plain ints."""
        assert coerce_duration(True) == 1
        assert type(coerce_duration(False)) is int

    def test_column_bounds_are_accepted(self):
        """The extremes of the duration column still fit."""
        assert coerce_duration(DURATION_MAX) == DURATION_MAX
        assert coerce_duration(str(DURATION_MIN)) == DURATION_MIN

    @pytest.mark.parametrize(
        "value",
        [DURATION_MAX + 1, DURATION_MIN - 1, 10**20, "99999999999999999999", 1e300, "1e300"],
    )
    def test_out_of_range_raises(self, value):
        """A duration that would not fit the column raises ValueError."""
        with pytest.raises(ValueError):
            coerce_duration(value)

    @pytest.mark.parametrize("value", ["abc", "30 minutes", "nan", "inf"])
    def test_non_numeric_raises(self, value):
        """Non-numeric and non-finite values raise ValueError."""
        with pytest.raises(ValueError):
            coerce_duration(value)


class TestParseLimit:
    """The limit query parameter."""

    @pytest.mark.parametrize("value", [None, "", "   ", "0"])
    def test_unbounded(self, value):
        """Absent, blank and zero all mean no cap."""
        assert parse_limit(value) is None

    def test_positive(self):
        assert parse_limit("2") == 2

    def test_negative_uses_absolute_value(self):
        """-3 caps at three entries."""
        assert parse_limit("-3") == 3

    def test_largest_accepted_limit(self):
        assert parse_limit(str(LIMIT_MAX)) == LIMIT_MAX

    @pytest.mark.parametrize("value", [str(LIMIT_MAX + 1), "99999999999999999999", "-99999999999999999999"])
    def test_oversized_limit_is_unbounded(self, value):
        """A limit past what the store accepts means no cap."""
        assert parse_limit(value) is None

    @pytest.mark.parametrize("value", ["two", "2.5"])
    def test_non_integer_raises(self, value):
        """Anything but an integer raises ValueError."""
        with pytest.raises(ValueError):
            parse_limit(value)
