"""
Tests for calendar bucketing: weeks, months and date parsing.
"""

import pytest
from datetime import date, datetime

from tripledger.analytics.bucketing import (
    MalformedDateError,
    as_date,
    day_of_week_index,
    enumerate_dates,
    get_day_of_week,
    get_month_year,
    get_week_range,
    month_bounds,
    month_week_starts,
)


class TestAsDate:
    """Tests for reference date normalization."""

    def test_accepts_date(self):
        assert as_date(date(2025, 1, 15)) == date(2025, 1, 15)

    def test_accepts_iso_string(self):
        assert as_date("2025-01-15") == date(2025, 1, 15)

    def test_accepts_datetime(self):
        assert as_date(datetime(2025, 1, 15, 23, 59)) == date(2025, 1, 15)

    @pytest.mark.parametrize("value", ["2025-02-30", "15/01/2025", "", "yesterday"])
    def test_malformed_string_fails_fast(self, value):
        with pytest.raises(MalformedDateError) as exc_info:
            as_date(value)
        assert exc_info.value.value == value

    def test_malformed_date_error_is_value_error(self):
        with pytest.raises(ValueError):
            as_date("2025-13-01")

    def test_non_date_type_rejected(self):
        with pytest.raises(MalformedDateError):
            as_date(20250115)


class TestDayOfWeek:

    def test_sunday_is_zero(self):
        assert day_of_week_index("2025-01-12") == 0
        assert get_day_of_week("2025-01-12") == "Sunday"

    def test_saturday_is_six(self):
        assert day_of_week_index("2025-01-18") == 6
        assert get_day_of_week("2025-01-18") == "Saturday"

    def test_wednesday(self):
        assert get_day_of_week(date(2025, 1, 1)) == "Wednesday"


class TestWeekRange:
    """Tests for Sunday-to-Saturday week boundaries."""

    def test_midweek_date(self):
        week = get_week_range("2025-01-15")
        assert week.start == date(2025, 1, 12)
        assert week.end == date(2025, 1, 18)

    def test_sunday_starts_its_own_week(self):
        week = get_week_range("2025-01-12")
        assert week.start == date(2025, 1, 12)

    def test_saturday_ends_its_own_week(self):
        week = get_week_range("2025-01-18")
        assert week.start == date(2025, 1, 12)
        assert week.end == date(2025, 1, 18)

    def test_week_spanning_year_boundary(self):
        week = get_week_range("2025-01-01")
        assert week.start == date(2024, 12, 29)
        assert week.end == date(2025, 1, 4)

    def test_week_is_seven_days(self):
        week = get_week_range("2024-02-29")
        assert (week.end - week.start).days == 6


class TestEnumerateDates:

    def test_inclusive_range(self):
        dates = enumerate_dates("2025-01-30", "2025-02-02")
        assert dates == [
            date(2025, 1, 30),
            date(2025, 1, 31),
            date(2025, 2, 1),
            date(2025, 2, 2),
        ]

    def test_single_day(self):
        assert enumerate_dates("2025-01-01", "2025-01-01") == [date(2025, 1, 1)]

    def test_start_after_end_is_empty(self):
        assert enumerate_dates("2025-01-05", "2025-01-01") == []

    def test_leap_day_included(self):
        assert date(2024, 2, 29) in enumerate_dates("2024-02-28", "2024-03-01")


class TestMonths:

    def test_month_year_label(self):
        label = get_month_year("2025-01-15")
        assert label.month == "January"
        assert label.year == "2025"

    def test_month_bounds_december(self):
        assert month_bounds("2024-12-10") == (date(2024, 12, 1), date(2024, 12, 31))

    def test_month_bounds_leap_february(self):
        assert month_bounds("2024-02-10") == (date(2024, 2, 1), date(2024, 2, 29))

    def test_january_2025_has_five_week_windows(self):
        """Jan 1st 2025 is a Wednesday, so the first window starts in December."""
        starts = month_week_starts("2025-01-20")
        assert starts == [
            date(2024, 12, 29),
            date(2025, 1, 5),
            date(2025, 1, 12),
            date(2025, 1, 19),
            date(2025, 1, 26),
        ]

    def test_month_starting_sunday_with_exact_weeks(self):
        """February 2026 starts on a Sunday and spans exactly four weeks."""
        starts = month_week_starts("2026-02-14")
        assert starts == [
            date(2026, 2, 1),
            date(2026, 2, 8),
            date(2026, 2, 15),
            date(2026, 2, 22),
        ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
