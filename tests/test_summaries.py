"""
Tests for daily, weekly and monthly summaries.
"""

import pytest
from datetime import date
from decimal import Decimal

from tripledger.analytics.bucketing import MalformedDateError
from tripledger.analytics.summaries import (
    daily_summary,
    monthly_summary,
    weekly_summary,
)


class TestDailySummary:
    """Tests for the single-day summary."""

    def test_one_trip_one_expense(self, make_trip, make_expense):
        """A fare of 25.50 plus a 5.00 tip against a 45.80 fuel bill."""
        trips = [make_trip(date="2025-01-01")]
        expenses = [make_expense(date="2025-01-01", amount="45.80")]

        summary = daily_summary(trips, expenses, "2025-01-01")

        assert summary.date == date(2025, 1, 1)
        assert summary.total_income == Decimal("30.50")
        assert summary.total_expenses == Decimal("45.80")
        assert summary.net_profit == Decimal("-15.30")
        assert summary.total_trips == 1
        assert summary.total_distance == 14

    def test_empty_day_is_all_zero(self, make_trip):
        summary = daily_summary([make_trip(date="2025-01-01")], [], "2025-01-02")
        assert summary.total_income == 0
        assert summary.total_expenses == 0
        assert summary.net_profit == 0
        assert summary.total_trips == 0
        assert summary.total_distance == 0

    def test_only_exact_date_counts(self, make_trip):
        trips = [
            make_trip(date="2024-12-31"),
            make_trip(date="2025-01-01"),
            make_trip(date="2025-01-02"),
        ]
        assert daily_summary(trips, [], date(2025, 1, 1)).total_trips == 1

    def test_inputs_not_mutated(self, make_trip, make_expense):
        trips = [make_trip(), make_trip(date="2025-01-03")]
        expenses = [make_expense()]
        before = (list(trips), list(expenses))
        daily_summary(trips, expenses, "2025-01-01")
        assert (trips, expenses) == before

    def test_malformed_reference_date(self):
        with pytest.raises(MalformedDateError):
            daily_summary([], [], "2025-01-32")


class TestWeeklySummary:
    """Tests for the Sunday-to-Saturday week summary."""

    def test_week_bounds_and_days(self):
        summary = weekly_summary([], [], "2025-01-15")
        assert summary.week_start == date(2025, 1, 12)
        assert summary.week_end == date(2025, 1, 18)
        assert [d.date for d in summary.daily_summaries] == [
            date(2025, 1, day) for day in range(12, 19)
        ]

    def test_totals_equal_sum_of_days(self, make_trip, make_expense):
        trips = [
            make_trip(date="2025-01-12", fare_amount="10.10", tip_amount="0.20", distance=3.3),
            make_trip(date="2025-01-14", fare_amount="20.20", tip_amount="1.00", distance=7.7),
            make_trip(date="2025-01-18", fare_amount="0.10", tip_amount="0.20", distance=0.1),
            make_trip(date="2025-01-19", fare_amount="99.00"),
        ]
        expenses = [
            make_expense(date="2025-01-13", amount="12.34"),
            make_expense(date="2025-01-11", amount="50.00"),
        ]

        summary = weekly_summary(trips, expenses, "2025-01-16")
        days = summary.daily_summaries

        assert summary.total_income == sum((d.total_income for d in days), Decimal("0"))
        assert summary.total_expenses == sum((d.total_expenses for d in days), Decimal("0"))
        assert summary.net_profit == sum((d.net_profit for d in days), Decimal("0"))
        assert summary.total_trips == sum(d.total_trips for d in days)
        assert summary.total_distance == pytest.approx(sum(d.total_distance for d in days))

        assert summary.total_income == Decimal("31.80")
        assert summary.total_expenses == Decimal("12.34")
        assert summary.net_profit == Decimal("19.46")
        assert summary.total_trips == 3

    def test_week_crossing_year_is_globally_accurate(self, make_trip):
        """A week asked for directly counts records on both sides of the new year."""
        trips = [make_trip(date="2024-12-30"), make_trip(date="2025-01-02")]
        summary = weekly_summary(trips, [], "2025-01-01")
        assert summary.total_trips == 2


class TestMonthlySummary:
    """Tests for the calendar month summary."""

    def test_label_and_week_count(self):
        summary = monthly_summary([], [], "2025-01-20")
        assert summary.month == "January"
        assert summary.year == "2025"
        assert len(summary.weekly_summaries) == 5
        assert summary.weekly_summaries[0].week_start == date(2024, 12, 29)

    def test_only_records_in_month(self, make_trip, make_expense):
        trips = [
            make_trip(date="2024-12-31"),
            make_trip(date="2025-01-01"),
            make_trip(date="2025-01-31"),
            make_trip(date="2025-02-01"),
        ]
        expenses = [
            make_expense(date="2025-01-15", amount="10.00"),
            make_expense(date="2025-02-01", amount="99.00"),
        ]

        summary = monthly_summary(trips, expenses, "2025-01-10")

        assert summary.total_trips == 2
        assert summary.total_income == Decimal("61.00")
        assert summary.total_expenses == Decimal("10.00")
        assert summary.net_profit == Decimal("51.00")

    def test_same_month_other_year_excluded(self, make_trip):
        trips = [make_trip(date="2024-01-15"), make_trip(date="2025-01-15")]
        assert monthly_summary(trips, [], "2025-01-01").total_trips == 1

    def test_boundary_days_outside_month_show_zero(self, make_trip):
        """The first window starts Dec 29, but December trips stay out of January."""
        trips = [make_trip(date="2024-12-30"), make_trip(date="2025-01-02")]

        first_week = monthly_summary(trips, [], "2025-01-15").weekly_summaries[0]

        assert first_week.week_start == date(2024, 12, 29)
        assert first_week.total_trips == 1
        december_days = [d for d in first_week.daily_summaries if d.date.month == 12]
        assert all(d.total_trips == 0 for d in december_days)

    def test_totals_equal_sum_of_weeks(self, make_trip, make_expense):
        trips = [
            make_trip(date="2024-12-29"),
            make_trip(date="2025-01-01", fare_amount="7.25", tip_amount="0"),
            make_trip(date="2025-01-18", distance=2.5),
            make_trip(date="2025-01-31", fare_amount="3.33", tip_amount="0.01"),
            make_trip(date="2025-02-01"),
        ]
        expenses = [
            make_expense(date="2025-01-04", amount="8.88"),
            make_expense(date="2025-01-26", amount="1.11"),
            make_expense(date="2025-02-01", amount="40.00"),
        ]

        summary = monthly_summary(trips, expenses, "2025-01-01")
        weeks = summary.weekly_summaries

        assert summary.total_income == sum((w.total_income for w in weeks), Decimal("0"))
        assert summary.total_expenses == sum((w.total_expenses for w in weeks), Decimal("0"))
        assert summary.net_profit == sum((w.net_profit for w in weeks), Decimal("0"))
        assert summary.total_trips == sum(w.total_trips for w in weeks)
        assert summary.total_distance == pytest.approx(sum(w.total_distance for w in weeks))

    def test_month_starting_on_sunday(self):
        summary = monthly_summary([], [], date(2026, 2, 1))
        assert summary.month == "February"
        assert len(summary.weekly_summaries) == 4
        assert summary.weekly_summaries[-1].week_end == date(2026, 2, 28)

    def test_empty_month(self):
        summary = monthly_summary([], [], "2025-03-15")
        assert summary.total_income == 0
        assert summary.net_profit == 0
        assert all(w.total_trips == 0 for w in summary.weekly_summaries)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
