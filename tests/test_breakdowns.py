"""
Tests for breakdown analyzers: categories, payment methods, hours, weekdays.
"""

import pytest
from decimal import Decimal

from tripledger.analytics.breakdowns import (
    day_of_week_analysis,
    expense_category_breakdown,
    payment_method_breakdown,
    time_of_day_analysis,
)
from tripledger.models.records import ExpenseCategory, PaymentMethod


class TestExpenseCategoryBreakdown:
    """Tests for spending by category."""

    def test_every_category_present_once(self, make_expense):
        breakdown = expense_category_breakdown([make_expense()])
        assert len(breakdown) == len(ExpenseCategory)
        assert {item.category for item in breakdown} == set(ExpenseCategory)

    def test_sorted_by_amount_descending(self, make_expense):
        expenses = [
            make_expense(category="food", amount="12.99", volume=None),
            make_expense(category="fuel", amount="45.80"),
            make_expense(category="parking", amount="3.00", volume=None),
        ]
        breakdown = expense_category_breakdown(expenses)

        assert [item.category for item in breakdown[:3]] == [
            ExpenseCategory.FUEL,
            ExpenseCategory.FOOD,
            ExpenseCategory.PARKING,
        ]
        assert breakdown[0].amount == Decimal("45.80")
        amounts = [item.amount for item in breakdown]
        assert amounts == sorted(amounts, reverse=True)

    def test_amounts_accumulate_per_category(self, make_expense):
        expenses = [
            make_expense(category="tolls", amount="2.50", volume=None),
            make_expense(category="tolls", amount="2.50", volume=None),
        ]
        tolls = expense_category_breakdown(expenses)[0]
        assert tolls.category == ExpenseCategory.TOLLS
        assert tolls.amount == Decimal("5.00")
        assert tolls.percentage == 100

    def test_percentages_sum_to_100(self, make_expense):
        expenses = [
            make_expense(category="fuel", amount="45.80"),
            make_expense(category="food", amount="12.99", volume=None),
            make_expense(category="cleaning", amount="7.00", volume=None),
        ]
        breakdown = expense_category_breakdown(expenses)
        assert sum(item.percentage for item in breakdown) == pytest.approx(100)

    def test_no_expenses_all_zero(self):
        breakdown = expense_category_breakdown([])
        assert len(breakdown) == 9
        assert all(item.amount == 0 for item in breakdown)
        assert all(item.percentage == 0 for item in breakdown)

    def test_ties_keep_fixed_category_order(self):
        breakdown = expense_category_breakdown([])
        assert [item.category for item in breakdown] == list(ExpenseCategory)

    def test_zero_amount_expenses_do_not_divide_by_zero(self, make_expense):
        breakdown = expense_category_breakdown([make_expense(amount="0")])
        assert all(item.percentage == 0 for item in breakdown)


class TestPaymentMethodBreakdown:

    def test_income_and_counts_per_method(self, make_trip):
        trips = [
            make_trip(payment_method="card"),
            make_trip(payment_method="cash", fare_amount="12.75", tip_amount="2.00"),
            make_trip(payment_method="card", fare_amount="10.00", tip_amount="0"),
        ]
        breakdown = payment_method_breakdown(trips)

        assert [item.method for item in breakdown] == [
            PaymentMethod.CARD,
            PaymentMethod.CASH,
            PaymentMethod.APP,
        ]
        card, cash, app = breakdown
        assert card.amount == Decimal("40.50")
        assert card.trip_count == 2
        assert cash.amount == Decimal("14.75")
        assert cash.trip_count == 1
        assert app.amount == 0
        assert app.trip_count == 0
        assert app.percentage == 0
        assert card.percentage + cash.percentage == pytest.approx(100)

    def test_no_trips(self):
        breakdown = payment_method_breakdown([])
        assert len(breakdown) == 3
        assert all(item.percentage == 0 for item in breakdown)


class TestTimeOfDayAnalysis:

    def test_all_hours_present(self):
        analysis = time_of_day_analysis([])
        assert len(analysis) == 24
        assert sorted(item.hour for item in analysis) == list(range(24))
        assert all(item.percentage == 0 for item in analysis)

    def test_grouped_by_start_hour(self, make_trip):
        trips = [
            make_trip(start_time="08:30", end_time="09:15"),
            make_trip(start_time="08:59", end_time="09:30"),
            make_trip(start_time="23:50", end_time="00:10", fare_amount="10", tip_amount="0"),
        ]
        analysis = time_of_day_analysis(trips)

        busiest = analysis[0]
        assert busiest.hour == 8
        assert busiest.trip_count == 2
        assert busiest.total_income == Decimal("61.00")
        assert busiest.percentage == pytest.approx(200 / 3)

        late = analysis[1]
        assert late.hour == 23
        assert late.trip_count == 1

    def test_percentage_is_share_of_trip_count(self, make_trip):
        trips = [
            make_trip(start_time="07:00", fare_amount="100.00"),
            make_trip(start_time="09:00", fare_amount="1.00"),
        ]
        analysis = time_of_day_analysis(trips)
        assert analysis[0].percentage == pytest.approx(50)
        assert analysis[1].percentage == pytest.approx(50)


class TestDayOfWeekAnalysis:

    def test_all_days_present(self):
        analysis = day_of_week_analysis([])
        assert len(analysis) == 7
        assert [item.day_name for item in analysis][0] == "Sunday"

    def test_grouped_by_weekday(self, make_trip):
        trips = [
            make_trip(date="2025-01-15"),
            make_trip(date="2025-01-22"),
            make_trip(date="2025-01-12"),
        ]
        analysis = day_of_week_analysis(trips)

        assert analysis[0].day_name == "Wednesday"
        assert analysis[0].day_index == 3
        assert analysis[0].trip_count == 2
        assert analysis[1].day_name == "Sunday"
        assert analysis[1].day_index == 0
        assert sum(item.percentage for item in analysis) == pytest.approx(100)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
