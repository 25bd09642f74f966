"""
Breakdown Analyzers

Distributions over fixed buckets. Every bucket is always present, even
with zero activity, and results are sorted descending by the measured
value. Ties keep the fixed bucket order (the sort is stable).

Percentages are 0 when the relevant total is 0 - an empty ledger still
renders, it never divides by zero.
"""

from decimal import Decimal
from typing import Sequence

from tripledger.analytics.bucketing import DAY_NAMES, day_of_week_index
from tripledger.analytics.totals import (
    ZERO,
    total_expense_amount,
    total_income,
    trip_total,
)
from tripledger.models.records import (
    Expense,
    ExpenseCategory,
    PaymentMethod,
    Trip,
)
from tripledger.models.summary import (
    CategoryBreakdown,
    DayOfWeekAnalysis,
    PaymentMethodBreakdown,
    TimeOfDayAnalysis,
)


def _share(part: Decimal, whole: Decimal) -> float:
    if whole <= 0:
        return 0.0
    return float(part / whole * 100)


def _count_share(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return count / total * 100


def expense_category_breakdown(
    expenses: Sequence[Expense],
) -> list[CategoryBreakdown]:
    """Amount and share of total expenses for each of the fixed categories."""
    total = total_expense_amount(expenses)
    amounts = {category: ZERO for category in ExpenseCategory}
    for expense in expenses:
        amounts[expense.category] += expense.amount

    breakdown = [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=_share(amount, total),
        )
        for category, amount in amounts.items()
    ]
    return sorted(breakdown, key=lambda item: item.amount, reverse=True)


def payment_method_breakdown(
    trips: Sequence[Trip],
) -> list[PaymentMethodBreakdown]:
    """Income, share of income and trip count per payment method."""
    total = total_income(trips)
    amounts = {method: ZERO for method in PaymentMethod}
    counts = {method: 0 for method in PaymentMethod}
    for trip in trips:
        amounts[trip.payment_method] += trip_total(trip)
        counts[trip.payment_method] += 1

    breakdown = [
        PaymentMethodBreakdown(
            method=method,
            amount=amounts[method],
            percentage=_share(amounts[method], total),
            trip_count=counts[method],
        )
        for method in PaymentMethod
    ]
    return sorted(breakdown, key=lambda item: item.amount, reverse=True)


def time_of_day_analysis(trips: Sequence[Trip]) -> list[TimeOfDayAnalysis]:
    """
    Trips grouped by the hour of their start time.

    All 24 hours are returned. Percentage is the share of the trip
    count, not of income.
    """
    counts = [0] * 24
    income = [ZERO] * 24
    for trip in trips:
        hour = trip.start_time.hour
        counts[hour] += 1
        income[hour] += trip_total(trip)

    analysis = [
        TimeOfDayAnalysis(
            hour=hour,
            trip_count=counts[hour],
            total_income=income[hour],
            percentage=_count_share(counts[hour], len(trips)),
        )
        for hour in range(24)
    ]
    return sorted(analysis, key=lambda item: item.trip_count, reverse=True)


def day_of_week_analysis(trips: Sequence[Trip]) -> list[DayOfWeekAnalysis]:
    """Trips grouped by day of the week of their date (0 = Sunday)."""
    counts = [0] * 7
    income = [ZERO] * 7
    for trip in trips:
        index = day_of_week_index(trip.date)
        counts[index] += 1
        income[index] += trip_total(trip)

    analysis = [
        DayOfWeekAnalysis(
            day_name=DAY_NAMES[index],
            day_index=index,
            trip_count=counts[index],
            total_income=income[index],
            percentage=_count_share(counts[index], len(trips)),
        )
        for index in range(7)
    ]
    return sorted(analysis, key=lambda item: item.trip_count, reverse=True)
