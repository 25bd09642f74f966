"""
Summary Builder

Daily, weekly and monthly summaries, each level built from the one below:

    trips/expenses --> DailySummary (one date)
                   --> WeeklySummary (7 daily summaries, Sunday..Saturday)
                   --> MonthlySummary (one weekly summary per overlapping week)

DESIGN DECISION: A monthly summary builds its weeks from the records of
that month only. Days of a boundary week that fall in the previous or
next month therefore show zero activity inside a month view, and the
monthly totals equal the sum of its weekly totals. The identity is exact
for the Decimal amounts and the trip count; total_distance is a float
summed in a different order, so it agrees only up to float rounding.
A week asked for directly through weekly_summary() is always globally
accurate.
"""

from typing import Sequence

from tripledger.analytics.bucketing import (
    DateLike,
    as_date,
    enumerate_dates,
    get_month_year,
    get_week_range,
    month_week_starts,
)
from tripledger.analytics.totals import (
    ZERO,
    expenses_in_month,
    expenses_on,
    total_distance,
    total_expense_amount,
    total_income,
    trips_in_month,
    trips_on,
)
from tripledger.models.records import Expense, Trip
from tripledger.models.summary import (
    DailySummary,
    MonthlySummary,
    WeeklySummary,
)


def daily_summary(
    trips: Sequence[Trip],
    expenses: Sequence[Expense],
    day: DateLike,
) -> DailySummary:
    """Totals for the trips and expenses dated exactly `day`."""
    day = as_date(day)
    day_trips = trips_on(trips, day)
    income = total_income(day_trips)
    spent = total_expense_amount(expenses_on(expenses, day))

    return DailySummary(
        date=day,
        total_income=income,
        total_expenses=spent,
        net_profit=income - spent,
        total_trips=len(day_trips),
        total_distance=total_distance(day_trips),
    )


def weekly_summary(
    trips: Sequence[Trip],
    expenses: Sequence[Expense],
    any_day_in_week: DateLike,
) -> WeeklySummary:
    """
    Summary for the Sunday-to-Saturday week containing `any_day_in_week`.

    The weekly totals are reduced from the seven daily summaries, never
    from the raw records, so the additive identity holds by construction.
    """
    week = get_week_range(any_day_in_week)
    days = [
        daily_summary(trips, expenses, day)
        for day in enumerate_dates(week.start, week.end)
    ]

    income = sum((d.total_income for d in days), ZERO)
    spent = sum((d.total_expenses for d in days), ZERO)

    return WeeklySummary(
        week_start=week.start,
        week_end=week.end,
        total_income=income,
        total_expenses=spent,
        net_profit=income - spent,
        total_trips=sum(d.total_trips for d in days),
        total_distance=sum((d.total_distance for d in days), 0.0),
        daily_summaries=days,
    )


def monthly_summary(
    trips: Sequence[Trip],
    expenses: Sequence[Expense],
    any_day_in_month: DateLike,
) -> MonthlySummary:
    """
    Summary for the calendar month containing `any_day_in_month`.

    Monthly totals come from the month's records directly. The embedded
    weekly summaries reuse those same filtered records.
    """
    reference = as_date(any_day_in_month)
    label = get_month_year(reference)

    month_trips = trips_in_month(trips, reference)
    month_expenses = expenses_in_month(expenses, reference)

    weeks = [
        weekly_summary(month_trips, month_expenses, start)
        for start in month_week_starts(reference)
    ]

    income = total_income(month_trips)
    spent = total_expense_amount(month_expenses)

    return MonthlySummary(
        month=label.month,
        year=label.year,
        total_income=income,
        total_expenses=spent,
        net_profit=income - spent,
        total_trips=len(month_trips),
        total_distance=total_distance(month_trips),
        weekly_summaries=weeks,
    )
