"""
Record Filters & Totals

Selection and reduction of raw records. Dates are matched by calendar
value only; inputs are never mutated.
"""

from decimal import Decimal
from typing import Iterable

from tripledger.analytics.bucketing import DateLike, as_date, same_month
from tripledger.models.records import Expense, ExpenseCategory, Trip


ZERO = Decimal("0")


def trip_total(trip: Trip) -> Decimal:
    """Fare plus tip for a single trip."""
    return trip.fare_amount + trip.tip_amount


def total_income(trips: Iterable[Trip]) -> Decimal:
    return sum((trip_total(trip) for trip in trips), ZERO)


def total_expense_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def total_distance(trips: Iterable[Trip]) -> float:
    """Sum of trip distances in kilometers."""
    return sum((trip.distance for trip in trips), 0.0)


def total_fuel_volume(expenses: Iterable[Expense]) -> float:
    """Sum of recorded fuel volumes in liters. Missing volumes count as zero."""
    return sum((expense.volume or 0.0 for expense in expenses), 0.0)


# =============================================================================
# FILTERS
# =============================================================================

def trips_on(trips: Iterable[Trip], day: DateLike) -> list[Trip]:
    day = as_date(day)
    return [trip for trip in trips if trip.date == day]


def expenses_on(expenses: Iterable[Expense], day: DateLike) -> list[Expense]:
    day = as_date(day)
    return [expense for expense in expenses if expense.date == day]


def trips_between(
    trips: Iterable[Trip],
    start: DateLike,
    end: DateLike,
) -> list[Trip]:
    """Trips dated from start to end, inclusive."""
    start, end = as_date(start), as_date(end)
    return [trip for trip in trips if start <= trip.date <= end]


def expenses_between(
    expenses: Iterable[Expense],
    start: DateLike,
    end: DateLike,
) -> list[Expense]:
    start, end = as_date(start), as_date(end)
    return [expense for expense in expenses if start <= expense.date <= end]


def trips_in_month(trips: Iterable[Trip], reference: DateLike) -> list[Trip]:
    """Trips in the same month and year as the reference date."""
    reference = as_date(reference)
    return [trip for trip in trips if same_month(trip.date, reference)]


def expenses_in_month(
    expenses: Iterable[Expense],
    reference: DateLike,
) -> list[Expense]:
    reference = as_date(reference)
    return [expense for expense in expenses if same_month(expense.date, reference)]


def fuel_expenses(expenses: Iterable[Expense]) -> list[Expense]:
    return [e for e in expenses if e.category == ExpenseCategory.FUEL]
