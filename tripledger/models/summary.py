"""
Derived Summary Models

Everything in this module is COMPUTED from trips and expenses.
None of it is persisted - summaries are rebuilt on demand from the
current records, so they can never drift out of sync with them.

Currency amounts are Decimal (exact sums, exact net profit).
Distances, volumes and percentages are float.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from tripledger.models.records import ExpenseCategory, PaymentMethod


class PeriodTotals(BaseModel):
    """Aggregate fields shared by daily, weekly and monthly summaries."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    total_trips: int = Field(default=0, ge=0)
    total_distance: float = Field(
        default=0.0,
        description="Total distance in kilometers"
    )


class DailySummary(PeriodTotals):
    """Totals for one calendar date."""

    date: dt.date


class WeeklySummary(PeriodTotals):
    """
    Totals for one Sunday-to-Saturday week.

    INVARIANT: every total equals the sum of the seven daily summaries.
    """

    week_start: dt.date
    week_end: dt.date
    daily_summaries: list[DailySummary] = Field(default_factory=list)


class MonthlySummary(PeriodTotals):
    """
    Totals for one calendar month.

    Weekly summaries cover every week that overlaps the month, so the
    first and last may include days of the neighbouring months. Those
    days always contribute zero: the weeks are built from the records
    of this month only.
    """

    month: str = Field(..., description="Long month name, e.g. 'January'")
    year: str = Field(..., description="Four-digit year")
    weekly_summaries: list[WeeklySummary] = Field(default_factory=list)


# =============================================================================
# CALENDAR VALUES
# =============================================================================

class WeekRange(BaseModel):
    """Inclusive Sunday-to-Saturday range."""
    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date


class MonthYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    year: str


# =============================================================================
# BREAKDOWNS
# =============================================================================

class CategoryBreakdown(BaseModel):
    """Share of total expenses spent in one category."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    amount: Decimal
    percentage: float = Field(..., ge=0, le=100)


class PaymentMethodBreakdown(BaseModel):
    """Share of total trip income received through one payment method."""
    model_config = ConfigDict(frozen=True)

    method: PaymentMethod
    amount: Decimal
    percentage: float = Field(..., ge=0, le=100)
    trip_count: int = Field(..., ge=0)


class TimeOfDayAnalysis(BaseModel):
    """Trips starting within one clock hour."""
    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    trip_count: int = Field(..., ge=0)
    total_income: Decimal
    percentage: float = Field(..., ge=0, le=100)


class DayOfWeekAnalysis(BaseModel):
    """Trips on one day of the week (0 = Sunday)."""
    model_config = ConfigDict(frozen=True)

    day_name: str
    day_index: int = Field(..., ge=0, le=6)
    trip_count: int = Field(..., ge=0)
    total_income: Decimal
    percentage: float = Field(..., ge=0, le=100)


class FuelEfficiency(BaseModel):
    """
    Fuel consumption and fuel cost per distance, in the requested units.

    Both values are rounded to 2 decimal places. Zero means
    "not enough data" (no distance driven or no fuel volume recorded).
    """
    model_config = ConfigDict(frozen=True)

    efficiency: float = 0.0
    cost_per_distance: float = 0.0

    @property
    def is_available(self) -> bool:
        return self.efficiency != 0


class LedgerStatistics(BaseModel):
    """
    Everything the statistics view shows for one reference date.

    Period summaries are scoped to the date's day, week and month.
    Fuel efficiency and the breakdowns cover the whole ledger.
    """
    model_config = ConfigDict(frozen=True)

    daily: DailySummary
    weekly: WeeklySummary
    monthly: MonthlySummary
    fuel_efficiency: FuelEfficiency
    efficiency_label: str
    expense_breakdown: list[CategoryBreakdown]
    payment_breakdown: list[PaymentMethodBreakdown]
    time_of_day: list[TimeOfDayAnalysis]
    day_of_week: list[DayOfWeekAnalysis]
