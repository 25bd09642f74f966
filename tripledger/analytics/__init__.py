"""
Aggregation engine.

Pure functions over sequences of trips and expenses. Nothing in this
package holds state, reads configuration, or mutates its inputs.
"""

from tripledger.analytics.breakdowns import (
    day_of_week_analysis,
    expense_category_breakdown,
    payment_method_breakdown,
    time_of_day_analysis,
)
from tripledger.analytics.bucketing import (
    DAY_NAMES,
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
from tripledger.analytics.efficiency import (
    calculate_fuel_efficiency,
    efficiency_label,
)
from tripledger.analytics.summaries import (
    daily_summary,
    monthly_summary,
    weekly_summary,
)
from tripledger.analytics.totals import (
    expenses_between,
    expenses_in_month,
    expenses_on,
    fuel_expenses,
    total_distance,
    total_expense_amount,
    total_fuel_volume,
    total_income,
    trip_total,
    trips_between,
    trips_in_month,
    trips_on,
)
from tripledger.analytics.units import convert_distance, convert_volume

__all__ = [
    # Unit conversion
    "convert_distance",
    "convert_volume",
    # Calendar bucketing
    "DAY_NAMES",
    "MalformedDateError",
    "as_date",
    "day_of_week_index",
    "enumerate_dates",
    "get_day_of_week",
    "get_month_year",
    "get_week_range",
    "month_bounds",
    "month_week_starts",
    # Filters & totals
    "expenses_between",
    "expenses_in_month",
    "expenses_on",
    "fuel_expenses",
    "total_distance",
    "total_expense_amount",
    "total_fuel_volume",
    "total_income",
    "trip_total",
    "trips_between",
    "trips_in_month",
    "trips_on",
    # Summaries
    "daily_summary",
    "monthly_summary",
    "weekly_summary",
    # Breakdowns
    "day_of_week_analysis",
    "expense_category_breakdown",
    "payment_method_breakdown",
    "time_of_day_analysis",
    # Fuel efficiency
    "calculate_fuel_efficiency",
    "efficiency_label",
]
