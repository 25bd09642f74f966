"""
Calendar Bucketing

Week and month boundaries used by the summary builder.

Weeks start on Sunday (day index 0) and end on Saturday (day index 6).
Dates are plain calendar dates - no timezones, no instants. A reference
date may be given as a date or as a 'YYYY-MM-DD' string.
"""

from datetime import date, datetime, timedelta
from typing import Union

from tripledger.models.summary import MonthYear, WeekRange


DateLike = Union[date, str]

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class MalformedDateError(ValueError):
    """A date string could not be parsed into a calendar date."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Not a valid YYYY-MM-DD date: {value!r}")


def as_date(value: DateLike) -> date:
    """
    Normalize a reference date.

    Fails fast on anything that is not a real calendar date: a bad
    date would silently land in the wrong bucket otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            raise MalformedDateError(value) from None
    raise MalformedDateError(value)


def day_of_week_index(value: DateLike) -> int:
    """Day of the week with Sunday = 0 ... Saturday = 6."""
    return (as_date(value).weekday() + 1) % 7


def get_day_of_week(value: DateLike) -> str:
    return DAY_NAMES[day_of_week_index(value)]


def get_week_range(value: DateLike) -> WeekRange:
    """Return the Sunday that starts and the Saturday that ends the week."""
    day = as_date(value)
    start = day - timedelta(days=day_of_week_index(day))
    return WeekRange(start=start, end=start + timedelta(days=6))


def enumerate_dates(start: DateLike, end: DateLike) -> list[date]:
    """Every calendar date from start to end, inclusive. Empty if start > end."""
    current = as_date(start)
    last = as_date(end)
    dates = []
    while current <= last:
        dates.append(current)
        current += timedelta(days=1)
    return dates


def get_month_year(value: DateLike) -> MonthYear:
    day = as_date(value)
    return MonthYear(month=day.strftime("%B"), year=f"{day.year:04d}")


def month_bounds(value: DateLike) -> tuple[date, date]:
    """First and last day of the month containing the date."""
    day = as_date(value)
    first = day.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


def month_week_starts(value: DateLike) -> list[date]:
    """
    Sundays that start each 7-day window overlapping the month.

    The first window starts on the Sunday on or before the 1st; windows
    advance by 7 days until a window would start after the last day of
    the month. The first and last windows may spill into the adjacent
    months.
    """
    first, last = month_bounds(value)
    current = get_week_range(first).start
    starts = []
    while current <= last:
        starts.append(current)
        current += timedelta(days=7)
    return starts


def same_month(day: date, reference: date) -> bool:
    """True when both dates fall in the same month of the same year."""
    return day.year == reference.year and day.month == reference.month
