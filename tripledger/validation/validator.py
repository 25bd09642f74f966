"""
Semantic Record Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION (Pydantic, in the record models):
- Type checking, date/time formats
- Non-negative amounts, distances and volumes
- Known categories, payment methods and units
- A record that fails here is never constructed at all

STAGE 2 - SEMANTIC VALIDATION (this module):
- Fuel volume recorded on a non-fuel expense
- Dates in the future
- Suspiciously large amounts
- Zero-value trips
- Trips that cross midnight

IMPORTANT: Validation NEVER silently fixes issues.
It reports them; only error-level issues block a record.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Union

from tripledger.config import get_settings
from tripledger.models.records import (
    ExpenseCategory,
    ExpenseCreate,
    TripCreate,
    ValidationIssue,
    ValidationResult,
)


class RecordValidationError(ValueError):
    """A record has error-level validation issues and was not stored."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid {result.record_type}: {messages}")


class RecordValidator:
    """
    Semantic checks for trips and expenses.

    Thresholds come from AppSettings unless given explicitly.
    """

    def __init__(
        self,
        future_date_tolerance_days: Optional[int] = None,
        max_record_amount: Optional[Union[Decimal, float]] = None,
        today: Optional[date] = None,
    ):
        settings = get_settings().app
        if future_date_tolerance_days is None:
            future_date_tolerance_days = settings.future_date_tolerance_days
        if max_record_amount is None:
            max_record_amount = settings.max_record_amount
        self._future_tolerance = timedelta(days=future_date_tolerance_days)
        self._max_amount = Decimal(str(max_record_amount))
        self._today = today

    def _latest_allowed_date(self) -> date:
        return (self._today or date.today()) + self._future_tolerance

    def _check_date(self, record_date: date) -> list[ValidationIssue]:
        if record_date > self._latest_allowed_date():
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date {record_date.isoformat()} is in the future",
                severity="warning",
                suggested_fix="Check the date was entered correctly",
            )]
        return []

    def _check_amount(self, field: str, amount: Decimal) -> list[ValidationIssue]:
        if amount > self._max_amount:
            return [ValidationIssue(
                field=field,
                issue_type="suspicious_amount",
                message=f"Amount {amount} is unusually large",
                severity="warning",
                suggested_fix="Check for a misplaced decimal point",
            )]
        return []

    def validate_trip(self, trip: TripCreate) -> ValidationResult:
        issues = self._check_date(trip.date)
        issues += self._check_amount("fare_amount", trip.fare_amount)

        if trip.total == 0:
            issues.append(ValidationIssue(
                field="fare_amount",
                issue_type="zero_value",
                message="Trip has no fare and no tip",
                severity="warning",
            ))

        # Allowed: a night shift trip may end after midnight.
        if trip.crosses_midnight:
            issues.append(ValidationIssue(
                field="end_time",
                issue_type="crosses_midnight",
                message=(
                    f"Trip ends at {trip.end_time:%H:%M}, before it starts at "
                    f"{trip.start_time:%H:%M}; treated as crossing midnight"
                ),
                severity="info",
            ))

        return ValidationResult(record_type="trip", issues=issues)

    def validate_expense(self, expense: ExpenseCreate) -> ValidationResult:
        issues = self._check_date(expense.date)
        issues += self._check_amount("amount", expense.amount)

        if expense.volume is not None and expense.category != ExpenseCategory.FUEL:
            issues.append(ValidationIssue(
                field="volume",
                issue_type="volume_not_fuel",
                message=(
                    f"Fuel volume given for a '{expense.category.value}' expense"
                ),
                severity="error",
                suggested_fix="Change the category to fuel or remove the volume",
            ))

        if (
            expense.category == ExpenseCategory.FUEL
            and not expense.volume
        ):
            issues.append(ValidationIssue(
                field="volume",
                issue_type="missing_volume",
                message="Fuel expense has no volume; it will not count towards fuel efficiency",
                severity="info",
            ))

        return ValidationResult(record_type="expense", issues=issues)
