"""
Core Record Models for Trip Ledger

These models define the strict schemas for the two kinds of raw records a
driver enters, plus the user's display preferences.

DESIGN DECISION: Records are immutable (frozen) Pydantic models.
Edits never mutate a record in place - an update produces a new, fully
re-validated record. This keeps every summary computed from a consistent
snapshot.

Canonical units: distance is stored in kilometers, fuel volume in liters.
Display units are a presentation choice and never touch stored values.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentMethod(str, Enum):
    """How the passenger paid for a trip."""
    CASH = "cash"
    CARD = "card"
    APP = "app"


class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: The set is fixed. Breakdowns always report every
    category, and a value outside this set is rejected rather than
    silently folded into OTHER.
    """
    FUEL = "fuel"
    MAINTENANCE = "maintenance"
    INSURANCE = "insurance"
    LICENSE = "license"
    CLEANING = "cleaning"
    PARKING = "parking"
    TOLLS = "tolls"
    FOOD = "food"
    OTHER = "other"


class DistanceUnit(str, Enum):
    """Distance units. KILOMETERS is canonical."""
    KILOMETERS = "km"
    MILES = "mi"


class VolumeUnit(str, Enum):
    """Volume units. LITERS is canonical."""
    LITERS = "L"
    GALLONS = "gal"


class Currency(str, Enum):
    """Display currency. Amounts are never converted between currencies."""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    AUD = "AUD"
    CAD = "CAD"
    CHF = "CHF"
    JPY = "JPY"
    CNY = "CNY"


# =============================================================================
# TRIP MODELS
# =============================================================================

class TripCreate(BaseModel):
    """
    A trip as entered by the driver, before an ID is assigned.

    NOTE: end_time is allowed to be earlier than start_time.
    That is a trip that crossed midnight, not an error.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the trip (YYYY-MM-DD)"
    )
    start_time: dt.time = Field(
        ...,
        description="Pickup time (HH:MM)"
    )
    end_time: dt.time = Field(
        ...,
        description="Drop-off time (HH:MM)"
    )
    fare_amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Fare charged"
    )
    tip_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        decimal_places=2,
        description="Tip received"
    )
    distance: float = Field(
        ...,
        ge=0,
        description="Distance driven in kilometers"
    )
    payment_method: PaymentMethod
    notes: str = Field(
        default="",
        max_length=1000,
    )

    @property
    def total(self) -> Decimal:
        """Fare plus tip."""
        return self.fare_amount + self.tip_amount

    @property
    def crosses_midnight(self) -> bool:
        return self.end_time < self.start_time

    @property
    def duration_minutes(self) -> int:
        """Trip length in minutes, wrapping past midnight."""
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return (end - start) % (24 * 60)


class Trip(TripCreate):
    """A stored trip. The ID is assigned by the ledger, never by the user."""

    id: str = Field(
        ...,
        min_length=1,
        description="Unique trip ID"
    )


class TripUpdate(BaseModel):
    """
    Partial update for a trip.

    Only the fields listed here can change. Unknown keys are rejected
    and the merged trip is validated again before it is stored.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    fare_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    tip_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    distance: Optional[float] = Field(default=None, ge=0)
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class ExpenseCreate(BaseModel):
    """An expense as entered by the driver, before an ID is assigned."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the expense (YYYY-MM-DD)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Amount paid"
    )
    category: ExpenseCategory
    description: str = Field(
        default="",
        max_length=500,
    )
    receipt_image: Optional[str] = Field(
        default=None,
        description="Reference to a receipt image, if one was attached"
    )
    volume: Optional[float] = Field(
        default=None,
        ge=0,
        description="Fuel volume in liters (fuel expenses only)"
    )


class Expense(ExpenseCreate):
    """A stored expense."""

    id: str = Field(
        ...,
        min_length=1,
        description="Unique expense ID"
    )


class ExpenseUpdate(BaseModel):
    """Partial update for an expense. Same rules as TripUpdate."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    date: Optional[dt.date] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(default=None, max_length=500)
    receipt_image: Optional[str] = None
    volume: Optional[float] = Field(default=None, ge=0)


# =============================================================================
# USER SETTINGS
# =============================================================================

class UserSettings(BaseModel):
    """
    The driver's display preferences.

    The analytics functions never read these. Callers pass the
    chosen units explicitly.
    """
    model_config = ConfigDict(frozen=True)

    currency: Currency = Currency.EUR
    distance_unit: DistanceUnit = DistanceUnit.KILOMETERS
    volume_unit: VolumeUnit = VolumeUnit.LITERS
    dark_mode: bool = False


class SettingsUpdate(BaseModel):
    """Partial update for user settings."""
    model_config = ConfigDict(extra="forbid")

    currency: Optional[Currency] = None
    distance_unit: Optional[DistanceUnit] = None
    volume_unit: Optional[VolumeUnit] = None
    dark_mode: Optional[bool] = None


# =============================================================================
# LEDGER SNAPSHOT
# =============================================================================

class LedgerSnapshot(BaseModel):
    """
    Everything the ledger persists, as one immutable value.

    Storage backends read and write whole snapshots. The aggregation
    functions are always handed the tuples of one snapshot, so they
    never see a half-applied change.
    """
    model_config = ConfigDict(frozen=True)

    trips: tuple[Trip, ...] = ()
    expenses: tuple[Expense, ...] = ()
    settings: UserSettings = Field(default_factory=UserSettings)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on a record."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g. 'future_date', 'volume_not_fuel')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of semantic validation of one record.

    Errors block the record from being stored. Warnings and infos are
    reported to the user but never block.
    """

    record_type: str = Field(
        ...,
        pattern="^(trip|expense)$",
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == "warning"]


def new_record_id() -> str:
    """Fresh unique ID for a trip or expense."""
    return uuid4().hex
