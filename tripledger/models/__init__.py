"""
Data Models Package

This package contains all Pydantic models used in Trip Ledger.
All data flowing through the system must conform to these schemas.
"""

from tripledger.models.records import (
    Currency,
    DistanceUnit,
    Expense,
    ExpenseCategory,
    ExpenseCreate,
    ExpenseUpdate,
    LedgerSnapshot,
    PaymentMethod,
    SettingsUpdate,
    Trip,
    TripCreate,
    TripUpdate,
    UserSettings,
    ValidationIssue,
    ValidationResult,
    VolumeUnit,
)
from tripledger.models.summary import (
    CategoryBreakdown,
    DailySummary,
    DayOfWeekAnalysis,
    FuelEfficiency,
    LedgerStatistics,
    MonthlySummary,
    MonthYear,
    PaymentMethodBreakdown,
    PeriodTotals,
    TimeOfDayAnalysis,
    WeeklySummary,
    WeekRange,
)
from tripledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "Currency",
    "DistanceUnit",
    "Expense",
    "ExpenseCategory",
    "ExpenseCreate",
    "ExpenseUpdate",
    "LedgerSnapshot",
    "PaymentMethod",
    "SettingsUpdate",
    "Trip",
    "TripCreate",
    "TripUpdate",
    "UserSettings",
    "ValidationIssue",
    "ValidationResult",
    "VolumeUnit",
    # Summary models
    "CategoryBreakdown",
    "DailySummary",
    "DayOfWeekAnalysis",
    "FuelEfficiency",
    "LedgerStatistics",
    "MonthlySummary",
    "MonthYear",
    "PaymentMethodBreakdown",
    "PeriodTotals",
    "TimeOfDayAnalysis",
    "WeeklySummary",
    "WeekRange",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
