"""
Audit Models for Trip Ledger

Every change to the ledger is logged as an audit event:
1. Traceability of what was added, edited or removed
2. Debugging information when an import or save goes wrong
3. A history the driver can review

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
Clearing the ledger removes records, not their audit trail.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Trips
    TRIP_ADDED = "trip_added"
    TRIP_UPDATED = "trip_updated"
    TRIP_DELETED = "trip_deleted"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Settings
    SETTINGS_UPDATED = "settings_updated"

    # Bulk data operations
    DATA_CLEARED = "data_cleared"
    DATA_IMPORTED = "data_imported"
    DATA_EXPORTED = "data_exported"

    # System events
    SAVE_FAILED = "save_failed"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every ledger mutation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('trip', 'expense', 'settings', 'ledger')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the record this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_added("trip", trip.id, "30.50")
        event = AuditEventBuilder.data_cleared(trip_count, expense_count)
    """

    _ADDED = {
        "trip": AuditEventType.TRIP_ADDED,
        "expense": AuditEventType.EXPENSE_ADDED,
    }
    _UPDATED = {
        "trip": AuditEventType.TRIP_UPDATED,
        "expense": AuditEventType.EXPENSE_UPDATED,
    }
    _DELETED = {
        "trip": AuditEventType.TRIP_DELETED,
        "expense": AuditEventType.EXPENSE_DELETED,
    }

    @staticmethod
    def record_added(record_type: str, record_id: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventBuilder._ADDED[record_type],
            entity_type=record_type,
            entity_id=record_id,
            description=f"{record_type.capitalize()} added: {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def record_updated(
        record_type: str,
        record_id: str,
        changed_fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventBuilder._UPDATED[record_type],
            entity_type=record_type,
            entity_id=record_id,
            description=(
                f"{record_type.capitalize()} updated: "
                f"{', '.join(changed_fields) or 'no changes'}"
            ),
            details={"changed_fields": changed_fields},
        )

    @staticmethod
    def record_deleted(record_type: str, record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventBuilder._DELETED[record_type],
            entity_type=record_type,
            entity_id=record_id,
            description=f"{record_type.capitalize()} deleted",
        )

    @staticmethod
    def validation_failed(record_type: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=record_type,
            description=f"{record_type.capitalize()} rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def settings_updated(changed: dict[str, Any]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTINGS_UPDATED,
            entity_type="settings",
            description=f"Settings updated: {', '.join(sorted(changed))}",
            details=changed,
        )

    @staticmethod
    def data_cleared(trip_count: int, expense_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description=f"Cleared {trip_count} trips and {expense_count} expenses",
            details={"trip_count": trip_count, "expense_count": expense_count},
        )

    @staticmethod
    def data_imported(
        fmt: str,
        trip_count: int,
        expense_count: int,
        skipped: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_IMPORTED,
            severity=AuditSeverity.WARNING if skipped else AuditSeverity.INFO,
            entity_type="ledger",
            description=(
                f"Imported {trip_count} trips and {expense_count} expenses "
                f"from {fmt} ({skipped} rows skipped)"
            ),
            details={
                "format": fmt,
                "trip_count": trip_count,
                "expense_count": expense_count,
                "skipped": skipped,
            },
        )

    @staticmethod
    def data_exported(fmt: str, trip_count: int, expense_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_EXPORTED,
            entity_type="ledger",
            description=f"Exported {trip_count} trips and {expense_count} expenses as {fmt}",
            details={
                "format": fmt,
                "trip_count": trip_count,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def save_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description="Saving the ledger failed",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
