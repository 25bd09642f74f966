"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Complete traceability
2. Debugging capability
3. A history of edits the driver can review

The audit logger:
- Gracefully handles failures (a broken audit store never blocks a save)
- Always writes a structured local log line, with or without storage
"""

from typing import Any, Optional

import structlog

from tripledger.models.audit import AuditEvent, AuditEventBuilder
from tripledger.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store (for persistence and user visibility), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("tripledger.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_trip_added(self, trip_id: str, amount: str) -> None:
        self.log(AuditEventBuilder.record_added("trip", trip_id, amount))

    def log_trip_updated(self, trip_id: str, changed_fields: list[str]) -> None:
        self.log(AuditEventBuilder.record_updated("trip", trip_id, changed_fields))

    def log_trip_deleted(self, trip_id: str) -> None:
        self.log(AuditEventBuilder.record_deleted("trip", trip_id))

    def log_expense_added(self, expense_id: str, amount: str) -> None:
        self.log(AuditEventBuilder.record_added("expense", expense_id, amount))

    def log_expense_updated(self, expense_id: str, changed_fields: list[str]) -> None:
        self.log(AuditEventBuilder.record_updated("expense", expense_id, changed_fields))

    def log_expense_deleted(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.record_deleted("expense", expense_id))

    def log_validation_failed(self, record_type: str, issues: list[dict]) -> None:
        """Log a record rejected by semantic validation."""
        self.log(AuditEventBuilder.validation_failed(record_type, issues))

    def log_settings_updated(self, changed: dict[str, Any]) -> None:
        self.log(AuditEventBuilder.settings_updated(changed))

    def log_data_cleared(self, trip_count: int, expense_count: int) -> None:
        self.log(AuditEventBuilder.data_cleared(trip_count, expense_count))

    def log_data_imported(
        self,
        fmt: str,
        trip_count: int,
        expense_count: int,
        skipped: int,
    ) -> None:
        self.log(AuditEventBuilder.data_imported(fmt, trip_count, expense_count, skipped))

    def log_data_exported(self, fmt: str, trip_count: int, expense_count: int) -> None:
        self.log(AuditEventBuilder.data_exported(fmt, trip_count, expense_count))

    def log_save_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(error_type, error_message, details))
