"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a port the ledger service is handed,
never a global. This allows us to:
1. Keep the JSON file backend swappable (SQLite, a sync service, ...)
2. Use in-memory storage for testing
3. Keep the aggregation engine completely free of storage concerns

The interface is intentionally simple. The ledger is small and
personal, so backends read and write whole snapshots.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tripledger.models.audit import AuditEvent
from tripledger.models.records import LedgerSnapshot


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[LedgerSnapshot]:
        """
        Load the stored ledger.

        Returns:
            The stored snapshot, or None if nothing has been stored yet

        Raises:
            CorruptDataError: If stored data cannot be parsed
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """
        Replace the stored ledger with `snapshot`.

        Raises:
            StorageError: If the write fails. The previously stored
                ledger must be left intact.
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[str] = None,
    ) -> list[AuditEvent]:
        """
        Get all events for an entity type, or for one record of that type.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Record not found in the ledger."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but cannot be parsed."""
    pass
