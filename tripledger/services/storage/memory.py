"""
In-memory storage backends.

Used by the test suite, and by callers that want a throwaway ledger.
"""

from typing import Optional

from tripledger.models.audit import AuditEvent
from tripledger.models.records import LedgerSnapshot
from tripledger.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Keeps the latest snapshot in memory. Snapshots are immutable, so no copying is needed."""

    def __init__(self, snapshot: Optional[LedgerSnapshot] = None):
        self._snapshot = snapshot
        self.save_count = 0

    def load(self) -> Optional[LedgerSnapshot]:
        return self._snapshot

    def save(self, snapshot: LedgerSnapshot) -> None:
        self._snapshot = snapshot
        self.save_count += 1


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[str] = None,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type
            and (entity_id is None or event.entity_id == entity_id)
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
