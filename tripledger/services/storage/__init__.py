"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a local JSON file as the backend, but designed to be swappable.
"""

from tripledger.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from tripledger.services.storage.json_file import JsonFileLedgerStorage
from tripledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "CorruptDataError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
