"""Services package."""

from tripledger.services.exchange import (
    ExportFormat,
    ImportFormatError,
    ImportResult,
    export_data,
    import_data,
)
from tripledger.services.storage import (
    AuditStorageInterface,
    CorruptDataError,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Data exchange
    "ExportFormat",
    "ImportFormatError",
    "ImportResult",
    "export_data",
    "import_data",
    # Storage services
    "AuditStorageInterface",
    "CorruptDataError",
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "NotFoundError",
    "StorageError",
]
