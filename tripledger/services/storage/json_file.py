"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON document is the default backend:
1. The data is personal and small (hundreds of records, not millions)
2. No database setup required
3. The driver can open, back up or move the file by hand
4. The same document format is used for JSON export/import

TRADEOFFS:
- The whole file is rewritten on every change (fine at this size)
- No concurrent writers (the ledger is single-user by design)

Writes go to a temporary file that atomically replaces the old one,
so a crash mid-write never leaves a half-written ledger behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from tripledger.config import get_settings
from tripledger.models.records import LedgerSnapshot
from tripledger.services.storage.interface import (
    CorruptDataError,
    LedgerStorageInterface,
    StorageError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Stores the ledger as one JSON document:

        {"trips": [...], "expenses": [...], "settings": {...}}

    Amounts are written as strings so they round-trip exactly.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        if path is None:
            path = get_settings().app.data_path
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[LedgerSnapshot]:
        """Load the ledger. A missing file means a new ledger, not an error."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Could not read ledger file {self._path}: {e}")

        try:
            return LedgerSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptDataError(
                f"Ledger file {self._path} is not a valid ledger: "
                f"{e.error_count()} errors"
            ) from e

    def save(self, snapshot: LedgerSnapshot) -> None:
        document = snapshot.model_dump(mode="json")
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write ledger file {self._path}: {e}")
