"""
Data Export & Import

Two formats:

JSON - the full ledger (trips, expenses, settings). Amounts are written
       as strings so they survive the round trip exactly. Import also
       accepts the camelCase field names of older exports
       (fareAmount, startTime, paymentMethod, ...).

CSV  - a trips block followed by an expenses block, each with its own
       header line. Every data row starts with its record type:

           type,date,startTime,endTime,fareAmount,tipAmount,distance,paymentMethod,notes
           trip,2025-01-01,08:30,09:15,25.50,5.00,14.0,card,Airport pickup
           type,date,amount,category,description,volume
           expense,2025-01-01,45.80,fuel,Full tank,30.0

       Settings are not part of a CSV export. CSV imports always get
       fresh record IDs.

IMPORTANT: A bad row never aborts an import. It is skipped and reported
in ImportResult.errors; every other row is still imported.
"""

import csv
import io
import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from tripledger.models.records import (
    Expense,
    LedgerSnapshot,
    Trip,
    UserSettings,
    new_record_id,
)


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


class ImportFormatError(ValueError):
    """The document as a whole could not be read (not a single bad row)."""
    pass


class ImportResult(BaseModel):
    """Records recovered from an import, plus the rows that were skipped."""

    trips: list[Trip] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    settings: Optional[UserSettings] = None
    errors: list[str] = Field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.errors)


TRIP_CSV_HEADER = [
    "type", "date", "startTime", "endTime", "fareAmount",
    "tipAmount", "distance", "paymentMethod", "notes",
]
EXPENSE_CSV_HEADER = ["type", "date", "amount", "category", "description", "volume"]

# Older exports use camelCase keys.
_FIELD_ALIASES = {
    "startTime": "start_time",
    "endTime": "end_time",
    "fareAmount": "fare_amount",
    "tipAmount": "tip_amount",
    "paymentMethod": "payment_method",
    "receiptImage": "receipt_image",
    "distanceUnit": "distance_unit",
    "volumeUnit": "volume_unit",
    "darkMode": "dark_mode",
}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(key, key): value for key, value in data.items()}


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or 'row'}: {e['msg']}"
        for e in error.errors()
    )


# =============================================================================
# EXPORT
# =============================================================================

def export_json(snapshot: LedgerSnapshot) -> str:
    return json.dumps(snapshot.model_dump(mode="json"), indent=2, ensure_ascii=False)


def export_csv(snapshot: LedgerSnapshot) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(TRIP_CSV_HEADER)
    for trip in snapshot.trips:
        writer.writerow([
            "trip",
            trip.date.isoformat(),
            trip.start_time.strftime("%H:%M"),
            trip.end_time.strftime("%H:%M"),
            str(trip.fare_amount),
            str(trip.tip_amount),
            trip.distance,
            trip.payment_method.value,
            trip.notes,
        ])

    writer.writerow(EXPENSE_CSV_HEADER)
    for expense in snapshot.expenses:
        writer.writerow([
            "expense",
            expense.date.isoformat(),
            str(expense.amount),
            expense.category.value,
            expense.description,
            "" if expense.volume is None else expense.volume,
        ])

    return buffer.getvalue()


# =============================================================================
# IMPORT
# =============================================================================

def _record_list(document: dict[str, Any], key: str) -> list[Any]:
    rows = document.get(key)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ImportFormatError(f"'{key}' must be a list, got {type(rows).__name__}")
    return rows


def _import_records(rows: list[Any], model, key: str, result: ImportResult) -> list:
    """Validate each row. Missing or repeated IDs are replaced with fresh ones."""
    records = []
    seen: set[str] = set()
    for index, raw in enumerate(rows):
        try:
            data = _normalize_keys(raw)
            data.setdefault("id", new_record_id())
            record = model.model_validate(data)
        except (ValidationError, AttributeError, TypeError) as e:
            detail = _describe(e) if isinstance(e, ValidationError) else "not an object"
            result.errors.append(f"{key}[{index}]: {detail}")
            continue
        if record.id in seen:
            record = record.model_copy(update={"id": new_record_id()})
        seen.add(record.id)
        records.append(record)
    return records


def import_json(text: str) -> ImportResult:
    """
    Read a JSON export.

    Raises:
        ImportFormatError: If the text is not a JSON object, or its
            'trips' or 'expenses' value is not a list
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Not a valid JSON document: {e}") from e
    if not isinstance(document, dict):
        raise ImportFormatError("JSON export must be an object with 'trips' and 'expenses'")

    trip_rows = _record_list(document, "trips")
    expense_rows = _record_list(document, "expenses")

    result = ImportResult()
    result.trips = _import_records(trip_rows, Trip, "trips", result)
    result.expenses = _import_records(expense_rows, Expense, "expenses", result)

    raw_settings = document.get("settings")
    if isinstance(raw_settings, dict):
        try:
            # Older exports carry UI-only keys such as testMode.
            data = _normalize_keys(raw_settings)
            known = {k: v for k, v in data.items() if k in UserSettings.model_fields}
            result.settings = UserSettings.model_validate(known)
        except ValidationError as e:
            result.errors.append(f"settings: {_describe(e)}")

    return result


def _trip_from_row(row: list[str]) -> Trip:
    # Notes are the last column; older exports did not quote them, so any
    # extra cells are commas from the notes.
    notes_at = len(TRIP_CSV_HEADER) - 1
    fields = dict(zip(TRIP_CSV_HEADER[1:notes_at], row[1:notes_at]))
    if len(row) > notes_at:
        fields["notes"] = ",".join(row[notes_at:])
    data = _normalize_keys(fields)
    data["id"] = new_record_id()
    return Trip.model_validate(data)


def _expense_from_row(row: list[str]) -> Expense:
    fields = dict(zip(EXPENSE_CSV_HEADER[1:], row[1:]))
    if not fields.get("volume"):
        fields.pop("volume", None)
    data = _normalize_keys(fields)
    data["id"] = new_record_id()
    return Expense.model_validate(data)


def import_csv(text: str) -> ImportResult:
    """Read a CSV export. Header lines and blank lines are ignored."""
    result = ImportResult()
    reader = csv.reader(io.StringIO(text))

    for row in reader:
        line_number = reader.line_num
        if not row or not any(cell.strip() for cell in row):
            continue
        kind = row[0].strip()
        if kind == "type":
            continue
        try:
            if kind == "trip":
                result.trips.append(_trip_from_row(row))
            elif kind == "expense":
                result.expenses.append(_expense_from_row(row))
            else:
                result.errors.append(f"line {line_number}: unknown record type {kind!r}")
        except ValidationError as e:
            result.errors.append(f"line {line_number}: {_describe(e)}")

    return result


def export_data(snapshot: LedgerSnapshot, fmt: ExportFormat) -> str:
    fmt = ExportFormat(fmt)
    if fmt == ExportFormat.JSON:
        return export_json(snapshot)
    return export_csv(snapshot)


def import_data(text: str, fmt: ExportFormat) -> ImportResult:
    fmt = ExportFormat(fmt)
    if fmt == ExportFormat.JSON:
        return import_json(text)
    return import_csv(text)
