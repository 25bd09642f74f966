"""
Shared fixtures.

Record factories build valid trips and expenses with sensible defaults,
so each test only spells out the fields it cares about.
"""

from datetime import date

import pytest

from tripledger.audit import AuditLogger
from tripledger.ledger import LedgerService
from tripledger.models.records import Expense, Trip
from tripledger.services.storage import InMemoryAuditStorage, InMemoryLedgerStorage
from tripledger.validation import RecordValidator


@pytest.fixture
def make_trip():
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> Trip:
        data = {
            "id": f"trip-{next(counter)}",
            "date": "2025-01-01",
            "start_time": "08:30",
            "end_time": "09:15",
            "fare_amount": "25.50",
            "tip_amount": "5.00",
            "distance": 14,
            "payment_method": "card",
            "notes": "",
        }
        data.update(overrides)
        return Trip.model_validate(data)

    return _make


@pytest.fixture
def make_expense():
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> Expense:
        data = {
            "id": f"expense-{next(counter)}",
            "date": "2025-01-01",
            "amount": "45.80",
            "category": "fuel",
            "description": "",
            "volume": 30,
        }
        data.update(overrides)
        return Expense.model_validate(data)

    return _make


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def ledger_storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def ledger(ledger_storage, audit_storage):
    """A service over empty in-memory storage, with 2025-01-31 as 'today'."""
    return LedgerService(
        storage=ledger_storage,
        audit_logger=AuditLogger(audit_storage),
        validator=RecordValidator(
            future_date_tolerance_days=1,
            max_record_amount=10000,
            today=date(2025, 1, 31),
        ),
    )
