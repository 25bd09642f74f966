"""
Ledger Service for Trip Ledger

This module ties the components together. LedgerService is the single
owner of the driver's trips, expenses and settings:

1. Mutations (add / update / delete / import / clear)
   validate -> persist through the storage port -> audit
2. Queries (summaries, statistics)
   hand an immutable snapshot to the pure analytics functions

DESIGN DECISION: The service is an explicit object passed to whoever
needs it, with persistence injected as a port. There is no process-wide
state, and the analytics package never sees the service or the storage.

A mutation only becomes visible after the storage write succeeded. If
the save fails the in-memory ledger is left exactly as it was.
"""

from datetime import date
from typing import Optional, Union

from tripledger import analytics
from tripledger.analytics.bucketing import DateLike
from tripledger.audit import AuditLogger
from tripledger.config import get_settings
from tripledger.models.records import (
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
    ValidationResult,
    VolumeUnit,
    new_record_id,
)
from tripledger.models.summary import (
    DailySummary,
    FuelEfficiency,
    LedgerStatistics,
    MonthlySummary,
    WeeklySummary,
)
from tripledger.services.exchange import (
    ExportFormat,
    ImportResult,
    export_data,
    import_data,
)
from tripledger.services.storage import (
    InMemoryAuditStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from tripledger.validation import RecordValidationError, RecordValidator


class LedgerService:
    """
    Repository and query facade over one driver's ledger.

    Records are kept as tuples inside an immutable LedgerSnapshot and
    replaced wholesale on every change, so a summary computed from
    `snapshot` is always internally consistent.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[RecordValidator] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._validator = validator or RecordValidator()
        snapshot = storage.load()
        self._snapshot = snapshot if snapshot is not None else self._new_ledger()

    @staticmethod
    def _new_ledger() -> LedgerSnapshot:
        app = get_settings().app
        return LedgerSnapshot(
            settings=UserSettings(
                currency=app.default_currency,
                distance_unit=app.default_distance_unit,
                volume_unit=app.default_volume_unit,
            )
        )

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def trips(self) -> tuple[Trip, ...]:
        return self._snapshot.trips

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._snapshot.expenses

    @property
    def settings(self) -> UserSettings:
        return self._snapshot.settings

    def _commit(self, snapshot: LedgerSnapshot) -> None:
        """Persist first, then publish. A failed save changes nothing."""
        try:
            self._storage.save(snapshot)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(str(e))
            raise
        self._snapshot = snapshot

    def _check(self, record_type: str, result: ValidationResult) -> None:
        if result.has_errors:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    record_type,
                    [issue.model_dump() for issue in result.issues],
                )
            raise RecordValidationError(result)

    # =========================================================================
    # TRIPS
    # =========================================================================

    def get_trip(self, trip_id: str) -> Trip:
        for trip in self._snapshot.trips:
            if trip.id == trip_id:
                return trip
        raise NotFoundError(f"Trip not found: {trip_id}")

    def add_trip(self, data: Union[TripCreate, dict]) -> Trip:
        """
        Validate and store a new trip.

        Raises:
            pydantic.ValidationError: malformed fields
            RecordValidationError: semantic errors
            StorageError: the ledger could not be saved
        """
        if not isinstance(data, TripCreate):
            data = TripCreate.model_validate(data)
        self._check("trip", self._validator.validate_trip(data))

        trip = Trip(id=new_record_id(), **data.model_dump(exclude={"id"}))
        self._commit(self._snapshot.model_copy(
            update={"trips": self._snapshot.trips + (trip,)}
        ))

        if self._audit_logger:
            self._audit_logger.log_trip_added(trip.id, str(trip.total))
        return trip

    def update_trip(self, trip_id: str, update: Union[TripUpdate, dict]) -> Trip:
        """Apply a partial update. The merged trip is fully re-validated."""
        if not isinstance(update, TripUpdate):
            update = TripUpdate.model_validate(update)
        current = self.get_trip(trip_id)
        changes = update.model_dump(exclude_unset=True)

        updated = Trip.model_validate({**current.model_dump(), **changes})
        self._check("trip", self._validator.validate_trip(updated))

        trips = tuple(updated if t.id == trip_id else t for t in self._snapshot.trips)
        self._commit(self._snapshot.model_copy(update={"trips": trips}))

        if self._audit_logger:
            self._audit_logger.log_trip_updated(trip_id, sorted(changes))
        return updated

    def delete_trip(self, trip_id: str) -> None:
        self.get_trip(trip_id)
        trips = tuple(t for t in self._snapshot.trips if t.id != trip_id)
        self._commit(self._snapshot.model_copy(update={"trips": trips}))

        if self._audit_logger:
            self._audit_logger.log_trip_deleted(trip_id)

    # =========================================================================
    # EXPENSES
    # =========================================================================

    def get_expense(self, expense_id: str) -> Expense:
        for expense in self._snapshot.expenses:
            if expense.id == expense_id:
                return expense
        raise NotFoundError(f"Expense not found: {expense_id}")

    def add_expense(self, data: Union[ExpenseCreate, dict]) -> Expense:
        """Validate and store a new expense. Raises like add_trip."""
        if not isinstance(data, ExpenseCreate):
            data = ExpenseCreate.model_validate(data)
        self._check("expense", self._validator.validate_expense(data))

        expense = Expense(id=new_record_id(), **data.model_dump(exclude={"id"}))
        self._commit(self._snapshot.model_copy(
            update={"expenses": self._snapshot.expenses + (expense,)}
        ))

        if self._audit_logger:
            self._audit_logger.log_expense_added(expense.id, str(expense.amount))
        return expense

    def update_expense(
        self,
        expense_id: str,
        update: Union[ExpenseUpdate, dict],
    ) -> Expense:
        if not isinstance(update, ExpenseUpdate):
            update = ExpenseUpdate.model_validate(update)
        current = self.get_expense(expense_id)
        changes = update.model_dump(exclude_unset=True)

        updated = Expense.model_validate({**current.model_dump(), **changes})
        self._check("expense", self._validator.validate_expense(updated))

        expenses = tuple(
            updated if e.id == expense_id else e for e in self._snapshot.expenses
        )
        self._commit(self._snapshot.model_copy(update={"expenses": expenses}))

        if self._audit_logger:
            self._audit_logger.log_expense_updated(expense_id, sorted(changes))
        return updated

    def delete_expense(self, expense_id: str) -> None:
        self.get_expense(expense_id)
        expenses = tuple(e for e in self._snapshot.expenses if e.id != expense_id)
        self._commit(self._snapshot.model_copy(update={"expenses": expenses}))

        if self._audit_logger:
            self._audit_logger.log_expense_deleted(expense_id)

    # =========================================================================
    # SETTINGS & BULK OPERATIONS
    # =========================================================================

    def update_settings(self, update: Union[SettingsUpdate, dict]) -> UserSettings:
        if not isinstance(update, SettingsUpdate):
            update = SettingsUpdate.model_validate(update)
        changes = update.model_dump(exclude_unset=True)
        settings = UserSettings.model_validate(
            {**self._snapshot.settings.model_dump(), **changes}
        )
        self._commit(self._snapshot.model_copy(update={"settings": settings}))

        if self._audit_logger:
            self._audit_logger.log_settings_updated(
                settings.model_dump(mode="json", include=set(changes))
            )
        return settings

    def clear_data(self) -> None:
        """Remove every trip and expense. Settings are kept."""
        trip_count, expense_count = len(self.trips), len(self.expenses)
        self._commit(LedgerSnapshot(settings=self._snapshot.settings))

        if self._audit_logger:
            self._audit_logger.log_data_cleared(trip_count, expense_count)

    def export_data(self, fmt: Union[ExportFormat, str] = ExportFormat.JSON) -> str:
        fmt = ExportFormat(fmt)
        text = export_data(self._snapshot, fmt)

        if self._audit_logger:
            self._audit_logger.log_data_exported(
                fmt.value, len(self.trips), len(self.expenses)
            )
        return text

    def import_data(
        self,
        text: str,
        fmt: Union[ExportFormat, str] = ExportFormat.JSON,
    ) -> ImportResult:
        """
        Replace all trips and expenses with the imported ones.

        Settings are replaced only when a JSON export carries them.
        Bad rows, including records with error-level validation issues,
        are skipped and reported in the result.

        Raises:
            ImportFormatError: the document as a whole is unreadable
        """
        fmt = ExportFormat(fmt)
        result = import_data(text, fmt)

        result.trips = [
            trip for trip in result.trips
            if self._accept_imported(trip.id, self._validator.validate_trip(trip), result)
        ]
        result.expenses = [
            expense for expense in result.expenses
            if self._accept_imported(
                expense.id, self._validator.validate_expense(expense), result
            )
        ]

        self._commit(LedgerSnapshot(
            trips=tuple(result.trips),
            expenses=tuple(result.expenses),
            settings=result.settings or self._snapshot.settings,
        ))

        if self._audit_logger:
            self._audit_logger.log_data_imported(
                fmt.value, len(result.trips), len(result.expenses), result.skipped
            )
        return result

    @staticmethod
    def _accept_imported(
        record_id: str,
        validation: ValidationResult,
        result: ImportResult,
    ) -> bool:
        if not validation.has_errors:
            return True
        messages = "; ".join(
            issue.message for issue in validation.issues if issue.severity == "error"
        )
        result.errors.append(f"{validation.record_type} {record_id}: {messages}")
        return False

    # =========================================================================
    # QUERIES
    # =========================================================================

    def daily_summary(self, day: DateLike) -> DailySummary:
        return analytics.daily_summary(self.trips, self.expenses, day)

    def weekly_summary(self, day: DateLike) -> WeeklySummary:
        return analytics.weekly_summary(self.trips, self.expenses, day)

    def monthly_summary(self, day: DateLike) -> MonthlySummary:
        return analytics.monthly_summary(self.trips, self.expenses, day)

    def fuel_efficiency(
        self,
        distance_unit: Optional[DistanceUnit] = None,
        volume_unit: Optional[VolumeUnit] = None,
    ) -> FuelEfficiency:
        """Fuel efficiency over the whole ledger, in the preferred units by default."""
        return analytics.calculate_fuel_efficiency(
            self.trips,
            analytics.fuel_expenses(self.expenses),
            distance_unit or self.settings.distance_unit,
            volume_unit or self.settings.volume_unit,
        )

    def statistics(self, day: DateLike) -> LedgerStatistics:
        """Summaries for the day, week and month of `day`, plus ledger-wide analyses."""
        snapshot = self._snapshot
        trips, expenses = snapshot.trips, snapshot.expenses
        units = snapshot.settings

        return LedgerStatistics(
            daily=analytics.daily_summary(trips, expenses, day),
            weekly=analytics.weekly_summary(trips, expenses, day),
            monthly=analytics.monthly_summary(trips, expenses, day),
            fuel_efficiency=analytics.calculate_fuel_efficiency(
                trips,
                analytics.fuel_expenses(expenses),
                units.distance_unit,
                units.volume_unit,
            ),
            efficiency_label=analytics.efficiency_label(
                units.distance_unit, units.volume_unit
            ),
            expense_breakdown=analytics.expense_category_breakdown(expenses),
            payment_breakdown=analytics.payment_method_breakdown(trips),
            time_of_day=analytics.time_of_day_analysis(trips),
            day_of_week=analytics.day_of_week_analysis(trips),
        )


def sample_snapshot(day: Optional[date] = None) -> LedgerSnapshot:
    """
    A small demo ledger: two trips and two expenses on `day` (default today).

    Meant for first-run demos. The service never seeds data on its own.
    """
    day = day or date.today()
    return LedgerSnapshot(
        trips=(
            Trip(
                id=new_record_id(),
                date=day,
                start_time="08:30",
                end_time="09:15",
                fare_amount="25.50",
                tip_amount="5.00",
                distance=14,
                payment_method=PaymentMethod.CARD,
                notes="Airport pickup",
            ),
            Trip(
                id=new_record_id(),
                date=day,
                start_time="10:00",
                end_time="10:25",
                fare_amount="12.75",
                tip_amount="2.00",
                distance=5.6,
                payment_method=PaymentMethod.CASH,
                notes="Downtown drop-off",
            ),
        ),
        expenses=(
            Expense(
                id=new_record_id(),
                date=day,
                amount="45.80",
                category=ExpenseCategory.FUEL,
                description="Full tank at Shell",
                volume=30,
            ),
            Expense(
                id=new_record_id(),
                date=day,
                amount="12.99",
                category=ExpenseCategory.FOOD,
                description="Lunch",
            ),
        ),
    )


def create_ledger_service(
    storage: Optional[LedgerStorageInterface] = None,
) -> LedgerService:
    """
    Factory function to create a ready-to-use ledger service.

    Args:
        storage: Storage backend. Defaults to the JSON file configured
                 in AppSettings.data_path.

    Returns:
        A LedgerService with an audit logger backed by in-memory audit storage
    """
    storage = storage or JsonFileLedgerStorage()
    audit_logger = AuditLogger(InMemoryAuditStorage())
    return LedgerService(storage=storage, audit_logger=audit_logger)
