"""
Main Orchestrator for Expense Ledger

This module ties together all the components and defines the
end-to-end flows for:
1. Startup (storage -> ledger, falling back to the default expenses)
2. Entry (draft -> validate -> expense -> ledger -> storage)
3. Dashboard (ledger snapshot + selection + now -> DashboardView)

DESIGN DECISION: The orchestrator owns every side effect.
- The clock and id generator are injected, never called ambiently
- Aggregation only ever sees an immutable snapshot
- Storage failures are logged and absorbed; the session carries on in memory
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from expense_ledger.activity import ActivityLogger, configure_logging
from expense_ledger.aggregation import build_dashboard
from expense_ledger.config import get_settings
from expense_ledger.ledger import ExpenseLedger, default_expenses
from expense_ledger.models.expense import (
    DashboardView,
    ExpenseDraft,
    ExpenseRecord,
    FilterSelection,
)
from expense_ledger.services.storage import (
    BlobExpenseStorage,
    ExpenseStorageInterface,
    InMemoryBlobStore,
    JsonFileBlobStore,
    StorageError,
)
from expense_ledger.validation import ExpenseValidationError, ExpenseValidator


Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def new_expense_id() -> str:
    return str(uuid4())


def save_expenses(
    storage: Optional[ExpenseStorageInterface],
    ledger: ExpenseLedger,
    activity_logger: ActivityLogger,
) -> bool:
    """
    Write the current snapshot to storage.

    Failures are logged, not raised. Returns True if the write succeeded.
    """
    if storage is None:
        return False

    records = ledger.records
    try:
        return storage.save(records)
    except StorageError as e:
        activity_logger.log_save_failed(e, record_count=len(records))
        return False


def load_ledger(
    storage: Optional[ExpenseStorageInterface],
    clock: Clock,
    activity_logger: ActivityLogger,
) -> ExpenseLedger:
    """
    Build the session ledger from storage.

    - Nothing stored yet: start from the default expenses and store them
    - Stored data unreadable: start from the defaults, leave storage alone
      until the next change overwrites it
    """
    if storage is None:
        seeds = default_expenses(clock())
        activity_logger.log_ledger_seeded(len(seeds), reason="no storage")
        return ExpenseLedger(seeds)

    try:
        stored = storage.load()
    except StorageError as e:
        activity_logger.log_load_failed(e)
        seeds = default_expenses(clock())
        activity_logger.log_ledger_seeded(len(seeds), reason="load failed")
        return ExpenseLedger(seeds)

    if stored is None:
        ledger = ExpenseLedger(default_expenses(clock()))
        activity_logger.log_ledger_seeded(len(ledger), reason="nothing stored")
        save_expenses(storage, ledger, activity_logger)
        return ledger

    activity_logger.log_ledger_loaded(len(stored))
    return ExpenseLedger(stored)


class ExpenseEntryFlow:
    """
    Orchestrates adding and removing expenses.

    Flow for an add:
    1. Validate the draft (reject with inline messages if invalid)
    2. Build the expense with a fresh id
    3. Prepend it to the ledger
    4. Save the new snapshot (best effort)
    """

    def __init__(
        self,
        ledger: ExpenseLedger,
        storage: Optional[ExpenseStorageInterface] = None,
        validator: Optional[ExpenseValidator] = None,
        id_factory: Optional[IdFactory] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._ledger = ledger
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._id_factory = id_factory or new_expense_id
        self._activity_logger = activity_logger or ActivityLogger()

    def add_expense(self, draft: ExpenseDraft) -> ExpenseRecord:
        """
        Add an expense from entry-form input.

        Raises:
            ExpenseValidationError: If the draft is invalid
        """
        try:
            expense = self._validator.build_expense(draft, self._id_factory())
        except ExpenseValidationError as e:
            self._activity_logger.log_validation_failed(
                [issue.model_dump() for issue in e.issues]
            )
            raise

        self._ledger.add(expense)
        self._activity_logger.log_expense_added(
            expense_id=expense.id,
            description=expense.description,
            amount=str(expense.amount),
        )
        save_expenses(self._storage, self._ledger, self._activity_logger)
        return expense

    def remove_expense(self, expense_id: str) -> int:
        """
        Remove every expense with this id.

        Removing an id that is not present is a no-op.
        Returns the number of expenses removed.
        """
        before = len(self._ledger)
        self._ledger.remove(expense_id)
        removed = before - len(self._ledger)

        if removed:
            self._activity_logger.log_expense_removed(expense_id, removed)
            save_expenses(self._storage, self._ledger, self._activity_logger)
        return removed


class DashboardFlow:
    """
    Derives dashboard views from the ledger.

    Reads one snapshot per view, so a concurrent add or remove can never
    produce a view that mixes two versions of the collection.
    """

    def __init__(
        self,
        ledger: ExpenseLedger,
        clock: Optional[Clock] = None,
        recent_limit: Optional[int] = None,
        trend_months: Optional[int] = None,
    ):
        dashboard_settings = get_settings().dashboard
        self._ledger = ledger
        self._clock = clock or local_now
        if recent_limit is None:
            recent_limit = dashboard_settings.recent_limit
        if trend_months is None:
            trend_months = dashboard_settings.trend_months
        self._recent_limit = recent_limit
        self._trend_months = trend_months
        self._default_time_range = dashboard_settings.default_time_range

    def default_selection(self) -> FilterSelection:
        return FilterSelection(time_range=self._default_time_range)

    def view(self, selection: Optional[FilterSelection] = None) -> DashboardView:
        return build_dashboard(
            self._ledger.records,
            selection or self.default_selection(),
            self._clock(),
            recent_limit=self._recent_limit,
            trend_months=self._trend_months,
        )


def create_app_components(
    use_storage: bool = True,
    storage: Optional[ExpenseStorageInterface] = None,
    clock: Optional[Clock] = None,
    id_factory: Optional[IdFactory] = None,
    activity_logger: Optional[ActivityLogger] = None,
) -> tuple[ExpenseEntryFlow, DashboardFlow, ExpenseLedger]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the local JSON blob store.
                    Set to False for an in-memory session.
        storage: Explicit storage backend; overrides use_storage.
        clock: Supplies "now"; defaults to the local wall clock.
        id_factory: Supplies new expense ids; defaults to uuid4 strings.

    Returns:
        (entry_flow, dashboard_flow, ledger)
    """
    configure_logging(get_settings().app.debug_mode)
    clock = clock or local_now
    activity_logger = activity_logger or ActivityLogger()

    if storage is None:
        blob_store = JsonFileBlobStore() if use_storage else InMemoryBlobStore()
        storage = BlobExpenseStorage(blob_store)

    ledger = load_ledger(storage, clock, activity_logger)

    entry_flow = ExpenseEntryFlow(
        ledger=ledger,
        storage=storage,
        validator=ExpenseValidator(clock),
        id_factory=id_factory,
        activity_logger=activity_logger,
    )
    dashboard_flow = DashboardFlow(ledger=ledger, clock=clock)

    return entry_flow, dashboard_flow, ledger
