"""
Record Store

The in-memory expense collection. Mutations never touch an existing
collection: `add_expense` and `remove_expense` return a new tuple, and
ExpenseLedger swaps its snapshot reference under a write lock. A reader
holding `ledger.records` keeps a consistent snapshot for as long as it
needs one.
"""

import threading
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from expense_ledger.models.expense import (
    ExpenseCategory,
    ExpenseRecord,
    PaymentMethod,
)


def add_expense(
    records: tuple[ExpenseRecord, ...],
    expense: ExpenseRecord,
) -> tuple[ExpenseRecord, ...]:
    """Prepend an expense. No de-duplication."""
    return (expense,) + tuple(records)


def remove_expense(
    records: tuple[ExpenseRecord, ...],
    expense_id: str,
) -> tuple[ExpenseRecord, ...]:
    """Drop every expense with this id. Unknown ids are a no-op."""
    return tuple(expense for expense in records if expense.id != expense_id)


def default_expenses(now: datetime) -> tuple[ExpenseRecord, ...]:
    """The starter set used when nothing has been stored yet."""

    def days_ago(days: int) -> datetime:
        return now - timedelta(days=days)

    return (
        ExpenseRecord(
            id="seed-1",
            description="Groceries",
            amount=Decimal("86.42"),
            category=ExpenseCategory.FOOD,
            date=now,
            payment_method=PaymentMethod.CARD,
        ),
        ExpenseRecord(
            id="seed-2",
            description="Gym membership",
            amount=Decimal("45.00"),
            category=ExpenseCategory.HEALTH,
            date=days_ago(5),
            payment_method=PaymentMethod.TRANSFER,
        ),
        ExpenseRecord(
            id="seed-3",
            description="Ride share",
            amount=Decimal("18.75"),
            category=ExpenseCategory.TRANSPORTATION,
            date=days_ago(2),
            payment_method=PaymentMethod.CARD,
        ),
        ExpenseRecord(
            id="seed-4",
            description="Streaming subscription",
            amount=Decimal("13.99"),
            category=ExpenseCategory.ENTERTAINMENT,
            date=days_ago(20),
            payment_method=PaymentMethod.CARD,
        ),
        ExpenseRecord(
            id="seed-5",
            description="Electric bill",
            amount=Decimal("97.28"),
            category=ExpenseCategory.UTILITIES,
            date=days_ago(32),
            payment_method=PaymentMethod.TRANSFER,
        ),
    )


class ExpenseLedger:
    """
    Owned, copy-on-write expense collection for one session.

    Every write replaces the snapshot; nothing is mutated in place.
    """

    def __init__(self, records: Optional[Iterable[ExpenseRecord]] = None):
        self._records: tuple[ExpenseRecord, ...] = tuple(records or ())
        self._write_lock = threading.Lock()

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """The current snapshot."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def get(self, expense_id: str) -> Optional[ExpenseRecord]:
        for expense in self._records:
            if expense.id == expense_id:
                return expense
        return None

    def replace_all(self, records: Iterable[ExpenseRecord]) -> tuple[ExpenseRecord, ...]:
        with self._write_lock:
            self._records = tuple(records)
            return self._records

    def add(self, expense: ExpenseRecord) -> tuple[ExpenseRecord, ...]:
        with self._write_lock:
            self._records = add_expense(self._records, expense)
            return self._records

    def remove(self, expense_id: str) -> tuple[ExpenseRecord, ...]:
        with self._write_lock:
            self._records = remove_expense(self._records, expense_id)
            return self._records
