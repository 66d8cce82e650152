"""Shared fixtures for the Expense Ledger tests."""

from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest

from expense_ledger.models.expense import (
    ExpenseCategory,
    ExpenseRecord,
    PaymentMethod,
)


# A fixed local "now": Monday 19 October 2026, mid-afternoon
NOW = datetime(2026, 10, 19, 15, 30).astimezone()


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.calls = []

    def _record(self, level, event, **kwargs):
        self.calls.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def event_types(self, level=None):
        return [
            kwargs["event_type"]
            for lvl, _, kwargs in self.calls
            if level is None or lvl == level
        ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def make_expense():
    """Factory for valid expenses with sensible defaults."""
    ids = count(1)

    def _make(
        amount="10.00",
        category=ExpenseCategory.FOOD,
        date=NOW,
        description=None,
        expense_id=None,
        payment_method=PaymentMethod.CARD,
        note=None,
    ):
        n = next(ids)
        return ExpenseRecord(
            id=expense_id or f"exp-{n}",
            description=description or f"Expense {n}",
            amount=Decimal(str(amount)),
            category=category,
            date=date,
            payment_method=payment_method,
            note=note,
        )

    return _make
