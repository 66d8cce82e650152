"""
Data Models Package

This package contains all Pydantic models used in the Expense Ledger.
Records, selections and derived views all conform to these schemas.
"""

from expense_ledger.models.expense import (
    CategoryShare,
    DashboardView,
    ExpenseDraft,
    ExpenseCategory,
    ExpenseRecord,
    FilterSelection,
    MonthlyBucket,
    MonthlyTrend,
    PaymentMethod,
    SpendingSummary,
    TimeRange,
    ValidationIssue,
    ValidationResult,
    round_to_cents,
    to_local,
)
from expense_ledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Expense models
    "CategoryShare",
    "DashboardView",
    "ExpenseDraft",
    "ExpenseCategory",
    "ExpenseRecord",
    "FilterSelection",
    "MonthlyBucket",
    "MonthlyTrend",
    "PaymentMethod",
    "SpendingSummary",
    "TimeRange",
    "ValidationIssue",
    "ValidationResult",
    "round_to_cents",
    "to_local",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
