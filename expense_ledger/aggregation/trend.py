"""
Monthly trend over the full expense set.

The trend ignores the dashboard selection on purpose: it is the longer
horizon view. Expenses are bucketed by local calendar month, so the
trend groups by calendar date while filtering compares exact timestamps.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from expense_ledger.models.expense import (
    ExpenseRecord,
    MonthlyBucket,
    MonthlyTrend,
    to_local,
)


DEFAULT_TREND_MONTHS = 6

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_key(expense: ExpenseRecord) -> str:
    """YYYY-MM of the expense's local calendar date."""
    return to_local(expense.date).strftime("%Y-%m")


def month_label(key: str) -> str:
    """
    Short month name and two-digit year of a bucket, e.g. 'Oct 26'.

    Always English, whatever the process locale.
    """
    year, month = (int(part) for part in key.split("-"))
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def monthly_totals(expenses: Iterable[ExpenseRecord]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        totals[month_key(expense)] += expense.amount
    return dict(totals)


def monthly_trend(
    expenses: Iterable[ExpenseRecord],
    months: int = DEFAULT_TREND_MONTHS,
) -> MonthlyTrend:
    """
    Trailing monthly totals, oldest first, plus the peak value.

    Only months that have expenses appear; gaps are not zero-filled, so
    the series holds the last `months` active months.
    """
    totals = monthly_totals(expenses)
    # Zero-padded YYYY-MM keys sort chronologically
    keys = sorted(totals)[-months:] if months > 0 else []

    series = [
        MonthlyBucket(month=key, value=totals[key], label=month_label(key))
        for key in keys
    ]
    peak = max((bucket.value for bucket in series), default=Decimal("0"))
    return MonthlyTrend(series=series, peak=peak)
