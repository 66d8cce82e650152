"""
Summary aggregation over a filtered expense set.

Produces total spend, daily average, category breakdown and the top
category. All functions are total: an empty set yields zeros, an empty
breakdown and no top category.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from expense_ledger.models.expense import (
    CategoryShare,
    ExpenseCategory,
    ExpenseRecord,
    SpendingSummary,
    TimeRange,
)


ZERO = Decimal("0")
ONE_DAY_SECONDS = Decimal(timedelta(days=1).total_seconds())


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def total_spend(expenses: Sequence[ExpenseRecord]) -> Decimal:
    """Sum of amounts, accumulated in list order."""
    total = ZERO
    for expense in expenses:
        total += expense.amount
    return total


def span_in_days(expenses: Sequence[ExpenseRecord]) -> int:
    """
    Inclusive day span between the earliest and latest expense.

    Measured on exact timestamps and rounded half-up, so two expenses
    36 hours apart span 3 days. Never less than 1.
    """
    dates = [expense.date for expense in expenses]
    elapsed = Decimal((max(dates) - min(dates)).total_seconds()) / ONE_DAY_SECONDS
    return max(1, round_half_up(elapsed) + 1)


def daily_average(
    expenses: Sequence[ExpenseRecord],
    time_range: TimeRange,
    total: Optional[Decimal] = None,
) -> Decimal:
    """
    Average spend per day.

    A fixed range divides by its day count. "All time" divides by the
    span of the expenses themselves, not by the time since the epoch.
    """
    if not expenses:
        return ZERO
    if total is None:
        total = total_spend(expenses)

    days = TimeRange(time_range).days
    if days is None:
        days = span_in_days(expenses)
    return total / Decimal(days)


def category_breakdown(expenses: Sequence[ExpenseRecord]) -> list[CategoryShare]:
    """
    Spend per category, in category declaration order.

    Categories with no spend are left out. Percentages are rounded one by
    one and may add up to 99 or 101; they are deliberately not rebalanced.
    """
    totals = {category: ZERO for category in ExpenseCategory}
    for expense in expenses:
        totals[expense.category] += expense.amount

    entries = [(category, value) for category, value in totals.items() if value > 0]
    grand_total = sum((value for _, value in entries), ZERO) or Decimal("1")

    return [
        CategoryShare(
            category=category,
            value=value,
            percentage=round_half_up(value / grand_total * 100),
        )
        for category, value in entries
    ]


def top_category(breakdown: Sequence[CategoryShare]) -> Optional[CategoryShare]:
    """Largest breakdown entry; the first one wins a tie."""
    if not breakdown:
        return None
    # max() returns the first of several equal maxima
    return max(breakdown, key=lambda share: share.value)


def summarize(
    expenses: Sequence[ExpenseRecord],
    time_range: TimeRange,
) -> SpendingSummary:
    """Compute every summary metric for an already filtered set."""
    total = total_spend(expenses)
    breakdown = category_breakdown(expenses)
    return SpendingSummary(
        total=total,
        daily_average=daily_average(expenses, time_range, total),
        breakdown=breakdown,
        top_category=top_category(breakdown),
    )
