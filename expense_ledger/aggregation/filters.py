"""
Filtering and ordering of expense records.

Each constraint of a FilterSelection is a small predicate; an expense is
kept when all of them hold. Results are newest first, and expenses with
identical timestamps keep their input order.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional

from expense_ledger.aggregation.window import resolve_window
from expense_ledger.models.expense import (
    ExpenseCategory,
    ExpenseRecord,
    FilterSelection,
)


Predicate = Callable[[ExpenseRecord], bool]


def by_category(category: Optional[ExpenseCategory]) -> Predicate:
    def _filter(expense: ExpenseRecord) -> bool:
        return category is None or expense.category == category

    return _filter


def by_search_text(search_text: str) -> Predicate:
    """
    Case-insensitive substring match on the description.

    Whitespace-only search text matches everything. Otherwise the text is
    matched as typed, surrounding spaces included.
    """
    needle = search_text.lower()

    def _filter(expense: ExpenseRecord) -> bool:
        if not search_text.strip():
            return True
        return needle in expense.description.lower()

    return _filter


def by_date_range(start: datetime, end: datetime) -> Predicate:
    def _filter(expense: ExpenseRecord) -> bool:
        return start <= expense.date <= end

    return _filter


def selection_predicates(selection: FilterSelection, now: datetime) -> list[Predicate]:
    start, end = resolve_window(selection.time_range, now)
    return [
        by_category(selection.category),
        by_search_text(selection.search_text),
        by_date_range(start, end),
    ]


def filter_and_sort(
    records: Iterable[ExpenseRecord],
    selection: FilterSelection,
    now: datetime,
) -> tuple[ExpenseRecord, ...]:
    """
    Apply a selection to the records and order the matches newest first.

    Pure: the input is never modified.
    """
    predicates = selection_predicates(selection, now)
    matches = [
        expense for expense in records
        if all(pred(expense) for pred in predicates)
    ]
    # sorted() is stable, so equal timestamps keep insertion order
    return tuple(sorted(matches, key=lambda expense: expense.date, reverse=True))


def recent_expenses(
    ordered: Iterable[ExpenseRecord],
    limit: int = 10,
) -> tuple[ExpenseRecord, ...]:
    """The first `limit` expenses of an already ordered sequence."""
    return tuple(ordered)[: max(0, limit)]
