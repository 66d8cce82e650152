"""
Dashboard assembly.

Runs the filter and summary path and the independent trend path over
one snapshot of the records and bundles the results into a DashboardView.
"""

from datetime import datetime
from typing import Sequence

from expense_ledger.aggregation.filters import filter_and_sort, recent_expenses
from expense_ledger.aggregation.summary import summarize
from expense_ledger.aggregation.trend import DEFAULT_TREND_MONTHS, monthly_trend
from expense_ledger.models.expense import (
    DashboardView,
    ExpenseRecord,
    FilterSelection,
    to_local,
)


def build_dashboard(
    records: Sequence[ExpenseRecord],
    selection: FilterSelection,
    now: datetime,
    recent_limit: int = 10,
    trend_months: int = DEFAULT_TREND_MONTHS,
) -> DashboardView:
    """Derive the complete dashboard view for one selection at `now`."""
    snapshot = tuple(records)
    filtered = filter_and_sort(snapshot, selection, now)

    return DashboardView(
        selection=selection,
        generated_at=to_local(now),
        expenses=list(filtered),
        recent=list(recent_expenses(filtered, recent_limit)),
        summary=summarize(filtered, selection.time_range),
        trend=monthly_trend(snapshot, trend_months),
    )
