"""
Aggregation Engine

Pure functions that turn a list of expenses plus a FilterSelection and
an explicit "now" into the numbers the dashboard shows.
"""

from expense_ledger.aggregation.dashboard import build_dashboard
from expense_ledger.aggregation.filters import (
    by_category,
    by_date_range,
    by_search_text,
    filter_and_sort,
    recent_expenses,
)
from expense_ledger.aggregation.summary import (
    category_breakdown,
    daily_average,
    summarize,
    top_category,
    total_spend,
)
from expense_ledger.aggregation.trend import month_label, monthly_trend
from expense_ledger.aggregation.window import EPOCH, resolve_window

__all__ = [
    "EPOCH",
    "build_dashboard",
    "by_category",
    "by_date_range",
    "by_search_text",
    "category_breakdown",
    "daily_average",
    "filter_and_sort",
    "month_label",
    "monthly_trend",
    "recent_expenses",
    "resolve_window",
    "summarize",
    "top_category",
    "total_spend",
]
