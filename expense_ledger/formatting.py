"""
Display formatting for amounts, time ranges and trend buckets.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from expense_ledger.aggregation.trend import month_label
from expense_ledger.config import get_settings
from expense_ledger.models.expense import CENT, TimeRange


def format_currency(amount, symbol: Optional[str] = None) -> str:
    """
    Format an amount as currency with two decimals and thousands separators.

    The symbol defaults to the configured dashboard currency symbol.

    format_currency(Decimal("1234.5")) == "$1,234.50"
    format_currency(-3) == "-$3.00"
    """
    if symbol is None:
        symbol = get_settings().dashboard.currency_symbol
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def time_range_label(time_range: TimeRange) -> str:
    return TimeRange(time_range).label


def time_range_options() -> list[tuple[str, str]]:
    """(value, label) pairs in display order."""
    return [(time_range.value, time_range.label) for time_range in TimeRange]


__all__ = ["format_currency", "month_label", "time_range_label", "time_range_options"]
