"""
Time window resolution.

A fixed range of d days covers d local calendar days ending today:
the window opens at local midnight d - 1 days ago and closes at "now".
"All time" opens at the Unix epoch.
"""

from datetime import date, datetime, time, timedelta, timezone

from expense_ledger.models.expense import TimeRange, to_local


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def local_midnight(day: date) -> datetime:
    """Aware local datetime at the start of `day`."""
    return to_local(datetime.combine(day, time.min))


def resolve_window(time_range: TimeRange, now: datetime) -> tuple[datetime, datetime]:
    """
    Resolve a time range to an inclusive (from, to) timestamp pair.

    Never raises; every TimeRange has a window.
    """
    now = to_local(now)
    days = TimeRange(time_range).days
    if days is None:
        return EPOCH, now

    first_day = now.date() - timedelta(days=days - 1)
    return local_midnight(first_day), now
