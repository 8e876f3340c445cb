"""Calendar period boundaries.

All boundaries are local-time midnights. Weeks start on Monday.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from monitor.stats import PeriodKind


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Monday 00:00 of the ISO week containing now."""
    day = start_of_day(now)
    return day - timedelta(days=day.weekday())


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def start_of_year(now: datetime) -> datetime:
    return start_of_day(now).replace(month=1, day=1)


_PERIOD_STARTS = {
    PeriodKind.DAY: start_of_day,
    PeriodKind.WEEK: start_of_week,
    PeriodKind.MONTH: start_of_month,
    PeriodKind.YEAR: start_of_year,
}


def period_start(kind: PeriodKind, now: datetime) -> datetime:
    """Canonical start of the period of the given kind containing now.

    ALL_TIME has no calendar boundary, so its start is now itself.
    """
    if kind is PeriodKind.ALL_TIME:
        return now
    return _PERIOD_STARTS[kind](now)


def needs_rollover(kind: PeriodKind, bucket_start: datetime, now: datetime) -> bool:
    """Whether a bucket starting at bucket_start is stale at now.

    A bucket is stale once its start falls in a different period than now,
    in either direction, so a clock moved backwards also resets it.
    """
    if kind is PeriodKind.ALL_TIME:
        return False
    return period_start(kind, bucket_start) != period_start(kind, now)


__all__ = [
    "needs_rollover",
    "period_start",
    "start_of_day",
    "start_of_month",
    "start_of_week",
    "start_of_year",
]
