from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import NamedTuple

# Weeks start on Monday (datetime.weekday() == 0), independent of locale.
WEEK_START = 0


class PeriodBounds(NamedTuple):
    day: datetime
    week: datetime
    month: datetime
    prev_day: datetime
    prev_week: datetime
    prev_month: datetime


def _aware(t: datetime) -> datetime:
    # naive input is taken as UTC
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t


def day_start(t: datetime) -> datetime:
    """Midnight of the calendar day containing t, in t's own zone."""
    return _aware(t).replace(hour=0, minute=0, second=0, microsecond=0)


def week_start(t: datetime) -> datetime:
    """Midnight of the Monday of the week containing t."""
    d = day_start(t)
    return d - timedelta(days=(d.weekday() - WEEK_START) % 7)


def month_start(t: datetime) -> datetime:
    """Midnight of the first day of the month containing t."""
    return day_start(t).replace(day=1)


def previous_day(t: datetime) -> datetime:
    """
    Start of the day before the day starting at t.
    t must already be a day_start() boundary.
    """
    return t - timedelta(days=1)


def previous_week(t: datetime) -> datetime:
    """t must already be a week_start() boundary."""
    return t - timedelta(days=7)


def previous_month(t: datetime) -> datetime:
    """
    Start of the month before the month starting at t.

    Steps back to the last day of the previous month and then to its first
    day, so month lengths and year changes come out of the calendar rather
    than a fixed day count. t must already be a month_start() boundary.
    """
    return (t - timedelta(days=1)).replace(day=1)


def period_bounds(now: datetime) -> PeriodBounds:
    """All six boundaries used by the distance statistics, relative to now."""
    d = day_start(now)
    w = week_start(now)
    m = month_start(now)
    return PeriodBounds(
        day=d,
        week=w,
        month=m,
        prev_day=previous_day(d),
        prev_week=previous_week(w),
        prev_month=previous_month(m),
    )
