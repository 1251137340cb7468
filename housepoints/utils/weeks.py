# housepoints/utils/weeks.py
"""
Scoring-week arithmetic.

All datetimes here are naive wall-clock values in the school's zone
(see TimeProvider.now). Aware datetimes are projected into the provider's
zone first. A week is Monday 00:00 (inclusive) to the next Monday (exclusive).
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from housepoints.utils.clock import TimeProvider

FRIDAY_OFFSET = timedelta(days=4)
REOPEN_TIME = time(15, 15, 0)
DEADLINE_TIME = time(14, 25, 0)


def _wall_clock(instant: date | datetime | None, provider: TimeProvider | None) -> datetime:
    provider = provider or TimeProvider()
    if instant is None:
        return provider.now()
    if isinstance(instant, datetime):
        if instant.tzinfo is not None:
            return provider.to_wall_clock(instant)
        return instant
    return datetime.combine(instant, time.min)


def _require_monday(week_start: date) -> None:
    if week_start.weekday() != 0:
        raise ValueError(f"week_start must be a Monday, got {week_start.isoformat()}")


def week_start(
    instant: date | datetime | None = None,
    *,
    provider: TimeProvider | None = None,
) -> date:
    """Monday of the calendar week containing `instant` (Sunday -> six days back)."""
    day = _wall_clock(instant, provider).date()
    return day - timedelta(days=day.weekday())


def week_end(start: date) -> date:
    return start + timedelta(days=6)


def reopen_instant(start: date) -> datetime:
    """Friday 15:15 of the week; from here on new entries count for next week."""
    _require_monday(start)
    return datetime.combine(start + FRIDAY_OFFSET, REOPEN_TIME)


def entry_week_start(
    instant: date | datetime | None = None,
    *,
    provider: TimeProvider | None = None,
) -> date:
    """
    Week a NEW submission is attributed to.

    Same as week_start() until Friday 15:15:00, then the following Monday.
    The boundary itself already belongs to the next week.
    """
    current = _wall_clock(instant, provider)
    monday = week_start(current)
    if current >= reopen_instant(monday):
        return monday + timedelta(days=7)
    return monday


def deadline_for(start: date, tz: tzinfo | None = None) -> datetime:
    """
    Friday 14:25 of the week.

    Informational only, nothing rejects entries after it.
    With `tz` the result is an aware instant, otherwise naive wall-clock.
    """
    _require_monday(start)
    deadline = datetime.combine(start + FRIDAY_OFFSET, DEADLINE_TIME)
    if tz is not None:
        return deadline.replace(tzinfo=tz)
    return deadline
