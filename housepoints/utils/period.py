# housepoints/utils/period.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Awaitable, Callable

from housepoints.utils.clock import TimeProvider
from housepoints.utils.weeks import week_end, week_start

log = logging.getLogger(__name__)

PERIOD_WEEK = "week"
PERIOD_TERM = "term"

ActiveTermLookup = Callable[[], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class PeriodRange:
    kind: str  # "week" | "term"
    start: date
    end: date  # inclusive


def normalize_period(period: str | None) -> str:
    # anything that isn't "term" reports on the week
    return PERIOD_TERM if (period or "").strip().lower() == PERIOD_TERM else PERIOD_WEEK


def week_range(
    now: date | datetime | None = None,
    *,
    provider: TimeProvider | None = None,
) -> PeriodRange:
    """Plain calendar week. The reopen rule does NOT apply to aggregation."""
    start = week_start(now, provider=provider)
    return PeriodRange(kind=PERIOD_WEEK, start=start, end=week_end(start))


def previous_week_range(current: PeriodRange) -> PeriodRange | None:
    if current.kind != PERIOD_WEEK:
        return None
    start = current.start - timedelta(days=7)
    return PeriodRange(kind=PERIOD_WEEK, start=start, end=week_end(start))


async def resolve_period_range(
    period: str | None,
    active_term_lookup: ActiveTermLookup,
    *,
    provider: TimeProvider | None = None,
    now: date | datetime | None = None,
) -> PeriodRange:
    """
    Date range for aggregation.

    "term" -> the active term's dates. Any lookup failure (exception, no
    active row, row without dates) is logged and falls back to the current
    calendar week, so callers always get a range.
    """
    if normalize_period(period) == PERIOD_TERM:
        try:
            term = await active_term_lookup()
        except Exception:
            log.exception("Active term lookup failed, falling back to week")
        else:
            start = getattr(term, "start_date", None)
            end = getattr(term, "end_date", None)
            if start and end:
                return PeriodRange(kind=PERIOD_TERM, start=start, end=end)
            if term is None:
                log.warning("No active term configured, falling back to week")
            else:
                log.warning(
                    "Active term %r has no date range, falling back to week",
                    getattr(term, "id", None),
                )

    return week_range(now, provider=provider)
