# housepoints/utils/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo

from housepoints.config.settings import DEFAULT_TIMEZONE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class TimeProvider:
    """
    Projects an instant into one fixed named zone.

    now() returns a NAIVE datetime holding the local wall-clock fields
    (year..second). Downstream week maths works on those fields directly
    and never re-derives the zone. The host TZ is never consulted.

    `clock` is injectable; tests pass a lambda returning a fixed instant.
    A naive value from `clock` is read as UTC.
    """

    timezone: str = DEFAULT_TIMEZONE
    clock: Callable[[], datetime] = utc_now

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def to_wall_clock(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self.tz).replace(tzinfo=None, microsecond=0)

    def now(self) -> datetime:
        return self.to_wall_clock(self.clock())

    def today(self) -> date:
        return self.now().date()

    def localize(self, wall: datetime) -> datetime:
        """Attach the zone to a naive wall-clock value (-> absolute instant)."""
        if wall.tzinfo is not None:
            return wall.astimezone(self.tz)
        return wall.replace(tzinfo=self.tz)


def resolve_now(provider: TimeProvider | None = None) -> datetime:
    return (provider or TimeProvider()).now()
