from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from housepoints.utils.weeks import (
    deadline_for,
    entry_week_start,
    reopen_instant,
    week_end,
    week_start,
)
from tests.conftest import provider_at

LONDON = ZoneInfo("Europe/London")


def _hourly(start: datetime, days: int):
    for h in range(days * 24):
        yield start + timedelta(hours=h, minutes=7 * (h % 9), seconds=h % 60)


def test_week_start_is_monday_and_contains_instant():
    for instant in _hourly(datetime(2026, 1, 1), 400):
        ws = week_start(instant)
        assert ws.weekday() == 0
        start = datetime.combine(ws, time.min)
        assert start <= instant < start + timedelta(days=7)


def test_week_start_sunday_goes_back_six_days():
    sunday = date(2026, 10, 18)
    assert sunday.weekday() == 6
    assert week_start(sunday) == date(2026, 10, 12)


def test_week_start_monday_midnight_is_itself():
    assert week_start(datetime(2026, 10, 12, 0, 0, 0)) == date(2026, 10, 12)
    assert week_start(datetime(2026, 10, 11, 23, 59, 59)) == date(2026, 10, 5)


def test_week_start_defaults_to_provider_now():
    provider = provider_at(datetime(2026, 10, 14, 9, 30))
    assert week_start(provider=provider) == date(2026, 10, 12)


def test_week_end_is_sunday():
    assert week_end(date(2026, 10, 12)) == date(2026, 10, 18)


def test_entry_week_reopen_boundary():
    assert entry_week_start(datetime(2026, 10, 16, 15, 14, 59)) == date(2026, 10, 12)
    assert entry_week_start(datetime(2026, 10, 16, 15, 15, 0)) == date(2026, 10, 19)


def test_entry_week_rest_of_weekend_is_next_week():
    assert entry_week_start(datetime(2026, 10, 17, 10, 0)) == date(2026, 10, 19)
    assert entry_week_start(datetime(2026, 10, 18, 23, 59, 59)) == date(2026, 10, 19)
    # Monday of the new week: back in step with the calendar week
    assert entry_week_start(datetime(2026, 10, 19, 0, 0)) == date(2026, 10, 19)


def test_entry_week_property_over_a_year():
    for instant in _hourly(datetime(2026, 1, 5), 365):
        ws = week_start(instant)
        if instant < reopen_instant(ws):
            assert entry_week_start(instant) == ws
        else:
            assert entry_week_start(instant) == ws + timedelta(days=7)


def test_entry_week_plain_date_is_midnight():
    friday = date(2026, 10, 16)
    assert entry_week_start(friday) == date(2026, 10, 12)


def test_entry_week_aware_instant_projected_to_local_zone():
    provider = provider_at(datetime(2026, 1, 1))
    # 14:15 UTC is 15:15 BST on this Friday
    instant = datetime(2026, 10, 16, 14, 15, tzinfo=timezone.utc)
    assert entry_week_start(instant, provider=provider) == date(2026, 10, 19)
    instant = datetime(2026, 10, 16, 14, 14, 59, tzinfo=timezone.utc)
    assert entry_week_start(instant, provider=provider) == date(2026, 10, 12)


def test_entry_week_defaults_to_provider_now():
    assert entry_week_start(provider=provider_at(datetime(2026, 10, 16, 15, 15))) == date(2026, 10, 19)
    assert entry_week_start(provider=provider_at(datetime(2026, 10, 16, 15, 0))) == date(2026, 10, 12)


def test_reopen_instant_is_friday_1515():
    assert reopen_instant(date(2026, 10, 12)) == datetime(2026, 10, 16, 15, 15, 0)


def test_deadline_is_friday_1425_for_every_monday():
    monday = date(2026, 1, 5)
    for i in range(60):
        ws = monday + timedelta(weeks=i)
        deadline = deadline_for(ws)
        assert deadline == datetime.combine(ws + timedelta(days=4), time(14, 25, 0))
        assert deadline.weekday() == 4


def test_deadline_aware_follows_dst():
    summer = deadline_for(date(2026, 10, 12), LONDON)
    assert summer.astimezone(timezone.utc) == datetime(2026, 10, 16, 13, 25, tzinfo=timezone.utc)

    winter = deadline_for(date(2026, 11, 2), LONDON)
    assert winter.astimezone(timezone.utc) == datetime(2026, 11, 6, 14, 25, tzinfo=timezone.utc)


def test_deadline_before_reopen():
    ws = date(2026, 10, 12)
    assert deadline_for(ws) < reopen_instant(ws)


@pytest.mark.parametrize("bad", [date(2026, 10, 13), date(2026, 10, 18)])
def test_deadline_rejects_non_monday(bad):
    with pytest.raises(ValueError):
        deadline_for(bad)
