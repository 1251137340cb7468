from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy import func, select

from housepoints.database.models import PointEntry, Week
from housepoints.database.repo.entries_repo import count_for_triple, list_entries
from housepoints.database.repo.weeks_repo import get_week
from housepoints.errors import EntryValidationError, NotFoundError
from housepoints.services.entries import EntryService
from tests.conftest import provider_at

MONDAY = date(2026, 10, 12)
NEXT_MONDAY = date(2026, 10, 19)


def _service(wall: datetime) -> EntryService:
    return EntryService(provider_at(wall))


async def test_submit_attributes_to_current_week_before_reopen(session, school):
    result = await _service(datetime(2026, 10, 14, 10, 0)).submit(
        session,
        class_id=school["3A"],
        house_id=1,
        points=5,
        submitted_by_email="Ada@School.local",
    )

    assert result.week_start == MONDAY
    assert result.is_late is False
    assert result.deadline_at.replace(tzinfo=None) == datetime(2026, 10, 16, 14, 25)

    entry = await session.get(PointEntry, result.entry_id)
    assert entry.submitted_by_email == "ada@school.local"
    assert entry.award_category == "General Award"
    assert entry.entry_date == date(2026, 10, 14)


async def test_submit_after_reopen_goes_to_next_week(session, school):
    result = await _service(datetime(2026, 10, 16, 15, 15)).submit(
        session, class_id=school["3A"], house_id=2, points=3, submitted_by_email="ada@school.local"
    )
    assert result.week_start == NEXT_MONDAY
    assert result.is_late is False
    assert (await get_week(session, NEXT_MONDAY)).id == result.week_id


async def test_late_submission_is_accepted_not_rejected(session, school):
    # after the 14:25 deadline but before the 15:15 reopen
    result = await _service(datetime(2026, 10, 16, 14, 50)).submit(
        session, class_id=school["3B"], house_id=3, points=4, submitted_by_email="bob@school.local"
    )
    assert result.is_late is True
    assert result.week_start == MONDAY
    assert await session.get(PointEntry, result.entry_id) is not None


async def test_resubmission_updates_in_place(session, school):
    service = _service(datetime(2026, 10, 13, 9, 0))
    first = await service.submit(
        session,
        class_id=school["3A"],
        house_id=1,
        points=5,
        submitted_by_email="ada@school.local",
        notes="first",
    )
    second = await _service(datetime(2026, 10, 15, 11, 0)).submit(
        session,
        class_id=school["3A"],
        house_id=1,
        points=9,
        submitted_by_email="ada@school.local",
        award_category="Be Kind",
        notes="second",
    )

    assert second.entry_id == first.entry_id
    assert await count_for_triple(session, week_id=first.week_id, class_id=school["3A"], house_id=1) == 1

    entry = await session.get(PointEntry, first.entry_id)
    await session.refresh(entry)
    assert entry.points == 9
    assert entry.notes == "second"
    assert entry.award_category == "Be Kind"
    assert entry.entry_date == date(2026, 10, 15)


async def test_same_class_other_house_is_separate(session, school):
    service = _service(datetime(2026, 10, 13, 9, 0))
    a = await service.submit(session, class_id=school["3A"], house_id=1, points=5, submitted_by_email="a@x")
    b = await service.submit(session, class_id=school["3A"], house_id=2, points=5, submitted_by_email="a@x")
    assert a.entry_id != b.entry_id
    assert len(await list_entries(session, week_id=a.week_id)) == 2


@pytest.mark.parametrize("points", [0, -1, "abc", None, True, 1.5])
async def test_invalid_points_rejected(session, school, points):
    with pytest.raises(EntryValidationError) as exc:
        await _service(datetime(2026, 10, 13, 9, 0)).submit(
            session, class_id=school["3A"], house_id=1, points=points, submitted_by_email="a@x"
        )
    assert exc.value.field == "points"


async def test_numeric_string_points_accepted(session, school):
    result = await _service(datetime(2026, 10, 13, 9, 0)).submit(
        session, class_id=school["3A"], house_id=1, points="7", submitted_by_email="a@x"
    )
    assert (await session.get(PointEntry, result.entry_id)).points == 7


async def test_email_required(session, school):
    with pytest.raises(EntryValidationError) as exc:
        await _service(datetime(2026, 10, 13, 9, 0)).submit(
            session, class_id=school["3A"], house_id=1, points=1, submitted_by_email="   "
        )
    assert exc.value.field == "submitted_by_email"


async def test_unknown_category_rejected(session, school):
    with pytest.raises(EntryValidationError):
        await _service(datetime(2026, 10, 13, 9, 0)).submit(
            session,
            class_id=school["3A"],
            house_id=1,
            points=1,
            submitted_by_email="a@x",
            award_category="Be Loud",
        )


async def test_unknown_class_or_house(session, school):
    service = _service(datetime(2026, 10, 13, 9, 0))
    with pytest.raises(NotFoundError):
        await service.submit(session, class_id=999, house_id=1, points=1, submitted_by_email="a@x")
    with pytest.raises(NotFoundError):
        await service.submit(session, class_id=school["3A"], house_id=99, points=1, submitted_by_email="a@x")


async def test_remove_entry_keeps_week(session, school):
    service = _service(datetime(2026, 10, 13, 9, 0))
    result = await service.submit(session, class_id=school["3A"], house_id=1, points=2, submitted_by_email="a@x")

    await service.remove(session, result.entry_id)
    assert await session.get(PointEntry, result.entry_id) is None
    assert (await session.execute(select(func.count(Week.id)))).scalar_one() == 1

    with pytest.raises(NotFoundError):
        await service.remove(session, result.entry_id)


async def test_list_entries_by_date_range(session, school):
    await _service(datetime(2026, 10, 13, 9, 0)).submit(
        session, class_id=school["3A"], house_id=1, points=2, submitted_by_email="a@x"
    )
    await _service(datetime(2026, 10, 20, 9, 0)).submit(
        session, class_id=school["3A"], house_id=1, points=2, submitted_by_email="a@x"
    )
    rows = await list_entries(session, start=date(2026, 10, 12), end=date(2026, 10, 18))
    assert [r.entry_date for r in rows] == [date(2026, 10, 13)]
    assert len(await list_entries(session)) == 2


async def test_house_can_be_given_by_slug(session, school):
    result = await _service(datetime(2026, 10, 13, 9, 0)).submit(
        session, class_id=school["3A"], house_id="fire", points=3, submitted_by_email="a@x"
    )
    assert (await session.get(PointEntry, result.entry_id)).house_id == 3
