# housepoints/database/repo/weeks_repo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo

from sqlalchemy import select
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import Week
from housepoints.database.repo._dialect import insert_for
from housepoints.errors import SchemaMissingError
from housepoints.utils.weeks import deadline_for


@dataclass(frozen=True, slots=True)
class WeekRecord:
    id: int
    week_start: date
    deadline_at: datetime  # aware, UTC


def _to_record(row: Week) -> WeekRecord:
    deadline = row.deadline_at
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    return WeekRecord(id=int(row.id), week_start=row.week_start, deadline_at=deadline)


def deadline_utc(week_start: date, tz: tzinfo) -> datetime:
    # naive UTC for storage (columns are timezone=False)
    return deadline_for(week_start, tz).astimezone(timezone.utc).replace(tzinfo=None)


async def get_week(session: AsyncSession, week_start: date) -> WeekRecord | None:
    try:
        res = await session.execute(select(Week).where(Week.week_start == week_start))
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("weeks") from e
    row = res.scalar_one_or_none()
    return _to_record(row) if row else None


async def ensure_week(session: AsyncSession, week_start: date, *, tz: tzinfo) -> WeekRecord:
    """
    Get-or-create the row for week_start.

    INSERT ... ON CONFLICT DO NOTHING, then an unconditional read-back, so
    concurrent first calls converge on the same row via the unique key.
    An existing row keeps whatever deadline it was created with.
    Does not commit.
    """
    if week_start.weekday() != 0:
        raise ValueError(f"week_start must be a Monday, got {week_start.isoformat()}")

    stmt = (
        insert_for(session, Week)
        .values(week_start=week_start, deadline_at=deadline_utc(week_start, tz))
        .on_conflict_do_nothing(index_elements=["week_start"])
    )
    try:
        await session.execute(stmt)
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("weeks") from e

    week = await get_week(session, week_start)
    if week is None:
        # only possible if the row was deleted between insert and read-back
        raise RuntimeError(f"Week {week_start.isoformat()} vanished after insert")
    return week


async def list_weeks(session: AsyncSession, limit: int = 52) -> list[WeekRecord]:
    try:
        res = await session.execute(select(Week).order_by(Week.week_start.desc()).limit(limit))
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("weeks") from e
    return [_to_record(row) for row in res.scalars().all()]
