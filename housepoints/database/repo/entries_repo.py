# housepoints/database/repo/entries_repo.py
from __future__ import annotations

from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import PointEntry
from housepoints.database.repo._dialect import insert_for


async def upsert_entry(
    session: AsyncSession,
    *,
    week_id: int,
    class_id: int,
    house_id: int,
    points: int,
    award_category: str,
    notes: str | None,
    submitted_by_email: str,
    entry_date: date,
) -> PointEntry:
    """
    Submit-or-replace for (week, class, house).
    The unique constraint makes this atomic; no application lock needed.
    Does not commit.
    """
    stmt = (
        insert_for(session, PointEntry)
        .values(
            week_id=week_id,
            class_id=class_id,
            house_id=house_id,
            points=points,
            award_category=award_category,
            notes=notes,
            submitted_by_email=submitted_by_email,
            entry_date=entry_date,
        )
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["week_id", "class_id", "house_id"],
        set_={
            "points": stmt.excluded.points,
            "award_category": stmt.excluded.award_category,
            "notes": stmt.excluded.notes,
            "submitted_by_email": stmt.excluded.submitted_by_email,
            "entry_date": stmt.excluded.entry_date,
            "updated_at": func.now(),
        },
    )
    await session.execute(stmt)

    res = await session.execute(
        select(PointEntry)
        .where(
            PointEntry.week_id == week_id,
            PointEntry.class_id == class_id,
            PointEntry.house_id == house_id,
        )
        .execution_options(populate_existing=True)
    )
    return res.scalar_one()


async def get_entry(session: AsyncSession, entry_id: int) -> PointEntry | None:
    return await session.get(PointEntry, entry_id)


async def delete_entry(session: AsyncSession, entry_id: int) -> bool:
    """Admin removal. Leaves the week row alone."""
    res = await session.execute(delete(PointEntry).where(PointEntry.id == entry_id))
    return (res.rowcount or 0) > 0


async def list_entries(
    session: AsyncSession,
    *,
    start: date | None = None,
    end: date | None = None,
    week_id: int | None = None,
) -> list[PointEntry]:
    q = select(PointEntry)
    if start is not None and end is not None:
        q = q.where(PointEntry.entry_date.between(start, end))
    if week_id is not None:
        q = q.where(PointEntry.week_id == week_id)
    q = q.order_by(PointEntry.entry_date.desc(), PointEntry.id.desc())

    res = await session.execute(q)
    return list(res.scalars().all())


async def count_for_triple(session: AsyncSession, *, week_id: int, class_id: int, house_id: int) -> int:
    res = await session.execute(
        select(func.count(PointEntry.id)).where(
            PointEntry.week_id == week_id,
            PointEntry.class_id == class_id,
            PointEntry.house_id == house_id,
        )
    )
    return int(res.scalar_one())
