# housepoints/database/repo/scoreboard_repo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import ColumnElement, and_, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import House, PointEntry, SchoolClass, Week


@dataclass(frozen=True, slots=True)
class HouseTotal:
    house_id: int
    key: str
    name: str
    color: str | None
    points: int


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    group: int | None  # house_id or year_group
    award_category: str
    points: int


@dataclass(frozen=True, slots=True)
class ClassTotal:
    class_id: int
    class_name: str
    teacher_name: str
    house_id: int
    award_category: str
    points: int


def _in_range(start: date, end: date, by_week: bool) -> ColumnElement[bool]:
    """
    by_week: entries attributed to a week starting in [start, end], so a
    Friday-afternoon entry counts toward the week it was filed for.
    Otherwise the local submission date (term ranges).
    """
    if by_week:
        weeks = select(Week.id).where(Week.week_start.between(start, end))
        return PointEntry.week_id.in_(weeks)
    return PointEntry.entry_date.between(start, end)


async def get_house_totals(session: AsyncSession, start: date, end: date, *, by_week: bool = False) -> list[HouseTotal]:
    """
    Every house, including those with nothing in the range (0 points).
    Ordered by points desc, then house id.
    """
    total = func.coalesce(func.sum(PointEntry.points), 0).label("points")
    q = (
        select(House.id, House.key, House.name, House.color, total)
        .outerjoin(
            PointEntry,
            and_(
                PointEntry.house_id == House.id,
                _in_range(start, end, by_week),
            ),
        )
        .group_by(House.id, House.key, House.name, House.color)
        .order_by(desc(total), House.id.asc())
    )
    res = await session.execute(q)

    rows: list[HouseTotal] = []
    for house_id, key, name, color, points in res.all():
        rows.append(
            HouseTotal(
                house_id=int(house_id),
                key=key,
                name=name,
                color=color,
                points=int(points or 0),
            )
        )
    return rows


async def get_house_category_totals(session: AsyncSession, start: date, end: date, *, by_week: bool = False) -> list[CategoryTotal]:
    q = (
        select(
            PointEntry.house_id,
            PointEntry.award_category,
            func.sum(PointEntry.points),
        )
        .where(_in_range(start, end, by_week))
        .group_by(PointEntry.house_id, PointEntry.award_category)
        .order_by(PointEntry.house_id.asc(), PointEntry.award_category.asc())
    )
    res = await session.execute(q)
    return [
        CategoryTotal(group=int(house_id), award_category=category, points=int(points or 0))
        for house_id, category, points in res.all()
    ]


async def get_year_category_totals(session: AsyncSession, start: date, end: date, *, by_week: bool = False) -> list[CategoryTotal]:
    q = (
        select(
            SchoolClass.year_group,
            PointEntry.award_category,
            func.sum(PointEntry.points),
        )
        .join(SchoolClass, SchoolClass.id == PointEntry.class_id)
        .where(_in_range(start, end, by_week))
        .group_by(SchoolClass.year_group, PointEntry.award_category)
        .order_by(SchoolClass.year_group.asc(), PointEntry.award_category.asc())
    )
    res = await session.execute(q)
    return [
        CategoryTotal(
            group=int(year) if year is not None else None,
            award_category=category,
            points=int(points or 0),
        )
        for year, category, points in res.all()
    ]


async def get_class_totals(session: AsyncSession, start: date, end: date, *, by_week: bool = False) -> list[ClassTotal]:
    q = (
        select(
            SchoolClass.id,
            SchoolClass.name,
            SchoolClass.teacher_title,
            SchoolClass.teacher_first_name,
            SchoolClass.teacher_last_name,
            PointEntry.house_id,
            PointEntry.award_category,
            func.sum(PointEntry.points),
        )
        .join(SchoolClass, SchoolClass.id == PointEntry.class_id)
        .where(_in_range(start, end, by_week))
        .group_by(
            SchoolClass.id,
            SchoolClass.name,
            SchoolClass.teacher_title,
            SchoolClass.teacher_first_name,
            SchoolClass.teacher_last_name,
            PointEntry.house_id,
            PointEntry.award_category,
        )
        .order_by(SchoolClass.name.asc(), PointEntry.house_id.asc())
    )
    res = await session.execute(q)

    rows: list[ClassTotal] = []
    for class_id, name, title, first, last, house_id, category, points in res.all():
        teacher = " ".join(p for p in (title, first, last) if p)
        rows.append(
            ClassTotal(
                class_id=int(class_id),
                class_name=name,
                teacher_name=teacher,
                house_id=int(house_id),
                award_category=category,
                points=int(points or 0),
            )
        )
    return rows


async def get_classes_without_entries(session: AsyncSession, week_id: int) -> list[SchoolClass]:
    submitted = select(PointEntry.class_id).where(PointEntry.week_id == week_id)
    q = (
        select(SchoolClass)
        .where(SchoolClass.id.not_in(submitted))
        .order_by(SchoolClass.name.asc())
    )
    res = await session.execute(q)
    return list(res.scalars().all())
