# housepoints/services/scoreboard.py
from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import SchoolClass, Term
from housepoints.database.repo.scoreboard_repo import (
    CategoryTotal,
    ClassTotal,
    HouseTotal,
    get_class_totals,
    get_classes_without_entries,
    get_house_category_totals,
    get_house_totals,
    get_year_category_totals,
)
from housepoints.database.repo.terms_repo import get_active_term
from housepoints.database.repo.weeks_repo import WeekRecord
from housepoints.database.tx import transactional
from housepoints.services.weeks import WeekService
from housepoints.utils.clock import TimeProvider
from housepoints.utils.period import PERIOD_WEEK, PeriodRange, previous_week_range, resolve_period_range


@dataclass(frozen=True, slots=True)
class Scoreboard:
    period: PeriodRange
    houses: list[HouseTotal]
    week: WeekRecord | None = None


@dataclass(frozen=True, slots=True)
class Breakdown:
    period: PeriodRange
    houses: list[CategoryTotal]
    years: list[CategoryTotal]
    previous_period: PeriodRange | None = None
    previous_houses: list[CategoryTotal] = field(default_factory=list)
    previous_years: list[CategoryTotal] = field(default_factory=list)


class ScoreboardService:
    """
    Week ranges aggregate by attributed week (weeks.week_start), term ranges
    by submission date. Each call is one unit of work: committed on its own,
    or a SAVEPOINT inside a transaction the caller already holds.
    """

    def __init__(self, provider: TimeProvider) -> None:
        self.provider = provider
        self.weeks = WeekService(provider)

    async def period_range(self, session: AsyncSession, period: str | None) -> tuple[PeriodRange, WeekRecord | None]:
        """
        Resolve the aggregation range. A week range also makes sure the
        calendar week row exists.
        Commits on its own unless the caller already holds a transaction.
        """

        async def _lookup() -> Term | None:
            # savepoint: a failed lookup must not undo the caller's work
            async with session.begin_nested():
                return await get_active_term(session)

        async with transactional(session):
            rng = await resolve_period_range(period, _lookup, provider=self.provider)
            week = None
            if rng.kind == PERIOD_WEEK:
                week = await self.weeks.current_calendar_week(session)
        return rng, week

    async def scoreboard(self, session: AsyncSession, period: str | None = PERIOD_WEEK) -> Scoreboard:
        async with transactional(session):
            rng, week = await self.period_range(session, period)
            houses = await get_house_totals(session, rng.start, rng.end, by_week=_by_week(rng))
        return Scoreboard(period=rng, houses=houses, week=week)

    async def breakdown(self, session: AsyncSession, period: str | None = PERIOD_WEEK) -> Breakdown:
        async with transactional(session):
            rng, _week = await self.period_range(session, period)
            by_week = _by_week(rng)
            houses = await get_house_category_totals(session, rng.start, rng.end, by_week=by_week)
            years = await get_year_category_totals(session, rng.start, rng.end, by_week=by_week)

            prev = previous_week_range(rng)
            if prev is None:
                return Breakdown(period=rng, houses=houses, years=years)

            return Breakdown(
                period=rng,
                houses=houses,
                years=years,
                previous_period=prev,
                previous_houses=await get_house_category_totals(session, prev.start, prev.end, by_week=True),
                previous_years=await get_year_category_totals(session, prev.start, prev.end, by_week=True),
            )

    async def by_class(self, session: AsyncSession, period: str | None = PERIOD_WEEK) -> tuple[PeriodRange, list[ClassTotal]]:
        async with transactional(session):
            rng, _week = await self.period_range(session, period)
            return rng, await get_class_totals(session, rng.start, rng.end, by_week=_by_week(rng))

    async def missing_classes(self, session: AsyncSession) -> list[SchoolClass]:
        """Classes with nothing submitted for the week currently open for entries."""
        async with transactional(session):
            week = await self.weeks.current_entry_week(session)
            return await get_classes_without_entries(session, week.id)


def _by_week(rng: PeriodRange) -> bool:
    return rng.kind == PERIOD_WEEK
