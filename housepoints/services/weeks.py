# housepoints/services/weeks.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.repo.weeks_repo import WeekRecord, ensure_week
from housepoints.database.tx import transactional
from housepoints.utils.clock import TimeProvider
from housepoints.utils.weeks import deadline_for, entry_week_start, reopen_instant, week_start


@dataclass(frozen=True, slots=True)
class CurrentWeekInfo:
    week_id: int
    week_start: date
    deadline_local: datetime  # aware, school zone
    deadline_at: datetime  # aware, UTC (as stored)
    reopens_at: datetime  # aware, school zone
    is_past_deadline: bool


class WeekService:
    """
    Wires the injected clock to the weeks table.
    Submissions use the entry week, aggregation uses the calendar week.
    """

    def __init__(self, provider: TimeProvider) -> None:
        self.provider = provider

    async def current_entry_week(self, session: AsyncSession) -> WeekRecord:
        return await self._ensure(session, entry_week_start(provider=self.provider))

    async def current_calendar_week(self, session: AsyncSession) -> WeekRecord:
        return await self._ensure(session, week_start(provider=self.provider))

    async def _ensure(self, session: AsyncSession, ws: date) -> WeekRecord:
        # rows created on read paths are kept; a caller transaction owns the commit
        async with transactional(session):
            return await ensure_week(session, ws, tz=self.provider.tz)

    async def current_week_info(self, session: AsyncSession) -> CurrentWeekInfo:
        week = await self.current_entry_week(session)
        deadline_local = deadline_for(week.week_start, self.provider.tz)
        now_local = self.provider.localize(self.provider.now())
        return CurrentWeekInfo(
            week_id=week.id,
            week_start=week.week_start,
            deadline_local=deadline_local,
            deadline_at=week.deadline_at,
            reopens_at=self.provider.localize(reopen_instant(week.week_start)),
            is_past_deadline=now_local >= deadline_local,
        )
