# housepoints/scheduler/jobs.py
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from housepoints.config.settings import Settings
from housepoints.database.session import Database
from housepoints.services.reports import ReportService
from housepoints.services.weeks import WeekService
from housepoints.utils.clock import TimeProvider
from housepoints.utils.weeks import DEADLINE_TIME, REOPEN_TIME

log = logging.getLogger(__name__)

# a few minutes after the deadline so last-second entries are counted
SUMMARY_DELAY_MINUTES = 5


# -------------------------------------------------
# Jobs
# -------------------------------------------------

async def open_upcoming_week(db: Database, provider: TimeProvider) -> None:
    """At the reopen instant the entry week rolls over; create its row up front."""
    async with db.session() as session:
        week = await WeekService(provider).current_entry_week(session)
        await session.commit()
    log.info("Entry week open: %s (id=%s)", week.week_start.isoformat(), week.id)


async def write_weekly_summary(db: Database, provider: TimeProvider, settings: Settings) -> None:
    async with db.session() as session:
        await ReportService(provider, settings.reports_dir).write_weekly_summary(session)
        await session.commit()


# -------------------------------------------------
# Scheduler setup
# -------------------------------------------------

def build_scheduler(db: Database, settings: Settings, provider: TimeProvider) -> AsyncIOScheduler:
    """
    Creates and returns an AsyncIOScheduler with our jobs registered.
    Triggers run in the school's zone so they follow DST.
    """
    scheduler = AsyncIOScheduler(timezone=settings.timezone)

    scheduler.add_job(
        open_upcoming_week,
        trigger=CronTrigger(
            day_of_week="fri",
            hour=REOPEN_TIME.hour,
            minute=REOPEN_TIME.minute,
            timezone=settings.timezone,
        ),
        kwargs={"db": db, "provider": provider},
        id="open_upcoming_week",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=300,
    )

    scheduler.add_job(
        write_weekly_summary,
        trigger=CronTrigger(
            day_of_week="fri",
            hour=DEADLINE_TIME.hour,
            minute=DEADLINE_TIME.minute + SUMMARY_DELAY_MINUTES,
            timezone=settings.timezone,
        ),
        kwargs={"db": db, "provider": provider, "settings": settings},
        id="write_weekly_summary",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=600,
    )

    return scheduler
