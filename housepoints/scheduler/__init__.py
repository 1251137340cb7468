# housepoints/scheduler/__init__.py
from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from housepoints.config.settings import Settings
from housepoints.database.session import Database
from housepoints.utils.clock import TimeProvider

from .jobs import build_scheduler


def setup_scheduler(db: Database, settings: Settings, provider: TimeProvider) -> AsyncIOScheduler:
    """Build, start and return the scheduler. Must be called inside a running loop."""
    scheduler = build_scheduler(db, settings, provider)
    scheduler.start()
    return scheduler


__all__ = ["build_scheduler", "setup_scheduler"]
