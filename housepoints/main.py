# housepoints/main.py
import asyncio
import contextlib
import logging

from housepoints.config import Settings, ensure_timezone
from housepoints.database import Database
from housepoints.scheduler import setup_scheduler
from housepoints.utils.clock import TimeProvider
from housepoints.utils.weeks import entry_week_start, week_start


def setup_logging(is_dev: bool) -> None:
    """
    Clean production logging:
    - app logs: INFO (or DEBUG in dev)
    - SQLAlchemy / scheduler logs: WARNING+ (no query/pool spam)
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "apscheduler",
        "asyncpg",
        "aiosqlite",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("housepoints")

    # fatal if zone rules are missing
    ensure_timezone(settings.timezone)
    provider = TimeProvider(timezone=settings.timezone)
    log.info(
        "Local time %s (%s): calendar week %s, entry week %s",
        provider.now().isoformat(sep=" "),
        settings.timezone,
        week_start(provider=provider).isoformat(),
        entry_week_start(provider=provider).isoformat(),
    )

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    if not settings.scheduler_enabled:
        log.info("Scheduler disabled, nothing to run")
        await db.close()
        return

    scheduler = setup_scheduler(db, settings, provider)
    log.info("Scheduler started")

    stop = asyncio.Event()
    try:
        await stop.wait()
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    finally:
        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
