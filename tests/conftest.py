from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from housepoints.database.repo.classes_repo import create_class
from housepoints.database.repo.houses_repo import seed_default_houses
from housepoints.database.session import Database
from housepoints.utils.clock import TimeProvider

LONDON = "Europe/London"


def provider_at(wall: datetime, tz: str = LONDON) -> TimeProvider:
    """TimeProvider frozen at a local wall-clock time."""
    instant = wall.replace(tzinfo=ZoneInfo(tz))
    return TimeProvider(timezone=tz, clock=lambda: instant)


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.init_models()
    yield database
    await database.close()


@pytest.fixture
async def session(db):
    async with db.session() as s:
        yield s


@pytest.fixture
async def school(db):
    """Five default houses and three classes across two year groups."""
    async with db.session() as s:
        await seed_default_houses(s)
        classes = [
            await create_class(
                s,
                name="3A",
                year_group=3,
                teacher_title="Ms",
                teacher_first_name="Ada",
                teacher_last_name="Byron",
                teacher_email="ada@school.local",
            ),
            await create_class(s, name="3B", year_group=3, teacher_email="bob@school.local"),
            await create_class(s, name="5C", year_group=5),
        ]
        await s.commit()
    return {c.name: c.id for c in classes}
