# housepoints/scripts/seed_houses.py
from __future__ import annotations

import asyncio

from housepoints.config import Settings
from housepoints.database.repo.houses_repo import seed_default_houses
from housepoints.database.session import Database


async def main() -> None:
    settings = Settings.load()
    db = Database(settings.database_url)
    await db.init_models()

    async with db.session() as session:
        added = await seed_default_houses(session)
        await session.commit()

    await db.close()
    print(f"Seeded {added} house(s)")


if __name__ == "__main__":
    asyncio.run(main())
