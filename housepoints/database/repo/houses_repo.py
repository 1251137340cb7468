# housepoints/database/repo/houses_repo.py
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import House
from housepoints.errors import ConflictError, NotFoundError, SchemaMissingError
from housepoints.utils.houses import HOUSE_DEFINITIONS, resolve_house_key


async def list_houses(session: AsyncSession) -> list[House]:
    try:
        res = await session.execute(select(House).order_by(House.id.asc()))
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("houses") from e
    return list(res.scalars().all())


async def get_house(session: AsyncSession, house_id: int) -> House | None:
    try:
        return await session.get(House, house_id)
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("houses") from e


async def create_house(
    session: AsyncSession,
    *,
    key: str,
    name: str,
    color: str | None = None,
    house_id: int | None = None,
) -> House:
    key = key.strip().lower()
    name = name.strip()
    house = House(key=key, name=name, color=color)
    if house_id is not None:
        house.id = house_id

    try:
        async with session.begin_nested():
            session.add(house)
            await session.flush()
    except IntegrityError as e:
        field, value = await _clashing_field(session, house_id=house_id, key=key, name=name)
        raise ConflictError("house", field, value) from e
    return house


async def _clashing_field(session: AsyncSession, *, house_id: int | None, key: str, name: str) -> tuple[str, object]:
    """Which unique column an insert collided on (id, key or name)."""
    checks = (("id", House.id, house_id), ("key", House.key, key), ("name", House.name, name))
    for field, column, value in checks:
        if value is None:
            continue
        res = await session.execute(select(House.id).where(column == value))
        if res.first() is not None:
            return field, value
    return "name", name


async def update_house(
    session: AsyncSession,
    house_id: int,
    *,
    name: str | None = None,
    color: str | None = None,
) -> House:
    house = await get_house(session, house_id)
    if house is None:
        raise NotFoundError("house", house_id)

    try:
        async with session.begin_nested():
            if name is not None:
                house.name = name.strip()
            if color is not None:
                house.color = color
            await session.flush()
    except IntegrityError as e:
        raise ConflictError("house", "name", name) from e
    return house


async def delete_house(session: AsyncSession, house_id: int) -> bool:
    res = await session.execute(delete(House).where(House.id == house_id))
    return (res.rowcount or 0) > 0


async def seed_default_houses(session: AsyncSession) -> int:
    """Insert the canonical five houses that are missing. Returns rows added."""
    existing = {h.key for h in await list_houses(session)}
    added = 0
    for d in HOUSE_DEFINITIONS:
        if d.key in existing:
            continue
        await create_house(session, key=d.key, name=d.name, color=d.color, house_id=d.numeric_id)
        added += 1
    return added


async def find_house(session: AsyncSession, ref: object) -> House | None:
    """
    Look a house up by slug ("fire"), canonical numeric id (3 / "3") or
    plain primary key for houses added later by an admin.
    """
    if ref is None or isinstance(ref, bool):
        return None

    key = resolve_house_key(ref)
    if key is None and isinstance(ref, str) and not ref.strip().isdigit():
        key = ref.strip().lower()

    if key is not None:
        try:
            res = await session.execute(select(House).where(House.key == key))
        except (OperationalError, ProgrammingError) as e:
            raise SchemaMissingError("houses") from e
        house = res.scalar_one_or_none()
        if house is not None:
            return house

    try:
        house_id = int(ref)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return await get_house(session, house_id)
