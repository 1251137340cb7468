# housepoints/database/repo/classes_repo.py
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import SchoolClass
from housepoints.errors import ConflictError, NotFoundError, SchemaMissingError

_EDITABLE = (
    "name",
    "year_group",
    "teacher_title",
    "teacher_first_name",
    "teacher_last_name",
    "teacher_email",
)


async def list_classes(session: AsyncSession) -> list[SchoolClass]:
    try:
        res = await session.execute(select(SchoolClass).order_by(SchoolClass.name.asc()))
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("classes") from e
    return list(res.scalars().all())


async def get_class(session: AsyncSession, class_id: int) -> SchoolClass | None:
    try:
        return await session.get(SchoolClass, class_id)
    except (OperationalError, ProgrammingError) as e:
        raise SchemaMissingError("classes") from e


async def create_class(session: AsyncSession, *, name: str, **fields: Any) -> SchoolClass:
    unknown = set(fields) - set(_EDITABLE)
    if unknown:
        raise TypeError(f"Unknown class fields: {sorted(unknown)}")

    klass = SchoolClass(name=name.strip(), **fields)
    try:
        async with session.begin_nested():
            session.add(klass)
            await session.flush()
    except IntegrityError as e:
        raise ConflictError("class", "name", name) from e
    return klass


async def update_class(session: AsyncSession, class_id: int, **fields: Any) -> SchoolClass:
    unknown = set(fields) - set(_EDITABLE)
    if unknown:
        raise TypeError(f"Unknown class fields: {sorted(unknown)}")

    klass = await get_class(session, class_id)
    if klass is None:
        raise NotFoundError("class", class_id)

    try:
        async with session.begin_nested():
            for key, value in fields.items():
                setattr(klass, key, value.strip() if key == "name" and value else value)
            await session.flush()
    except IntegrityError as e:
        raise ConflictError("class", "name", fields.get("name")) from e
    return klass


async def delete_class(session: AsyncSession, class_id: int) -> bool:
    res = await session.execute(delete(SchoolClass).where(SchoolClass.id == class_id))
    return (res.rowcount or 0) > 0
