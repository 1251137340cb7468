# housepoints/database/repo/_dialect.py
from __future__ import annotations

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def insert_for(session: AsyncSession, model):
    """
    Dialect-specific INSERT that supports ON CONFLICT.
    SQLite and PostgreSQL share the on_conflict_do_* API.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    raise RuntimeError(f"Upserts are not supported on dialect {dialect!r}")
