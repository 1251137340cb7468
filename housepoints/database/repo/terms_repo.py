# housepoints/database/repo/terms_repo.py
from __future__ import annotations

from datetime import date

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import Term
from housepoints.errors import NotFoundError


async def get_active_term(session: AsyncSession) -> Term | None:
    """
    Lets store errors propagate; resolve_period_range decides how to degrade.
    """
    res = await session.execute(
        select(Term).where(Term.is_active.is_(True)).order_by(Term.id.asc()).limit(1)
    )
    return res.scalar_one_or_none()


async def list_terms(session: AsyncSession) -> list[Term]:
    res = await session.execute(select(Term).order_by(Term.start_date.desc()))
    return list(res.scalars().all())


async def set_active_term(session: AsyncSession, term_id: int) -> Term:
    term = await session.get(Term, term_id)
    if term is None:
        raise NotFoundError("term", term_id)

    await session.execute(update(Term).where(Term.id != term_id).values(is_active=False))
    term.is_active = True
    await session.flush()
    return term


async def create_term(
    session: AsyncSession,
    *,
    name: str,
    start_date: date,
    end_date: date,
    is_active: bool = False,
) -> Term:
    if end_date < start_date:
        raise ValueError("end_date must not be before start_date")

    term = Term(name=name.strip(), start_date=start_date, end_date=end_date, is_active=False)
    session.add(term)
    await session.flush()

    if is_active:
        await set_active_term(session, term.id)
    return term


async def update_term(
    session: AsyncSession,
    term_id: int,
    *,
    name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    is_active: bool | None = None,
) -> Term:
    term = await session.get(Term, term_id)
    if term is None:
        raise NotFoundError("term", term_id)

    new_start = start_date or term.start_date
    new_end = end_date or term.end_date
    if new_end < new_start:
        raise ValueError("end_date must not be before start_date")

    if name is not None:
        term.name = name.strip()
    term.start_date = new_start
    term.end_date = new_end

    if is_active is True:
        await set_active_term(session, term_id)
    elif is_active is False:
        term.is_active = False

    await session.flush()
    return term


async def delete_term(session: AsyncSession, term_id: int) -> bool:
    res = await session.execute(delete(Term).where(Term.id == term_id))
    return (res.rowcount or 0) > 0
