# housepoints/services/entries.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.database.models import AwardCategory
from housepoints.database.repo.classes_repo import get_class
from housepoints.database.repo.entries_repo import delete_entry, upsert_entry
from housepoints.database.repo.houses_repo import find_house
from housepoints.database.repo.weeks_repo import ensure_week
from housepoints.database.tx import transactional
from housepoints.errors import EntryValidationError, NotFoundError
from housepoints.utils.clock import TimeProvider
from housepoints.utils.weeks import deadline_for, entry_week_start

log = logging.getLogger(__name__)

AWARD_CATEGORIES: tuple[str, ...] = tuple(c.value for c in AwardCategory)


@dataclass(frozen=True, slots=True)
class SubmitResult:
    entry_id: int
    week_id: int
    week_start: date
    deadline_at: datetime  # aware, school zone
    is_late: bool


def _clean_points(points: object) -> int:
    if isinstance(points, bool):
        raise EntryValidationError("points", "must be a positive whole number")
    try:
        value = int(points)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise EntryValidationError("points", "must be a positive whole number") from e
    if isinstance(points, float) and points != value:
        raise EntryValidationError("points", "must be a positive whole number")
    if value <= 0:
        raise EntryValidationError("points", "must be greater than zero")
    return value


def _clean_category(category: str | None) -> str:
    if not category or not category.strip():
        return AwardCategory.GENERAL.value
    category = category.strip()
    if category not in AWARD_CATEGORIES:
        raise EntryValidationError("award_category", f"unknown category {category!r}")
    return category


class EntryService:
    def __init__(self, provider: TimeProvider) -> None:
        self.provider = provider

    async def submit(
        self,
        session: AsyncSession,
        *,
        class_id: int,
        house_id: int | str,
        points: object,
        submitted_by_email: str,
        award_category: str | None = None,
        notes: str | None = None,
    ) -> SubmitResult:
        """
        Attribute a submission to the entry week and upsert it.
        `house_id` may also be a house slug ("fire").
        The deadline is reported (is_late) but never enforced: late entries
        are stored like any other.
        """
        value = _clean_points(points)
        category = _clean_category(award_category)
        email = (submitted_by_email or "").strip().lower()
        if not email:
            raise EntryValidationError("submitted_by_email", "is required")
        notes = (notes or "").strip() or None

        now = self.provider.now()
        ws = entry_week_start(now)
        deadline = deadline_for(ws)
        is_late = now >= deadline

        async with transactional(session):
            if await get_class(session, class_id) is None:
                raise NotFoundError("class", class_id)
            house = await find_house(session, house_id)
            if house is None:
                raise NotFoundError("house", house_id)

            week = await ensure_week(session, ws, tz=self.provider.tz)
            try:
                entry = await upsert_entry(
                    session,
                    week_id=week.id,
                    class_id=class_id,
                    house_id=house.id,
                    points=value,
                    award_category=category,
                    notes=notes,
                    submitted_by_email=email,
                    entry_date=now.date(),
                )
            except IntegrityError as e:
                # FK race with an admin delete
                raise NotFoundError("class/house", (class_id, house.id)) from e

        if is_late:
            log.info(
                "Late submission accepted: class=%s house=%s week=%s (deadline %s)",
                class_id,
                house.id,
                ws.isoformat(),
                deadline.isoformat(),
            )
        else:
            log.debug("Entry %s saved for week %s", entry.id, ws.isoformat())

        return SubmitResult(
            entry_id=int(entry.id),
            week_id=week.id,
            week_start=ws,
            deadline_at=self.provider.localize(deadline),
            is_late=is_late,
        )

    async def remove(self, session: AsyncSession, entry_id: int) -> None:
        async with transactional(session):
            deleted = await delete_entry(session, entry_id)
        if not deleted:
            raise NotFoundError("entry", entry_id)
        log.info("Entry %s deleted", entry_id)
