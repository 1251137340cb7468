# housepoints/database/models/week.py
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from housepoints.database.base import Base


class Week(Base):
    """
    One row per scoring week, keyed by its Monday.
    deadline_at is UTC, cached at creation and never reconciled afterwards.
    """
    __tablename__ = "weeks"
    __table_args__ = (
        UniqueConstraint("week_start", name="uq_weeks_week_start"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    week_start: Mapped[date] = mapped_column(Date, index=True)
    deadline_at: Mapped[datetime] = mapped_column(DateTime(timezone=False))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
