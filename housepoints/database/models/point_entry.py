# housepoints/database/models/point_entry.py
from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from housepoints.database.base import Base


class AwardCategory(str, enum.Enum):
    GENERAL = "General Award"
    BE_KIND = "Be Kind"
    BE_RESPONSIBLE = "Be Responsible"
    BE_SAFE = "Be Safe"
    BE_READY = "Be Ready"


class PointEntry(Base):
    """
    One row per (week, class, house). Re-submitting the same triple
    overwrites the row in place (see entries_repo.upsert_entry).
    entry_date is the local calendar date of the latest submission.
    """
    __tablename__ = "point_entries"
    __table_args__ = (
        UniqueConstraint("week_id", "class_id", "house_id", name="uq_point_entries_week_class_house"),
        Index("ix_point_entries_entry_date", "entry_date"),
        CheckConstraint("points > 0", name="ck_point_entries_points_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    week_id: Mapped[int] = mapped_column(ForeignKey("weeks.id", ondelete="CASCADE"), index=True)
    class_id: Mapped[int] = mapped_column(ForeignKey("classes.id", ondelete="CASCADE"), index=True)
    house_id: Mapped[int] = mapped_column(ForeignKey("houses.id", ondelete="CASCADE"), index=True)

    points: Mapped[int] = mapped_column(Integer)
    award_category: Mapped[str] = mapped_column(String(32), default=AwardCategory.GENERAL.value)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_by_email: Mapped[str] = mapped_column(String(255))

    entry_date: Mapped[date] = mapped_column(Date)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )
