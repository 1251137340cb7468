# housepoints/database/models/term.py
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from housepoints.database.base import Base


class Term(Base):
    """At most one row has is_active=True (enforced by terms_repo.set_active_term)."""
    __tablename__ = "terms"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_terms_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(64))
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
