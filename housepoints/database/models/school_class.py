# housepoints/database/models/school_class.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from housepoints.database.base import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(64), unique=True)
    year_group: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    teacher_title: Mapped[str | None] = mapped_column(String(16), nullable=True)
    teacher_first_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    teacher_last_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    teacher_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def teacher_display_name(self) -> str:
        parts = [p for p in (self.teacher_title, self.teacher_first_name, self.teacher_last_name) if p]
        return " ".join(parts)
