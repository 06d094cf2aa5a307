# tracker/models/month_record.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, false, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.db import Base


class MonthRecord(Base):
    """An accounting period that groups products; locked periods are read-only."""

    __tablename__ = "month_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)  # e.g. "Month 1"
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Stamped by lock(); unlock leaves it in place
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true(), default=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false(), default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    products: Mapped[List["Product"]] = relationship(  # noqa: F821
        "Product",
        back_populates="month_record",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_month_records_is_locked", "is_locked"),
        Index("ix_month_records_is_active", "is_active"),
    )

    def __repr__(self) -> str:
        state = "locked" if self.is_locked else "open"
        return f"<MonthRecord {self.id} {self.name!r} ({state})>"
