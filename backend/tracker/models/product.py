# tracker/models/product.py
from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.db import Base


# ---- Enums -------------------------------------------------------------------
class ProductCategory(str, enum.Enum):
    game_account = "Game Account"
    in_game_items = "In-Game Items"


class ProductStatus(str, enum.Enum):
    available = "available"
    sold = "sold"


def _enum_values(e: type[enum.Enum]) -> list[str]:
    # store "Game Account", not "game_account"
    return [m.value for m in e]


# ---- Model -------------------------------------------------------------------
class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Core
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    game_account: Mapped[str] = mapped_column(Text, nullable=False)
    game_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[ProductCategory] = mapped_column(
        Enum(ProductCategory, name="product_category", values_callable=_enum_values),
        nullable=False,
    )
    date_received: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Money (profit is derived but stored; see services.products)
    cost_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    selling_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    profit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    status: Mapped[ProductStatus] = mapped_column(
        Enum(ProductStatus, name="product_status", values_callable=_enum_values),
        nullable=False,
        default=ProductStatus.available,
    )
    evidence: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Links
    month_record_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("month_records.id"), nullable=False
    )
    month_record = relationship("MonthRecord", back_populates="products")

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_products_month_record_id", "month_record_id"),
        Index("ix_products_category", "category"),
        Index("ix_products_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name!r} month={self.month_record_id}>"
