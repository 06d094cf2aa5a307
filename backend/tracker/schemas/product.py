# tracker/schemas/product.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Enums are shared with the ORM so values round-trip unchanged
from tracker.models.product import ProductCategory, ProductStatus


class ProductBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=255)
    game_account: str = Field(..., min_length=1)
    game_name: str = Field(..., min_length=1, max_length=255)
    category: ProductCategory
    date_received: Optional[datetime] = None
    cost_price: Decimal = Field(..., ge=0)
    selling_price: Decimal = Field(..., ge=0)
    status: ProductStatus = ProductStatus.available
    evidence: Optional[str] = None
    month_record_id: int

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(ProductBase):
    # user_id is stamped from the caller, never taken from the body
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    game_account: Optional[str] = Field(None, min_length=1)
    game_name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[ProductCategory] = None
    date_received: Optional[datetime] = None
    cost_price: Optional[Decimal] = Field(None, ge=0)
    selling_price: Optional[Decimal] = Field(None, ge=0)
    status: Optional[ProductStatus] = None
    evidence: Optional[str] = None
    month_record_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ProductRead(BaseModel):
    id: int
    name: str
    game_account: str
    game_name: str
    category: ProductCategory
    date_received: datetime
    # null for callers not allowed to see money columns
    cost_price: Optional[Decimal | float] = None
    selling_price: Optional[Decimal | float] = None
    profit: Optional[Decimal | float] = None
    status: ProductStatus
    evidence: Optional[str] = None
    month_record_id: int
    user_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    # ensure JSON returns numbers, not strings
    @field_serializer("cost_price", "selling_price", "profit")
    def _serialize_money(self, v: Optional[Decimal | float]):
        return float(v) if v is not None else v

    def masked(self) -> "ProductRead":
        return self.model_copy(update={"cost_price": None, "selling_price": None, "profit": None})
