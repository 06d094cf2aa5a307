# tracker/schemas/report.py
from __future__ import annotations

from pydantic import BaseModel


class MonthSummary(BaseModel):
    month_record_id: int
    month_name: str
    is_locked: bool
    total_products: int
    sold_products: int
    available_products: int
    total_cost: float
    total_revenue: float
    total_profit: float
