# tracker/services/reports.py
from __future__ import annotations

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from tracker.models.product import Product, ProductStatus
from tracker.schemas.report import MonthSummary
from tracker.services.month_records import get_month_record


def _to_float(x) -> float:
    # SUM over Numeric comes back as Decimal on PostgreSQL, float on SQLite
    return float(x) if x is not None else 0.0


def month_summary(db: Session, month_record_id: int) -> MonthSummary:
    """Counts and money totals for one period; revenue and profit count sold items only."""
    record = get_month_record(db, month_record_id)

    sold = Product.status == ProductStatus.sold
    row = db.execute(
        select(
            func.count(Product.id),
            func.coalesce(func.sum(case((sold, 1), else_=0)), 0),
            func.coalesce(func.sum(Product.cost_price), 0),
            func.coalesce(func.sum(case((sold, Product.selling_price), else_=0)), 0),
            func.coalesce(func.sum(case((sold, Product.profit), else_=0)), 0),
        ).where(Product.month_record_id == month_record_id)
    ).one()

    total, sold_count, cost, revenue, profit = row
    return MonthSummary(
        month_record_id=record.id,
        month_name=record.name,
        is_locked=record.is_locked,
        total_products=int(total or 0),
        sold_products=int(sold_count or 0),
        available_products=int(total or 0) - int(sold_count or 0),
        total_cost=_to_float(cost),
        total_revenue=_to_float(revenue),
        total_profit=_to_float(profit),
    )
