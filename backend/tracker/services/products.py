# tracker/services/products.py
"""
Product store: CRUD for products, consistent with the month record ledger.

Update and delete are refused (LockedPeriodError) while the owning month
record is locked. The lock check and the write happen under the same
month_record_guard(), so a concurrent lock() either lands before the check
(and the write is refused) or after the write has committed.

Creation is deliberately *not* lock-gated: late entries may still be booked
into a closed period. CREATE_BYPASSES_LOCK names that contract.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.models.month_record import MonthRecord
from tracker.models.product import Product, ProductCategory, ProductStatus
from tracker.services.common import (
    as_dict,
    check_patch_fields,
    coerce_enum,
    coerce_timestamp,
    committing,
    require_non_negative,
    require_text,
    to_id,
    utcnow,
)
from tracker.services.errors import LockedPeriodError, NotFoundError, ValidationError
from tracker.services.month_guard import load_month_record_for_write, month_record_guard

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREATE_BYPASSES_LOCK = True

UPDATABLE_FIELDS = frozenset({
    "name",
    "game_account",
    "game_name",
    "category",
    "date_received",
    "cost_price",
    "selling_price",
    "status",
    "evidence",
    "month_record_id",
})
# profit is derived from the two prices; the rest are set once at insert
READ_ONLY_FIELDS = frozenset({"id", "profit", "user_id", "created_at"})
NULLABLE_FIELDS = frozenset({"evidence"})

# A product moved between months while we waited for its owner's guard is
# re-read under the new owner's guard; this bounds how often that can happen.
_MAX_GUARD_ATTEMPTS = 3


def compute_profit(cost_price: Decimal, selling_price: Decimal) -> Decimal:
    return Decimal(selling_price) - Decimal(cost_price)


# ----------------------------
# Reads
# ----------------------------

def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def _list(db: Session, *conds) -> List[Product]:
    stmt = select(Product).where(*conds).order_by(Product.id)
    return list(db.execute(stmt).scalars().all())


def list_products(db: Session) -> List[Product]:
    return _list(db)


def list_products_by_month_record(db: Session, month_record_id: int) -> List[Product]:
    return _list(db, Product.month_record_id == month_record_id)


def list_products_by_category(db: Session, category: Any) -> List[Product]:
    return _list(db, Product.category == coerce_enum(ProductCategory, category, "category"))


def list_products_by_status(db: Session, status: Any) -> List[Product]:
    return _list(db, Product.status == coerce_enum(ProductStatus, status, "status"))


# ----------------------------
# Writes
# ----------------------------

def create_product(db: Session, payload: Any, *, user_id: int) -> Product:
    data = as_dict(payload)

    month_record_id = data.get("month_record_id")
    if month_record_id is None:
        raise ValidationError("month_record_id is required.")
    if user_id is None:
        raise ValidationError("user_id is required.")

    cost = require_non_negative(data.get("cost_price"), "cost_price")
    selling = require_non_negative(data.get("selling_price"), "selling_price")
    received = data.get("date_received")

    product = Product(
        name=require_text(data.get("name"), "name"),
        game_account=require_text(data.get("game_account"), "game_account"),
        game_name=require_text(data.get("game_name"), "game_name"),
        category=coerce_enum(ProductCategory, data.get("category"), "category"),
        date_received=coerce_timestamp(received, "date_received") if received else utcnow(),
        cost_price=cost,
        selling_price=selling,
        profit=compute_profit(cost, selling),
        status=coerce_enum(ProductStatus, data.get("status") or ProductStatus.available, "status"),
        evidence=data.get("evidence"),
        month_record_id=to_id(month_record_id, "month_record_id"),
        user_id=to_id(user_id, "user_id"),
    )

    if db.get(MonthRecord, product.month_record_id) is None:
        raise NotFoundError("Month record", product.month_record_id)

    with committing(db):
        db.add(product)
    db.refresh(product)
    logger.info("product created id=%s month_record_id=%s", product.id, product.month_record_id)
    return product


def _load_product(db: Session, product_id: int, *, for_update: bool = False):
    stmt = select(Product).where(Product.id == product_id).execution_options(populate_existing=True)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def _ensure_writable(db: Session, month_record_id: int, action: str) -> None:
    record = load_month_record_for_write(db, month_record_id)
    if record is not None and record.is_locked:
        logger.warning("product %s refused: month record %s is locked", action, month_record_id)
        raise LockedPeriodError(month_record_id, action)


def _with_owner_guard(
    db: Session,
    product_id: int,
    work: Callable[[Product], T],
    *also_guard: int,
) -> T:
    """Run `work(product)` under the guard of the product's owning month.

    `work` runs inside a transaction that commits when it returns and rolls
    back if it raises. NotFoundError if the product does not exist.
    """
    for _ in range(_MAX_GUARD_ATTEMPTS):
        peek = _load_product(db, product_id)
        if peek is None:
            raise NotFoundError("Product", product_id)
        owner_id = peek.month_record_id

        with month_record_guard(db, owner_id, *also_guard), committing(db):
            product = _load_product(db, product_id, for_update=True)
            if product is None:
                raise NotFoundError("Product", product_id)
            if product.month_record_id != owner_id:
                continue
            return work(product)

    raise RuntimeError(f"Product {product_id} kept moving between month records; giving up.")


def _apply_patch(product: Product, patch: Mapping[str, Any]) -> None:
    for field in ("name", "game_account", "game_name"):
        if field in patch:
            setattr(product, field, require_text(patch[field], field))
    if "category" in patch:
        product.category = coerce_enum(ProductCategory, patch["category"], "category")
    if "status" in patch:
        product.status = coerce_enum(ProductStatus, patch["status"], "status")
    if "date_received" in patch:
        product.date_received = coerce_timestamp(patch["date_received"], "date_received")
    if "evidence" in patch:
        product.evidence = patch["evidence"]
    if "month_record_id" in patch:
        product.month_record_id = to_id(patch["month_record_id"], "month_record_id")

    if "cost_price" in patch or "selling_price" in patch:
        if "cost_price" in patch:
            product.cost_price = require_non_negative(patch["cost_price"], "cost_price")
        if "selling_price" in patch:
            product.selling_price = require_non_negative(patch["selling_price"], "selling_price")
        product.profit = compute_profit(product.cost_price, product.selling_price)


def update_product(db: Session, product_id: int, patch: Any) -> Product:
    """Apply a partial update; all fields land or none do."""
    data: Dict[str, Any] = as_dict(patch, exclude_unset=True)

    read_only = sorted(set(data) & READ_ONLY_FIELDS)
    if read_only:
        raise ValidationError(f"Field(s) cannot be set directly: {', '.join(read_only)}")
    check_patch_fields(data, UPDATABLE_FIELDS, "product")
    # null means "leave as is" for columns that cannot hold null
    data = {k: v for k, v in data.items() if v is not None or k in NULLABLE_FIELDS}

    target = data.get("month_record_id")
    target = to_id(target, "month_record_id") if target is not None else None

    def _work(product: Product) -> Product:
        _ensure_writable(db, product.month_record_id, "update")
        if target is not None and target != product.month_record_id:
            dest = load_month_record_for_write(db, target)
            if dest is None:
                raise NotFoundError("Month record", target)
            if dest.is_locked:
                logger.warning("product move refused: month record %s is locked", target)
                raise LockedPeriodError(target, "move")
        _apply_patch(product, data)
        return product

    extra = (target,) if target is not None else ()
    product = _with_owner_guard(db, product_id, _work, *extra)
    db.refresh(product)
    logger.info("product updated id=%s fields=%s", product_id, sorted(data))
    return product


def delete_product(db: Session, product_id: int) -> bool:
    """Remove one product. False if it does not exist."""

    def _work(product: Product) -> bool:
        _ensure_writable(db, product.month_record_id, "delete")
        db.delete(product)
        return True

    try:
        _with_owner_guard(db, product_id, _work)
    except NotFoundError:
        return False
    logger.info("product deleted id=%s", product_id)
    return True
