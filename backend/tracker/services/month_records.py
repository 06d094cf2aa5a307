# tracker/services/month_records.py
"""
Month record ledger: accounting periods and their write-permission state.

    created (is_locked=False)
        --lock-->    is_locked=True, is_active=False, end_date=now
        --unlock-->  is_locked=False (end_date and is_active are left alone)
        --clear-->   only while locked; deletes the period's products,
                     the record itself stays

Every transition runs under month_record_guard() so it serializes with
product writes that check the same record (see services.products).
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tracker.models.month_record import MonthRecord
from tracker.models.product import Product
from tracker.services.common import (
    as_dict,
    check_patch_fields,
    coerce_timestamp,
    committing,
    require_text,
    utcnow,
)
from tracker.services.errors import NotFoundError, ValidationError
from tracker.services.month_guard import load_month_record_for_write, month_record_guard

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "start_date", "end_date", "is_active", "is_locked"})


# ----------------------------
# Reads
# ----------------------------

def get_month_record(db: Session, month_record_id: int) -> MonthRecord:
    record = db.get(MonthRecord, month_record_id)
    if record is None:
        raise NotFoundError("Month record", month_record_id)
    return record


def list_month_records(db: Session) -> List[MonthRecord]:
    return list(db.execute(select(MonthRecord).order_by(MonthRecord.id)).scalars().all())


def list_unlocked_month_records(db: Session) -> List[MonthRecord]:
    """Records that still accept product writes.

    Filters on is_locked, not is_active: a record can be inactive (no longer
    the default period) and still be open for edits.
    """
    stmt = select(MonthRecord).where(MonthRecord.is_locked.is_(False)).order_by(MonthRecord.id)
    return list(db.execute(stmt).scalars().all())


def get_current_month_record(db: Session) -> Optional[MonthRecord]:
    """First active record, used as the default period for new products."""
    stmt = select(MonthRecord).where(MonthRecord.is_active.is_(True)).order_by(MonthRecord.id).limit(1)
    return db.execute(stmt).scalars().first()


# ----------------------------
# Writes
# ----------------------------

def create_month_record(
    db: Session,
    name: str,
    start_date: Any,
    is_active: bool = True,
    is_locked: bool = False,
) -> MonthRecord:
    """Insert a new period with no end date.

    A record created locked is never active.
    """
    record = MonthRecord(
        name=require_text(name, "name"),
        start_date=coerce_timestamp(start_date, "start_date"),
        end_date=None,
        is_active=bool(is_active) and not is_locked,
        is_locked=bool(is_locked),
    )
    with committing(db):
        db.add(record)
    db.refresh(record)
    logger.info("month record created id=%s name=%r locked=%s", record.id, record.name, record.is_locked)
    return record


def _apply_patch(record: MonthRecord, patch: Mapping[str, Any]) -> None:
    if patch.get("name") is not None:
        record.name = require_text(patch["name"], "name")
    if patch.get("start_date") is not None:
        record.start_date = coerce_timestamp(patch["start_date"], "start_date")
    if "end_date" in patch:
        end = patch["end_date"]
        record.end_date = None if end is None else coerce_timestamp(end, "end_date")
    if patch.get("is_active") is not None:
        record.is_active = bool(patch["is_active"])
    if patch.get("is_locked") is not None:
        record.is_locked = bool(patch["is_locked"])

    if record.is_locked and record.is_active:
        if patch.get("is_active") is True:
            raise ValidationError("A locked month record cannot be active.")
        record.is_active = False


def update_month_record(db: Session, month_record_id: int, patch: Any) -> MonthRecord:
    """Generic field patch; the record's own flags are never lock-gated."""
    patch = as_dict(patch, exclude_unset=True)
    check_patch_fields(patch, UPDATABLE_FIELDS, "month record")

    with month_record_guard(db, month_record_id), committing(db):
        record = load_month_record_for_write(db, month_record_id)
        if record is None:
            raise NotFoundError("Month record", month_record_id)
        _apply_patch(record, patch)
    db.refresh(record)
    logger.info("month record updated id=%s fields=%s", month_record_id, sorted(patch))
    return record


def lock_month_record(db: Session, month_record_id: int) -> bool:
    """Close a period. Returns False if it does not exist.

    Locking an already-locked record keeps its first end_date.
    """
    with month_record_guard(db, month_record_id), committing(db):
        record = load_month_record_for_write(db, month_record_id)
        if record is None:
            return False
        if not record.is_locked or record.end_date is None:
            record.end_date = utcnow()
        record.is_locked = True
        record.is_active = False
    logger.info("month record locked id=%s", month_record_id)
    return True


def unlock_month_record(db: Session, month_record_id: int) -> MonthRecord:
    record = update_month_record(db, month_record_id, {"is_locked": False})
    logger.info("month record unlocked id=%s", month_record_id)
    return record


def clear_month_record(db: Session, month_record_id: int) -> bool:
    """Delete every product of a locked period. Irreversible.

    Returns False, deleting nothing, when the record is missing or unlocked.
    """
    with month_record_guard(db, month_record_id), committing(db):
        record = load_month_record_for_write(db, month_record_id)
        if record is None or not record.is_locked:
            logger.warning(
                "clear refused for month record id=%s (%s)",
                month_record_id,
                "missing" if record is None else "not locked",
            )
            return False
        result = db.execute(
            delete(Product)
            .where(Product.month_record_id == month_record_id)
            .execution_options(synchronize_session="fetch")
        )
        deleted = result.rowcount
    logger.info("month record cleared id=%s products_deleted=%s", month_record_id, deleted)
    return True
