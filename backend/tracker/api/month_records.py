# tracker/api/month_records.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tracker.api.auth import ADMINS, MANAGERS, Actor, get_current_user, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.month_record import (
    MonthRecordActionResult,
    MonthRecordCreate,
    MonthRecordLockRequest,
    MonthRecordRead,
    MonthRecordUpdate,
)
from tracker.services import month_records as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/month-records", tags=["Month Records"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[MonthRecordRead])
def list_month_records(
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    return svc.list_month_records(db)


@router.get("/active", response_model=List[MonthRecordRead], summary="Month records that are not locked")
def list_unlocked_month_records(
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    return svc.list_unlocked_month_records(db)


@router.get("/current", response_model=MonthRecordRead, summary="Default period for new products")
def get_current_month_record(
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    record = svc.get_current_month_record(db)
    if record is None:
        raise HTTPException(status_code=404, detail="No active month record")
    return record


@router.get("/{month_record_id}", response_model=MonthRecordRead)
def get_month_record(
    month_record_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    try:
        return svc.get_month_record(db, month_record_id)
    except TrackerError as e:
        raise to_http(e)


@router.post("", response_model=MonthRecordRead, status_code=status.HTTP_201_CREATED)
def create_month_record(
    payload: MonthRecordCreate,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*MANAGERS)),
):
    try:
        return svc.create_month_record(
            db,
            payload.name,
            payload.start_date,
            is_active=payload.is_active,
            is_locked=payload.is_locked,
        )
    except TrackerError as e:
        raise to_http(e)


@router.patch("/{month_record_id}", response_model=MonthRecordRead)
def update_month_record(
    month_record_id: int,
    payload: MonthRecordUpdate,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*ADMINS)),
):
    try:
        return svc.update_month_record(db, month_record_id, payload)
    except TrackerError as e:
        raise to_http(e)


@router.patch("/{month_record_id}/lock", response_model=MonthRecordRead, summary="Lock or unlock a month record")
def set_month_record_lock(
    month_record_id: int,
    payload: MonthRecordLockRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*ADMINS)),
):
    logger.info("lock change month_record_id=%s is_locked=%s by=%s", month_record_id, payload.is_locked, actor.username)
    try:
        if payload.is_locked:
            if not svc.lock_month_record(db, month_record_id):
                raise HTTPException(status_code=404, detail="Month record not found")
            return svc.get_month_record(db, month_record_id)
        return svc.unlock_month_record(db, month_record_id)
    except TrackerError as e:
        raise to_http(e)


@router.post("/{month_record_id}/clear", response_model=MonthRecordActionResult)
def clear_month_record(
    month_record_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*ADMINS)),
):
    logger.info("clear requested month_record_id=%s by=%s", month_record_id, actor.username)
    if svc.clear_month_record(db, month_record_id):
        return MonthRecordActionResult(success=True, message="Month record data cleared successfully")

    try:
        svc.get_month_record(db, month_record_id)
    except TrackerError as e:
        raise to_http(e)
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Month record must be locked before its data can be cleared",
    )
