# tracker/api/reports.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.api.auth import MANAGERS, Actor, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.report import MonthSummary
from tracker.services import reports as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/month/{month_record_id}", response_model=MonthSummary)
def month_summary(
    month_record_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*MANAGERS)),
):
    try:
        return svc.month_summary(db, month_record_id)
    except TrackerError as e:
        raise to_http(e)
