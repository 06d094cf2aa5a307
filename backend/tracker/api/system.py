# tracker/api/system.py
from __future__ import annotations

import os
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.db import engine
from tracker.dependencies import get_db
from tracker.models.month_record import MonthRecord

router = APIRouter(tags=["ops"])

APP_NAME = "Product Tracker Backend"


def _database_info() -> dict:
    # e.g. {"backend": "postgresql", "driver": "psycopg2"}
    return {"backend": engine.dialect.name, "driver": engine.driver}


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus a DB round-trip that also says whether a period is open for booking."""
    tz = os.getenv("TZ", "UTC")
    info = {"status": "ok", **_database_info()}
    try:
        open_months = db.execute(
            select(func.count(MonthRecord.id)).where(MonthRecord.is_locked.is_(False))
        ).scalar_one()
        info["open_month_records"] = int(open_months)
    except SQLAlchemyError as e:
        info["status"] = f"error: {type(e).__name__}"

    return {
        "status": "ok" if info["status"] == "ok" else "degraded",
        "time": {"tz": tz, "now": datetime.now(ZoneInfo(tz)).isoformat()},
        "db": info,
    }


@router.get("/version")
def version():
    return {"app": APP_NAME, "db": _database_info(), "tz": os.getenv("TZ", "UTC")}
