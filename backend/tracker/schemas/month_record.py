# tracker/schemas/month_record.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MonthRecordBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    start_date: datetime
    is_active: bool = True
    is_locked: bool = False

    model_config = ConfigDict(from_attributes=True)


class MonthRecordCreate(MonthRecordBase):
    pass


class MonthRecordUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_locked: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)


class MonthRecordLockRequest(BaseModel):
    is_locked: bool


class MonthRecordRead(MonthRecordBase):
    id: int
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class MonthRecordActionResult(BaseModel):
    success: bool
    message: str
