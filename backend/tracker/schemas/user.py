# tracker/schemas/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)


class UserUpdate(BaseModel):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    id: int
    username: str
    role: UserRole
    is_active: bool
    last_active: Optional[datetime] = None
    total_active_time: int = 0
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserWithKey(UserRead):
    # plaintext key, returned once on create/rotate
    api_key: str


class ApiKeyRotated(BaseModel):
    user_id: int
    api_key: str
