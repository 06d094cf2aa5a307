# tracker/schemas/game_name.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameNameCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)


class GameNameRead(BaseModel):
    id: int
    name: str
    created_by: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
