# tracker/schemas/task.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models.task import TaskStatus


class TaskBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.started
    due_date: Optional[datetime] = None
    assigned_to: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[int] = None


class TaskRead(TaskBase):
    id: int
    created_by: int
    created_at: Optional[datetime] = None
