# tracker/services/tasks.py
from __future__ import annotations

from typing import Any, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.models.task import Task, TaskStatus
from tracker.models.user import User
from tracker.services.common import (
    as_dict,
    check_patch_fields,
    coerce_enum,
    coerce_timestamp,
    committing,
    require_text,
    to_id,
)
from tracker.services.errors import NotFoundError

UPDATABLE_FIELDS = frozenset({"title", "description", "status", "due_date", "assigned_to"})


def _check_assignee(db: Session, user_id: Any) -> None:
    if user_id is not None and db.get(User, to_id(user_id, "assigned_to")) is None:
        raise NotFoundError("User", user_id)


def get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


def list_tasks(db: Session) -> List[Task]:
    return list(db.execute(select(Task).order_by(Task.id)).scalars().all())


def list_tasks_by_status(db: Session, status: Any) -> List[Task]:
    stmt = select(Task).where(Task.status == coerce_enum(TaskStatus, status, "status")).order_by(Task.id)
    return list(db.execute(stmt).scalars().all())


def list_tasks_by_assignee(db: Session, user_id: int) -> List[Task]:
    stmt = select(Task).where(Task.assigned_to == user_id).order_by(Task.id)
    return list(db.execute(stmt).scalars().all())


def create_task(db: Session, payload: Any, *, created_by: int) -> Task:
    data = as_dict(payload)
    _check_assignee(db, data.get("assigned_to"))
    due = data.get("due_date")

    task = Task(
        title=require_text(data.get("title"), "title"),
        description=data.get("description"),
        status=coerce_enum(TaskStatus, data.get("status") or TaskStatus.started, "status"),
        due_date=coerce_timestamp(due, "due_date") if due else None,
        assigned_to=data.get("assigned_to"),
        created_by=created_by,
    )
    with committing(db):
        db.add(task)
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, patch: Any) -> Task:
    data = as_dict(patch, exclude_unset=True)
    check_patch_fields(data, UPDATABLE_FIELDS, "task")

    with committing(db):
        task = get_task(db, task_id)
        if data.get("title") is not None:
            task.title = require_text(data["title"], "title")
        if "description" in data:
            task.description = data["description"]
        if data.get("status") is not None:
            task.status = coerce_enum(TaskStatus, data["status"], "status")
        if "due_date" in data:
            task.due_date = coerce_timestamp(data["due_date"], "due_date") if data["due_date"] else None
        if "assigned_to" in data:
            _check_assignee(db, data["assigned_to"])
            task.assigned_to = data["assigned_to"]
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> bool:
    task = db.get(Task, task_id)
    if task is None:
        return False
    with committing(db):
        db.delete(task)
    return True
