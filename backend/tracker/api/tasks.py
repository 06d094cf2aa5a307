# tracker/api/tasks.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from tracker.api.auth import MANAGERS, Actor, get_current_user, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.task import TaskCreate, TaskRead, TaskStatus, TaskUpdate
from tracker.services import tasks as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskRead])
def list_tasks(
    status_: Optional[TaskStatus] = Query(None, alias="status"),
    assigned_to: Optional[int] = None,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    if status_ is not None:
        rows = svc.list_tasks_by_status(db, status_)
        if assigned_to is not None:
            rows = [t for t in rows if t.assigned_to == assigned_to]
        return rows
    if assigned_to is not None:
        return svc.list_tasks_by_assignee(db, assigned_to)
    return svc.list_tasks(db)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, db: Session = Depends(get_db), _: Actor = Depends(get_current_user)):
    try:
        return svc.get_task(db, task_id)
    except TrackerError as e:
        raise to_http(e)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_user),
):
    try:
        return svc.create_task(db, payload, created_by=actor.id)
    except TrackerError as e:
        raise to_http(e)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_user),
):
    try:
        return svc.update_task(db, task_id, payload)
    except TrackerError as e:
        raise to_http(e)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*MANAGERS)),
) -> Response:
    if not svc.delete_task(db, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
