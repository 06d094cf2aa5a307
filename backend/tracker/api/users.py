# tracker/api/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from tracker.api.auth import ADMINS, Actor, get_current_user, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.user import ApiKeyRotated, UserCreate, UserRead, UserUpdate, UserWithKey
from tracker.services import users as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserRead)
def get_me(db: Session = Depends(get_db), actor: Actor = Depends(get_current_user)):
    try:
        return svc.get_user(db, actor.id)
    except TrackerError as e:
        raise to_http(e)


@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db), _: Actor = Depends(require_role(*ADMINS))):
    return svc.list_users(db)


@router.post("", response_model=UserWithKey, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*ADMINS)),
):
    try:
        user, api_key = svc.create_user(db, payload)
    except TrackerError as e:
        raise to_http(e)
    return UserWithKey(**UserRead.model_validate(user).model_dump(), api_key=api_key)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*ADMINS)),
):
    try:
        return svc.update_user(db, user_id, payload)
    except TrackerError as e:
        raise to_http(e)


@router.post("/{user_id}/rotate-key", response_model=ApiKeyRotated)
def rotate_key(
    user_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*ADMINS)),
):
    try:
        return ApiKeyRotated(user_id=user_id, api_key=svc.rotate_api_key(db, user_id))
    except TrackerError as e:
        raise to_http(e)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*ADMINS)),
) -> Response:
    if user_id == actor.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    if not svc.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
