# tracker/api/game_names.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from tracker.api.auth import ADMINS, Actor, get_current_user, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.game_name import GameNameCreate, GameNameRead
from tracker.services import game_names as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/game-names", tags=["Game Names"])


@router.get("", response_model=List[GameNameRead])
def list_game_names(db: Session = Depends(get_db), _: Actor = Depends(get_current_user)):
    return svc.list_game_names(db)


@router.get("/{game_name_id}", response_model=GameNameRead)
def get_game_name(game_name_id: int, db: Session = Depends(get_db), _: Actor = Depends(get_current_user)):
    try:
        return svc.get_game_name(db, game_name_id)
    except TrackerError as e:
        raise to_http(e)


@router.post("", response_model=GameNameRead, status_code=status.HTTP_201_CREATED)
def create_game_name(
    payload: GameNameCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*ADMINS)),
):
    try:
        return svc.create_game_name(db, payload, created_by=actor.id)
    except TrackerError as e:
        raise to_http(e)


@router.delete("/{game_name_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_game_name(
    game_name_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*ADMINS)),
) -> Response:
    if not svc.delete_game_name(db, game_name_id):
        raise HTTPException(status_code=404, detail="Game name not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
