# tracker/services/game_names.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tracker.models.game_name import GameName
from tracker.services.common import as_dict, committing, require_text
from tracker.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def get_game_name(db: Session, game_name_id: int) -> GameName:
    game_name = db.get(GameName, game_name_id)
    if game_name is None:
        raise NotFoundError("Game name", game_name_id)
    return game_name


def get_game_name_by_name(db: Session, name: str) -> Optional[GameName]:
    return db.execute(select(GameName).where(GameName.name == name)).scalars().first()


def list_game_names(db: Session) -> List[GameName]:
    return list(db.execute(select(GameName).order_by(GameName.name)).scalars().all())


def create_game_name(db: Session, payload: Any, *, created_by: int) -> GameName:
    name = require_text(as_dict(payload).get("name"), "name").strip()
    if len(name) < 2:
        raise ValidationError("Game name must be at least 2 characters")
    if get_game_name_by_name(db, name) is not None:
        raise ValidationError(f"Game name already exists: {name}")

    game_name = GameName(name=name, created_by=created_by)
    try:
        with committing(db):
            db.add(game_name)
    except IntegrityError:
        raise ValidationError(f"Game name already exists: {name}") from None
    db.refresh(game_name)
    return game_name


def delete_game_name(db: Session, game_name_id: int) -> bool:
    game_name = db.get(GameName, game_name_id)
    if game_name is None:
        return False
    with committing(db):
        db.delete(game_name)
    logger.info("game name deleted id=%s", game_name_id)
    return True
