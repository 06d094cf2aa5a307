# tracker/services/users.py
from __future__ import annotations

import hashlib
import logging
import os
import secrets
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tracker.models.user import User, UserRole
from tracker.services.common import as_dict, check_patch_fields, coerce_enum, committing, require_text, utcnow
from tracker.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"role", "is_active"})


def hash_api_key(api_key_plain: str) -> str:
    """Hash the plaintext API key (sha256 hex; only the hash is stored)."""
    pepper = os.getenv("API_KEY_PEPPER", "")
    h = hashlib.sha256()
    h.update((api_key_plain + pepper).encode("utf-8"))
    return h.hexdigest()


def _new_api_key() -> str:
    return secrets.token_urlsafe(32)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.execute(select(User).where(User.username == username)).scalars().first()


def get_user_by_api_key(db: Session, api_key: str) -> Optional[User]:
    stmt = select(User).where(and_(User.api_key_hash == hash_api_key(api_key), User.is_active.is_(True)))
    return db.execute(stmt).scalars().first()


def list_users(db: Session) -> List[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars().all())


def create_user(db: Session, payload: Any, *, role: UserRole = UserRole.new_user) -> Tuple[User, str]:
    """Register a user and return it with its plaintext API key.

    Self-registered users always start as new_user; an admin promotes them.
    """
    data = as_dict(payload)
    username = require_text(data.get("username"), "username")
    if get_user_by_username(db, username) is not None:
        raise ValidationError(f"Username already exists: {username}")

    api_key = _new_api_key()
    user = User(
        username=username,
        role=coerce_enum(UserRole, role, "role"),
        api_key_hash=hash_api_key(api_key),
        is_active=True,
        total_active_time=0,
    )
    try:
        with committing(db):
            db.add(user)
    except IntegrityError:
        raise ValidationError(f"Username already exists: {username}") from None
    db.refresh(user)
    logger.info("user created id=%s username=%r", user.id, user.username)
    return user, api_key


def update_user(db: Session, user_id: int, patch: Any) -> User:
    data = as_dict(patch, exclude_unset=True)
    check_patch_fields(data, UPDATABLE_FIELDS, "user")

    with committing(db):
        user = get_user(db, user_id)
        if data.get("role") is not None:
            user.role = coerce_enum(UserRole, data["role"], "role")
        if data.get("is_active") is not None:
            user.is_active = bool(data["is_active"])
    db.refresh(user)
    logger.info("user updated id=%s fields=%s", user_id, sorted(data))
    return user


def rotate_api_key(db: Session, user_id: int) -> str:
    api_key = _new_api_key()
    with committing(db):
        user = get_user(db, user_id)
        user.api_key_hash = hash_api_key(api_key)
    logger.info("api key rotated for user id=%s", user_id)
    return api_key


def delete_user(db: Session, user_id: int) -> bool:
    user = db.get(User, user_id)
    if user is None:
        return False
    with committing(db):
        db.delete(user)
    logger.info("user deleted id=%s", user_id)
    return True


def touch_user_activity(db: Session, user_id: int) -> bool:
    """Bump last_active and add the elapsed seconds to total_active_time."""
    user = db.get(User, user_id)
    if user is None:
        return False

    now = utcnow()
    last = user.last_active or now
    if last.tzinfo is None:
        # SQLite hands back naive datetimes
        last = last.replace(tzinfo=now.tzinfo)
    elapsed = max(int((now - last).total_seconds()), 0)

    with committing(db):
        user.last_active = now
        user.total_active_time = (user.total_active_time or 0) + elapsed
    return True
