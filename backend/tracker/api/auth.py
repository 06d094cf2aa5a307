# tracker/api/auth.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from tracker.dependencies import get_db
from tracker.services import users as user_svc


@dataclass(frozen=True)
class Actor:
    """The caller, as seen by the routers: who they are and which role they hold."""

    id: int
    username: str
    role: str


# Used when RBAC is off (local dev, tests)
DEV_ACTOR = Actor(id=0, username="dev", role="admin")

MANAGERS = ("admin", "supervisor")
ADMINS = ("admin",)


def _rbac_enabled() -> bool:
    """Return True if RBAC should be enforced (production), False in dev."""
    return os.getenv("RBAC_ENFORCE", "false").lower() in {"1", "true", "yes", "on"}


def get_current_user(
    db: Session = Depends(get_db),
    api_key: Optional[str] = Header(default=None, alias="X-API-Key"),
) -> Actor:
    """
    Resolve the calling user from X-API-Key. In dev (RBAC_ENFORCE=false),
    return the built-in dev admin and skip DB lookups entirely.
    """
    if not _rbac_enabled():
        return DEV_ACTOR

    if not api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = user_svc.get_user_by_api_key(db, api_key)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")

    user_svc.touch_user_activity(db, user.id)
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    return Actor(id=user.id, username=user.username, role=role)


def require_role(*roles: str) -> Callable[..., Actor]:
    """Dependency factory: the caller must hold one of `roles`."""
    def _inner(actor: Actor = Depends(get_current_user)) -> Actor:
        # Dev mode: skip role checks entirely.
        if not _rbac_enabled():
            return actor
        if actor.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return actor
    return _inner
