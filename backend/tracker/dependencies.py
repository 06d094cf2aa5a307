"""
Shared FastAPI dependency helpers.

`get_db` provides a SQLAlchemy session to each request and makes sure it's
closed afterward. Routers import it from here so they all agree on the
session factory.
"""

from typing import Generator

from sqlalchemy.orm import Session

from tracker.db import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
