# tests/conftest.py
"""
Point the app at a throwaway SQLite file before anything imports tracker.db,
and rebuild the schema for every test.
"""
import os
import tempfile
from pathlib import Path

_DB_DIR = tempfile.mkdtemp(prefix="tracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'tracker_test.db'}"
os.environ["RBAC_ENFORCE"] = "false"

import pytest  # noqa: E402

import tracker.models  # noqa: E402,F401
from tracker.db import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
