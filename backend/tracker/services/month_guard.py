# tracker/services/month_guard.py
"""
Per-month-record serialization for check-then-act sequences.

Product update/delete read the owning month record's lock flag and then
write; lock/unlock/clear flip that flag or act on it. All of them run inside
`month_record_guard(...)` so a lock() can never commit between another
writer's check and its write.

On PostgreSQL we take a transaction-scoped advisory lock per month record
(released automatically on commit/rollback). Other backends (SQLite in
tests and local dev) fall back to a process-local lock per id, held until
the guarded block exits (re-entrant for the holding thread). Callers
commit inside the block.
"""
from __future__ import annotations

import threading
import weakref
from contextlib import ExitStack, contextmanager
from typing import Iterator, Optional

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from tracker.models.month_record import MonthRecord

# First key of the two-int advisory lock form; keeps us clear of other users
# of pg advisory locks in the same database.
ADVISORY_NAMESPACE = 4201

# Entries vanish once no guarded block holds the lock
_local_locks: weakref.WeakValueDictionary[int, threading.RLock] = weakref.WeakValueDictionary()
_registry_lock = threading.RLock()


def _is_postgres(db: Session) -> bool:
    return db.get_bind().dialect.name == "postgresql"


def _local_lock_for(month_record_id: int) -> threading.RLock:
    with _registry_lock:
        lock = _local_locks.get(month_record_id)
        if lock is None:
            lock = threading.RLock()
            _local_locks[month_record_id] = lock
        return lock


@contextmanager
def month_record_guard(db: Session, *month_record_ids: Optional[int]) -> Iterator[None]:
    """Hold the write guard for every given month record id.

    Ids are de-duplicated and acquired in ascending order so two writers that
    need the same pair of months cannot deadlock. `None` entries are ignored.
    """
    ids = sorted({int(i) for i in month_record_ids if i is not None})

    if _is_postgres(db):
        for mid in ids:
            db.execute(
                text("SELECT pg_advisory_xact_lock(:ns, :k)"),
                {"ns": ADVISORY_NAMESPACE, "k": mid},
            )
        yield
        return

    with ExitStack() as stack:
        for mid in ids:
            stack.enter_context(_local_lock_for(mid))
        yield


def load_month_record_for_write(db: Session, month_record_id: int) -> Optional[MonthRecord]:
    """Fetch a month record with a row lock (FOR UPDATE is a no-op on SQLite)."""
    stmt = (
        select(MonthRecord)
        .where(MonthRecord.id == month_record_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return db.execute(stmt).scalars().first()
