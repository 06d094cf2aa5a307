# tracker/api/errors.py
from __future__ import annotations

from fastapi import HTTPException, status

from tracker.services.errors import LockedPeriodError, NotFoundError, TrackerError, ValidationError

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (LockedPeriodError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def to_http(exc: TrackerError) -> HTTPException:
    """Map a service failure onto the HTTP status the UI expects."""
    for err_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, err_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
