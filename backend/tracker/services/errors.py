# tracker/services/errors.py
"""
Typed failures raised by the service layer.

Routers translate these into HTTP responses (see tracker.api.errors);
anything else coming out of a service (e.g. a SQLAlchemy OperationalError)
is an infrastructure failure and is left to propagate.
"""
from __future__ import annotations


class TrackerError(Exception):
    """Base class for business-level failures."""


class ValidationError(TrackerError, ValueError):
    """Malformed or out-of-range input (negative price, empty name, ...)."""


class NotFoundError(TrackerError, LookupError):
    """A referenced row does not exist."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class LockedPeriodError(TrackerError):
    """A write was attempted against a product whose month record is locked."""

    def __init__(self, month_record_id: int, action: str = "modify"):
        self.month_record_id = month_record_id
        self.action = action
        super().__init__(f"Cannot {action} product in a locked month (month record {month_record_id}).")
