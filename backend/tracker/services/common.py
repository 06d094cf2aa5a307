# tracker/services/common.py
"""Input coercion and unit-of-work helpers shared by the services."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Mapping, Type, TypeVar

from dateutil import parser as dateparser
from pydantic import BaseModel
from sqlalchemy.orm import Session

from tracker.services.errors import ValidationError

E = TypeVar("E", bound=Enum)

CENTS = Decimal("0.01")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def committing(db: Session) -> Iterator[Session]:
    """Commit on success; roll back and re-raise on any exception."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def as_dict(payload: BaseModel | Mapping[str, Any], *, exclude_unset: bool = False) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=exclude_unset)
    return dict(payload)


def check_patch_fields(patch: Mapping[str, Any], allowed: Iterable[str], entity: str) -> None:
    unknown = sorted(set(patch) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown {entity} field(s): {', '.join(unknown)}")


def to_id(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer id.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer id.") from None


def require_text(value: Any, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required.")
    return str(value)


def to_money(value: Any, field: str) -> Decimal:
    if value is None:
        raise ValidationError(f"{field} is required.")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number.")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number.") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number.")
    return amount.quantize(CENTS)


def require_non_negative(value: Any, field: str) -> Decimal:
    amount = to_money(value, field)
    if amount < 0:
        raise ValidationError(f"{field} must be a positive number.")
    return amount


def coerce_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    raw = value.value if isinstance(value, Enum) else value
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed}") from None


def coerce_timestamp(value: Any, field: str) -> datetime:
    """Accept a datetime, a date (midnight UTC) or an ISO-8601 string."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required.")
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return dateparser.isoparse(value.strip())
        except (ValueError, OverflowError):
            raise ValidationError(f"{field} is not a valid timestamp: {value!r}") from None
    raise ValidationError(f"{field} is not a valid timestamp: {value!r}")
