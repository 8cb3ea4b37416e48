"""Shared service helpers: input normalizers and unique-constraint mapping."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..models.store import db

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean(value) -> str:
    """Strip a form/JSON value to a string; None -> ''."""
    if value is None:
        return ""
    return str(value).strip()


def clean_optional(value) -> Optional[str]:
    """Like ``clean`` but empty strings become None (nullable columns)."""
    s = clean(value)
    return s or None


def to_int_safe(value) -> Optional[int]:
    """Safely convert to int; return None if invalid."""
    if isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def to_decimal_safe(value) -> Optional[Decimal]:
    """Safely convert to Decimal; return None if invalid."""
    if value is None or isinstance(value, bool):
        return None
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return d if d.is_finite() else None


def pick(payload: dict, *names, default=None):
    """Return the first present key among ``names`` (snake_case or camelCase)."""
    for name in names:
        if name in payload:
            return payload[name]
    return default


def check_length(errors: dict, field: str, value: str, label: str, max_len: int, required: bool = True):
    if required and not value:
        errors[field] = f"{label} is required"
    elif value and len(value) > max_len:
        errors[field] = f"{label} cannot be longer than {max_len} characters"


def commit_unique(conflicts):
    """
    Commit the session; on IntegrityError roll back and raise the first
    error of ``conflicts`` whose probe query finds a clashing row.

    ``conflicts`` is a list of ``(probe, exc_cls)``; ``probe()`` returns True
    when the unique value is taken. The unique index is the only guard, the
    probes just pick the message.
    """
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        for probe, exc_cls in conflicts:
            if probe():
                raise exc_cls()
        raise
