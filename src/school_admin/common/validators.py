from __future__ import annotations

import math
import re
from datetime import date

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\d{10}$")
_NAME_RE = re.compile(r"^[a-zA-Z\s.]+$")


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str | None, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_person_name(value: str | None, field_name: str = "Full Name") -> str:
    value = require_non_empty(value, field_name)
    require_min_length(value, field_name, 3)
    if not _NAME_RE.match(value):
        raise ValidationError(f"{field_name} can only contain letters, dots, and spaces")
    return value


def require_phone(value: str | None, field_name: str = "Phone number") -> str:
    value = require_non_empty(value, field_name)
    if not _PHONE_RE.match(value):
        raise ValidationError(f"{field_name} must be exactly 10 digits")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    if not _EMAIL_RE.match(value.strip()):
        raise ValidationError(f"Invalid {field_name.lower()} address format")
    return value.strip()


def require_positive(value, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive number greater than zero")
    return value if isinstance(value, (int, float)) else number


def require_date(value: date | str | None, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_choice(enum_cls, value, field_name: str):
    """Coerce a raw value into a member of a str Enum."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
