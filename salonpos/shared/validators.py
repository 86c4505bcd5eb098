"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

from .exceptions import ValidationError

MIN_SEARCH_LENGTH = 2

PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-().]{6,25}$")


def normalize_name(value: Optional[str]) -> Optional[str]:
    """
    Trim a display name and collapse inner whitespace.

    Returns None for None, raises ValueError for a blank name.
    """
    if value is None:
        return None
    cleaned = " ".join(value.split())
    if not cleaned:
        raise ValueError("Name cannot be blank")
    return cleaned


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a local or international phone number.

    Args:
        phone: Phone number as typed by the operator

    Returns:
        The trimmed phone number, or None when empty

    Raises:
        ValueError: If the value contains anything but digits and separators
    """
    if phone is None:
        return None

    phone = phone.strip()
    if not phone:
        return None

    if not PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number")

    return phone


def require_search_term(value: Optional[str], min_length: int = MIN_SEARCH_LENGTH) -> str:
    """Return the trimmed search term or raise ValidationError when too short"""
    term = (value or "").strip()
    if len(term) < min_length:
        raise ValidationError(f"Search term must be at least {min_length} characters long")
    return term


def parse_iso_date(value: Optional[str], field: str = "date") -> date:
    """Parse a YYYY-MM-DD string into a date"""
    if not value:
        raise ValidationError(f"A {field} is required (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {value} (expected YYYY-MM-DD)") from e


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, with ``\\``, ``%`` and ``_`` escaped"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
