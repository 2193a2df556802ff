from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def parse_identifier(value: Any, field_name: str) -> int:
    """Parse a stored-document identifier (positive integer).

    Rejects malformed values before any store access.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}")
    if isinstance(value, int):
        ident = value
    else:
        s = str(value if value is not None else "").strip()
        if not s.isdigit():
            raise ValidationError(f"Invalid {field_name}")
        ident = int(s)
    if ident <= 0:
        raise ValidationError(f"Invalid {field_name}")
    return ident


def canonical_name(value: str) -> str:
    """Case-normalized key used for project name uniqueness."""
    return " ".join((value or "").split()).casefold()
