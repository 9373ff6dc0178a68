"""
Wire Value Converters.

Pure two-way conversions between typed model values and their JSON wire
strings:
- Enums are encoded as the member's value (e.g., LaunchMode.DEBUG <-> "debug").
- Timestamps are encoded as UTC strings with millisecond precision
  (e.g., "2017-03-14T09:26:53.589Z").

Parsing accepts only the canonical wire shape, so every accepted string
renders back to itself.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from reportportal_client.errors import DeserializationError

E = TypeVar("E", bound=Enum)

DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def parse_enum(enum_cls: Type[E], value: Any) -> E:
    """
    Parse a wire string into an enum member.

    Args:
        enum_cls: Target enum class.
        value: Wire value, expected to equal one member's value exactly.

    Returns:
        The matching enum member.

    Raises:
        DeserializationError: If no member has that value.
    """
    for member in enum_cls:
        if member.value == value:
            return member
    valid = [m.value for m in enum_cls]
    raise DeserializationError(
        f"Unknown {enum_cls.__name__} value {value!r}. Valid: {valid}"
    )


def render_enum(member: Enum) -> str:
    """Render an enum member as its wire string."""
    return member.value


def parse_datetime(value: Any) -> datetime:
    """
    Parse a wire timestamp into a timezone-aware UTC datetime.

    Args:
        value: Timestamp string in the form ``YYYY-MM-DDTHH:MM:SS.fffZ``.

    Returns:
        Aware datetime in UTC.

    Raises:
        DeserializationError: If the value is not a canonical timestamp string.
    """
    if not isinstance(value, str) or not _DATETIME_PATTERN.match(value):
        raise DeserializationError(
            f"Invalid timestamp {value!r}, expected YYYY-MM-DDTHH:MM:SS.fffZ"
        )
    try:
        parsed = datetime.strptime(value[:-1], DATETIME_FORMAT)
    except ValueError as e:
        raise DeserializationError(f"Invalid timestamp {value!r}: {e}") from e
    return parsed.replace(tzinfo=timezone.utc)


def render_datetime(value: datetime) -> str:
    """
    Render a datetime as a wire timestamp.

    Naive datetimes are taken to be UTC. Precision below one millisecond
    is truncated.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    # Always four year digits, including years below 1000
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def parse_int(value: Any, field_name: str) -> int:
    """Parse a JSON number field, rejecting non-integral values."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializationError(f"Field '{field_name}' must be an integer, got {value!r}")
    return value


def require_mapping(data: Any, model_name: str) -> Dict[str, Any]:
    """Ensure a decoded JSON value is an object before mapping it to a model."""
    if not isinstance(data, dict):
        raise DeserializationError(
            f"Expected a JSON object for {model_name}, got {type(data).__name__}"
        )
    return data


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    """Parse a timestamp that may be absent (None)."""
    return None if value is None else parse_datetime(value)

