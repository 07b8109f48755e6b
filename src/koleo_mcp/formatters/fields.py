"""Tolerant field access for formatting raw Koleo records.

Formatters must never raise on missing or malformed data, so every lookup
goes through these helpers, which substitute a default instead.
"""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def as_record(value: Any) -> Mapping[str, Any]:
    """Return a mapping view of a record (models are dumped, anything else is empty)."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return {}


def as_records(value: Any) -> list[Mapping[str, Any]]:
    """Return the list of records in a value, skipping non-record entries."""
    if not isinstance(value, (list, tuple)):
        return []
    return [as_record(item) for item in value if isinstance(item, (Mapping, BaseModel))]


def text(value: Any, default: str = "") -> str:
    """String form of a value, `default` when it is None or empty."""
    if value is None or value == "":
        return default
    return str(value)


def number(value: Any, default: float = 0) -> float:
    """Numeric form of a value, `default` when it is missing or not a number."""
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def integer(value: Any, default: int = 0) -> int:
    return int(number(value, default))


def iso_minute(value: Any, default: str = "") -> str:
    """First 16 characters of an ISO timestamp (YYYY-MM-DDTHH:MM)."""
    return text(value)[:16] or default


def clock(value: Any, default: str = "     ") -> str:
    """HH:MM part of an ISO timestamp."""
    return text(value)[11:16] or default
