"""Date/time parsing and the formats used by the Koleo API and website.

Naive datetimes are treated as local wall-clock time. Aware datetimes are
converted to the local zone before formatting, so every formatter renders
local time.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from koleo_mcp.errors import InvalidDateTimeError
from koleo_mcp.models.koleo import TimeOfDay


def parse_datetime(value: str | None = None) -> datetime:
    """Parse an optional ISO 8601 string, defaulting to now.

    Accepts anything datetime.fromisoformat understands, e.g. "2024-01-15",
    "2024-01-15T10:00", "2024-01-15 10:00:30", "2024-01-15T10:00:00+01:00".

    Raises:
        InvalidDateTimeError: If the value cannot be parsed.
    """
    if not value:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateTimeError(value) from e


def _local(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone()
    return moment


def format_date_ymd(moment: datetime | date) -> str:
    """Format as YYYY-MM-DD."""
    if isinstance(moment, datetime):
        moment = _local(moment)
    return f"{moment.year}-{moment.month:02d}-{moment.day:02d}"


def format_local_iso_minute(moment: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM.

    Used as a cutoff compared lexically against ISO timestamps from the API,
    which only works because both sides are zero-padded and fixed width.
    """
    moment = _local(moment)
    return f"{format_date_ymd(moment)}T{moment.hour:02d}:{moment.minute:02d}"


def format_local_iso_seconds(moment: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS (the connection search departure_after)."""
    moment = _local(moment)
    return f"{format_local_iso_minute(moment)}:{moment.second:02d}"


def format_date_ymd_hm(moment: datetime) -> str:
    """Format as YYYY-MM-DD HH:MM for display."""
    moment = _local(moment)
    return f"{format_date_ymd(moment)} {moment.hour:02d}:{moment.minute:02d}"


def format_date_dmy_hm(moment: datetime) -> str:
    """Format as DD-MM-YYYY_HH:MM, the form used in koleo.pl timetable URLs."""
    moment = _local(moment)
    return (
        f"{moment.day:02d}-{moment.month:02d}-{moment.year}"
        f"_{moment.hour:02d}:{moment.minute:02d}"
    )


def combine_time_of_day(time_of_day: TimeOfDay, base_date: datetime | date) -> datetime:
    """Build a local datetime from a date and a bare time of day."""
    return datetime(
        base_date.year,
        base_date.month,
        base_date.day,
        time_of_day.hour,
        time_of_day.minute,
        time_of_day.second,
    )


def koleo_time_to_datetime(
    value: str | TimeOfDay | Mapping[str, Any],
    base_date: datetime | date | None = None,
) -> datetime:
    """Convert a Koleo time value (ISO string or {hour, minute, second?}) to a datetime.

    Raises:
        InvalidDateTimeError: If the value is neither a parseable string nor a time dict.
    """
    if isinstance(value, str):
        return parse_datetime(value)

    if isinstance(value, Mapping):
        try:
            value = TimeOfDay.model_validate(value)
        except ValidationError as e:
            raise InvalidDateTimeError(str(dict(value))) from e

    return combine_time_of_day(value, base_date or datetime.now())
