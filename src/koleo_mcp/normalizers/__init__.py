"""Slug and date/time normalization for Koleo requests and URLs."""

from koleo_mcp.normalizers.dates import (
    combine_time_of_day,
    format_date_dmy_hm,
    format_date_ymd,
    format_date_ymd_hm,
    format_local_iso_minute,
    format_local_iso_seconds,
    koleo_time_to_datetime,
    parse_datetime,
)
from koleo_mcp.normalizers.slugs import looks_like_slug, name_to_slug, resolve_slug

__all__ = [
    # Slugs
    "name_to_slug",
    "looks_like_slug",
    "resolve_slug",
    # Dates
    "parse_datetime",
    "format_date_ymd",
    "format_local_iso_minute",
    "format_local_iso_seconds",
    "format_date_ymd_hm",
    "format_date_dmy_hm",
    "combine_time_of_day",
    "koleo_time_to_datetime",
]
