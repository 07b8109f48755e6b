"""Train route, calendar and realtime timetable summaries."""

from collections.abc import Mapping
from typing import Any

from koleo_mcp.formatters.fields import as_record, as_records, clock, integer, number, text

# Stops shown in a realtime timetable summary
REALTIME_STOP_LIMIT = 15


def format_time(value: Any) -> str:
    """HH:MM from either an ISO timestamp or a {hour, minute} dict; blank if absent."""
    if not value:
        return "     "

    if isinstance(value, Mapping):
        hour = integer(value.get("hour"))
        minute = integer(value.get("minute"))
        return f"{hour:02d}:{minute:02d}"

    if isinstance(value, str):
        return clock(value)

    return "     "


def format_stop(stop: Any) -> str:
    """One stop line: distance from the origin, arrival / departure, station, platform.

    Example: "  12.3km  10:05 / 10:07  Kraków Płaszów pl.2"
    """
    record = as_record(stop)
    arrival = format_time(record.get("arrival"))
    departure = format_time(record.get("departure"))
    name = text(record.get("station_display_name")) or text(record.get("station_name"), "?")
    platform = text(record.get("platform"))
    distance_km = number(record.get("distance")) / 1000
    position = f" pl.{platform}" if platform else ""

    return f"{distance_km:>6.1f}km  {arrival} / {departure}  {name}{position}"


def summarize_train_route(train: Any, stops: list[Any]) -> str:
    """Summary of a train run with distances relative to the first stop."""
    train_record = as_record(train)
    stop_records = as_records(stops)
    lines = [
        text(train_record.get("train_full_name"), "?"),
        f"  Runs: {text(train_record.get('run_desc'), 'N/A')}",
        f"  {len(stop_records)} stops:",
    ]

    first_distance = number(stop_records[0].get("distance")) if stop_records else 0
    for stop in stop_records:
        adjusted = {**stop, "distance": number(stop.get("distance")) - first_distance}
        lines.append(f"  {format_stop(adjusted)}")

    return "\n".join(lines)


def summarize_train_calendar(
    calendar: Any,
    brand: str,
    train_number: str,
    dates: list[str],
    next_date: str | None,
) -> str:
    """One-line summary of the days a train runs."""
    train_name = text(as_record(calendar).get("train_name"), "?")
    return (
        f"{train_name} ({brand} {train_number}) runs on {len(dates)} day(s). "
        f"Next: {next_date or 'no future dates found'}."
    )


def format_realtime_stop(stop: Any) -> str:
    """Aimed vs actual time for one stop, flagged when they differ."""
    record = as_record(stop)
    actual = clock(record.get("actual_departure") or record.get("actual_arrival"))
    aimed = clock(
        record.get("aimed_departure") or record.get("aimed_arrival") or record.get("departure")
    )
    delayed = " (DELAYED)" if actual.strip() and aimed.strip() and actual != aimed else ""
    return f"  {aimed} -> {actual}  station_id={text(record.get('station_id'), '?')}{delayed}"


def summarize_realtime_timetable(timetable: Any, train_label: str, day: str) -> str:
    """Summary of a realtime timetable: first stops with aimed and actual times."""
    record = as_record(timetable)
    stops = as_records(record.get("stops"))
    name = text(record.get("train_full_name"), train_label)

    lines = [f"Realtime timetable: {name} on {day}"]
    lines.extend(format_realtime_stop(stop) for stop in stops[:REALTIME_STOP_LIMIT])

    if len(stops) > REALTIME_STOP_LIMIT:
        lines.append(f"  ... and {len(stops) - REALTIME_STOP_LIMIT} more stops")

    return "\n".join(lines)
