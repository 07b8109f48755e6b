"""Departure and arrival board summaries."""

from collections.abc import Mapping
from typing import Any, Literal

from koleo_mcp.formatters.fields import as_record, as_records, iso_minute, text

BoardKind = Literal["departure", "arrival"]

# Lines shown per board before the remainder is collapsed
BOARD_LIMIT = 20


def _first_station_name(train: Mapping[str, Any]) -> str:
    stations = as_records(train.get("stations"))
    return text(stations[0].get("name")) if stations else ""


def format_train_on_station(train: Any, kind: BoardKind = "departure") -> str:
    """One board line: time, train name, first station, platform/track.

    Example: "2024-01-15T10:05  IC 3510 SOLINA  (Kraków Główny) pl.3/5"
    """
    record = as_record(train)
    time = iso_minute(record.get(kind), "??:??")
    name = text(record.get("train_full_name"))
    platform = text(record.get("platform"))
    track = text(record.get("track"))

    position = ""
    if platform:
        position += f" pl.{platform}"
    if track:
        position += f"/{track}"

    return f"{time}  {name}  ({_first_station_name(record)}){position}"


def summarize_board(
    trains: list[Any],
    station_name: str,
    date_string: str,
    kind: BoardKind,
) -> str:
    """Summary of a departures or arrivals board."""
    label = "Departures" if kind == "departure" else "Arrivals"
    lines = [f"{station_name} -- {label} on {date_string}:"]

    for train in trains[:BOARD_LIMIT]:
        lines.append(format_train_on_station(train, kind))

    if len(trains) > BOARD_LIMIT:
        lines.append(f"  ... and {len(trains) - BOARD_LIMIT} more")

    if not trains:
        lines.append("  No trains found for this time.")

    return "\n".join(lines)


def summarize_all_trains(
    entries: list[tuple[Any, BoardKind]],
    station_name: str,
    date_string: str,
) -> str:
    """Summary of a merged board; each entry is (train, "departure" | "arrival")."""
    lines = [f"{station_name} -- all trains on {date_string}:"]

    for train, kind in entries[:BOARD_LIMIT]:
        record = as_record(train)
        label = "DEP" if kind == "departure" else "ARR"
        time = iso_minute(record.get(kind))
        name = text(record.get("train_full_name"))
        lines.append(f"  {label} {time}  {name}  ({_first_station_name(record)})")

    if len(entries) > BOARD_LIMIT:
        lines.append(f"  ... and {len(entries) - BOARD_LIMIT} more")

    return "\n".join(lines)
