"""Connection search summaries."""

from collections.abc import Mapping
from typing import Any

from koleo_mcp.formatters.fields import as_record, as_records, integer, iso_minute, text


def format_connection(connection: Any, price: Mapping[str, Any] | None = None) -> str:
    """One connection line.

    Example: "2024-01-15T10:05 -> 2024-01-15T12:30  145min  direct  via IC 3510 SOLINA  [99.0]"
    """
    record = as_record(connection)
    departure = iso_minute(record.get("departure"))
    arrival = iso_minute(record.get("arrival"))
    duration = integer(record.get("duration"))
    changes = integer(record.get("changes"))

    train_names = [
        text(leg.get("train_full_name"))
        for leg in as_records(record.get("legs"))
        if leg.get("leg_type") == "train_leg" and leg.get("train_full_name")
    ]

    price_label = f"  [{text(as_record(price).get('price'), '?')}]" if price else ""
    changes_label = f"{changes} change(s)" if changes > 0 else "direct"

    return (
        f"{departure} -> {arrival}  {duration}min  {changes_label}"
        f"  via {', '.join(train_names)}{price_label}"
    )


def summarize_connections(
    connections: list[Any],
    start_name: str,
    end_name: str,
    prices: Mapping[str, Mapping[str, Any] | None],
) -> str:
    """Summary of a connection search.

    `prices` maps connection uuid to price data; uuids missing from it (prices
    not requested) and None values (no price available) both render without
    a price label.
    """
    lines = [f"Connections {start_name} -> {end_name}:"]

    for connection in connections:
        uuid = text(as_record(connection).get("uuid"))
        lines.append(f"  {format_connection(connection, prices.get(uuid))}")

    if not connections:
        lines.append("  No connections found.")

    return "\n".join(lines)
