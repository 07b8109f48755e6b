from typing import Any

from koleo_mcp.formatters.fields import as_record, as_records, text

# Stations listed in a search summary
SEARCH_LIMIT = 15


def format_station(station: Any) -> str:
    record = as_record(station)
    return (
        f"{text(record.get('name'), '?')} (id={text(record.get('id'), '?')}, "
        f"type={text(record.get('type'))}, slug={text(record.get('name_slug'))})"
    )


def summarize_station_search(stations: list[Any], query: str) -> str:
    lines = [f"Found {len(stations)} station(s) matching '{query}':"]
    lines.extend(f"  {format_station(station)}" for station in stations[:SEARCH_LIMIT])
    return "\n".join(lines)


def summarize_station_info(station: Any, info: Any) -> str:
    """Address, first opening hours and available facilities of a station."""
    station_record = as_record(station)
    info_record = as_record(info)

    features = [
        text(feature.get("name"), "?")
        for feature in as_records(info_record.get("features"))
        if feature.get("available")
    ]
    address = text(as_record(info_record.get("address")).get("full"), "N/A")

    opening_hours = as_records(info_record.get("opening_hours"))
    if opening_hours:
        hours_summary = ", ".join(
            f"day{text(hours.get('day'), '?')}: "
            f"{text(hours.get('open'), '?')}-{text(hours.get('close'), '?')}"
            for hours in opening_hours[:3]
        )
    else:
        hours_summary = "N/A"

    return "\n".join(
        [
            f"{text(station_record.get('name'), '?')} "
            f"(id={text(station_record.get('id'), '?')}, "
            f"slug={text(station_record.get('name_slug'))})",
            f"  Address: {address}",
            f"  Opening hours: {hours_summary}",
            f"  Features: {', '.join(features) if features else 'none listed'}",
        ]
    )
