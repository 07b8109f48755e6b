"""Departure and arrival boards for a station."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from koleo_mcp.data.config import KOLEO_WEB_URL
from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.board import BoardKind, summarize_all_trains, summarize_board
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.normalizers.dates import (
    format_date_ymd,
    format_date_ymd_hm,
    format_local_iso_minute,
    parse_datetime,
)
from koleo_mcp.services.station_service import resolve_station

logger = logging.getLogger(__name__)

# koleo.pl station page sections
BOARD_PATHS: dict[BoardKind, str] = {
    "departure": "odjazdy",
    "arrival": "przyjazdy",
}


def filter_from(trains: Any, kind: BoardKind, cutoff: str) -> list[dict[str, Any]]:
    """Keep trains whose departure/arrival is at or after the cutoff.

    Compares ISO strings lexically; the cutoff is YYYY-MM-DDTHH:MM so
    a train at exactly the cutoff minute is kept. Entries that are not
    records are dropped.
    """
    if not isinstance(trains, list):
        return []
    return [
        train
        for train in trains
        if isinstance(train, Mapping) and str(train.get(kind) or "") >= cutoff
    ]


def _board_url(slug: str, kind: BoardKind, day: str) -> str:
    return f"{KOLEO_WEB_URL}/dworzec-pkp/{slug}/{BOARD_PATHS[kind]}/{day}"


async def get_board(
    client: KoleoClient,
    station: str,
    kind: BoardKind,
    date: str | None = None,
) -> ToolResponse:
    """Departures or arrivals at a station from the given time onwards (default now)."""
    try:
        moment = parse_datetime(date)
        resolved = await resolve_station(client, station)

        if kind == "departure":
            trains = await client.get_departures(resolved.id, moment)
        else:
            trains = await client.get_arrivals(resolved.id, moment)

        filtered = filter_from(trains, kind, format_local_iso_minute(moment))
        logger.debug(f"{resolved.name}: {len(filtered)}/{len(trains)} {kind}s after cutoff")

        return ToolResponse(
            data=filtered,
            summary=summarize_board(filtered, resolved.name, format_date_ymd_hm(moment), kind),
            koleo_url=_board_url(resolved.name_slug, kind, format_date_ymd(moment)),
        )
    except Exception as e:
        return handle_tool_error(e)


async def get_departures(
    client: KoleoClient, station: str, date: str | None = None
) -> ToolResponse:
    return await get_board(client, station, "departure", date)


async def get_arrivals(client: KoleoClient, station: str, date: str | None = None) -> ToolResponse:
    return await get_board(client, station, "arrival", date)


async def get_all_trains(
    client: KoleoClient, station: str, date: str | None = None
) -> ToolResponse:
    """Departures and arrivals merged into one board, sorted by time."""
    try:
        moment = parse_datetime(date)
        resolved = await resolve_station(client, station)

        departures, arrivals = await asyncio.gather(
            client.get_departures(resolved.id, moment),
            client.get_arrivals(resolved.id, moment),
        )

        cutoff = format_local_iso_minute(moment)
        combined: list[tuple[dict[str, Any], BoardKind]] = [
            (train, "departure") for train in filter_from(departures, "departure", cutoff)
        ]
        combined.extend((train, "arrival") for train in filter_from(arrivals, "arrival", cutoff))
        combined.sort(key=lambda entry: str(entry[0].get(entry[1]) or ""))

        return ToolResponse(
            data=[{"train": train, "type": kind} for train, kind in combined],
            summary=summarize_all_trains(combined, resolved.name, format_date_ymd_hm(moment)),
            koleo_url=_board_url(resolved.name_slug, "departure", format_date_ymd(moment)),
        )
    except Exception as e:
        return handle_tool_error(e)
