"""Connection search between two stations."""

import asyncio
from typing import Any

from koleo_mcp.data.config import KOLEO_WEB_URL
from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.connections import summarize_connections
from koleo_mcp.models.koleo import Brand, Station
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.normalizers.dates import format_date_dmy_hm, parse_datetime
from koleo_mcp.normalizers.slugs import resolve_slug
from koleo_mcp.services import connection_search


async def search_connections(
    client: KoleoClient,
    start: str,
    end: str,
    date: str | None = None,
    brands: list[str] | None = None,
    direct: bool = False,
    include_prices: bool = False,
    length: int = 5,
) -> ToolResponse:
    """Find up to `length` connections between two stations.

    Each entry of `data` is {"connection": ...}, plus a "price" key (price
    data or None) when prices were requested.
    """
    try:
        moment = parse_datetime(date)
        start_slug = resolve_slug(start)
        end_slug = resolve_slug(end)

        raw_start, raw_end, raw_brands = await asyncio.gather(
            client.get_station_by_slug(start_slug),
            client.get_station_by_slug(end_slug),
            client.get_brands(),
        )
        start_station = Station.model_validate(raw_start)
        end_station = Station.model_validate(raw_end)
        catalog = [Brand.model_validate(raw) for raw in raw_brands]

        connections = await connection_search.search(
            client,
            start_station.id,
            end_station.id,
            connection_search.resolve_brand_ids(catalog, brands),
            moment,
            direct,
            length,
        )

        prices: dict[str, dict[str, Any] | None] = {}
        if include_prices and connections:
            prices = await connection_search.fetch_prices(client, connections)

        data = []
        for connection in connections:
            entry: dict[str, Any] = {"connection": connection.model_dump()}
            if include_prices:
                entry["price"] = prices.get(connection.uuid)
            data.append(entry)

        mode = "direct" if direct else "all"
        return ToolResponse(
            data=data,
            summary=summarize_connections(
                connections, start_station.name, end_station.name, prices
            ),
            koleo_url=(
                f"{KOLEO_WEB_URL}/rozklad-pkp/{start_slug}/{end_slug}/"
                f"{format_date_dmy_hm(moment)}/{mode}/all"
            ),
        )
    except Exception as e:
        return handle_tool_error(e)
