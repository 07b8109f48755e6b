"""Station search and station details."""

import asyncio
import logging
from urllib.parse import quote

from koleo_mcp.data.config import KOLEO_WEB_URL
from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.stations import summarize_station_info, summarize_station_search
from koleo_mcp.models.koleo import Station
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.normalizers.slugs import resolve_slug

logger = logging.getLogger(__name__)


async def resolve_station(client: KoleoClient, station: str) -> Station:
    """Look up a station given its slug or display name.

    Raises:
        KoleoApiError: 404 if no station has the derived slug.
    """
    raw = await client.get_station_by_slug(resolve_slug(station))
    return Station.model_validate(raw)


async def search_stations(
    client: KoleoClient,
    query: str,
    station_type: str | None = None,
    country: str | None = None,
) -> ToolResponse:
    """Search stations by name, optionally filtered by type and country.

    The country filter needs the full station catalog, since search results
    carry no country.
    """
    try:
        results = await client.find_station(query)

        if station_type:
            expected_type = station_type.lower()
            results = [s for s in results if str(s.get("type") or "").lower() == expected_type]

        if country:
            expected_country = country.lower()
            catalog = await client.get_stations()
            allowed_ids = {
                s.get("id")
                for s in catalog
                if str(s.get("country") or "").lower() == expected_country
            }
            results = [s for s in results if s.get("id") in allowed_ids]

        logger.debug(f"Station search '{query}' returned {len(results)} result(s)")
        return ToolResponse(
            data=results,
            summary=summarize_station_search(results, query),
            koleo_url=f"{KOLEO_WEB_URL}/ls?q={quote(query, safe='')}",
        )
    except Exception as e:
        return handle_tool_error(e)


async def get_station_info(client: KoleoClient, station: str) -> ToolResponse:
    """Station record plus address, opening hours and facilities."""
    try:
        slug = resolve_slug(station)
        raw_station, info = await asyncio.gather(
            client.get_station_by_slug(slug),
            client.get_station_info_by_slug(slug),
        )
        resolved = Station.model_validate(raw_station)

        return ToolResponse(
            data={"station": resolved.model_dump(), "info": info},
            summary=summarize_station_info(resolved, info),
            koleo_url=f"{KOLEO_WEB_URL}/dworzec-pkp/{slug}",
        )
    except Exception as e:
        return handle_tool_error(e)
