"""MCP tools for finding stations."""

from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.station_service import get_station_info as _get_station_info
from koleo_mcp.services.station_service import search_stations as _search_stations
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def search_stations(
    query: str,
    station_type: str | None = None,
    country: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Search for train stations by name. Returns station IDs, slugs, and types.

    Examples:
        search_stations(query="Kraków")
        search_stations(query="Berlin", country="de")

    Args:
        query: Station name or part of it (e.g., "Warszawa Centralna", "Gdynia").
        station_type: Only return stations of this type (e.g., "station").
        country: Only return stations in this country code (e.g., "pl", "de").

    Returns:
        Matching stations; use `name_slug` as the station argument of other tools.
    """
    return to_tool_result(
        await _search_stations(get_client(), query, station_type=station_type, country=country)
    )


@mcp.tool()
async def get_station_info(station: str) -> Annotated[CallToolResult, ToolResponse]:
    """Get detailed info about a station: address, opening hours, available facilities.

    Args:
        station: Station slug (e.g., "krakow-glowny") or name (e.g., "Kraków Główny").
    """
    return to_tool_result(await _get_station_info(get_client(), station))
