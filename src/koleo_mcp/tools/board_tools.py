"""MCP tools for station departure and arrival boards."""

from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.board_service import get_all_trains as _get_all_trains
from koleo_mcp.services.board_service import get_arrivals as _get_arrivals
from koleo_mcp.services.board_service import get_departures as _get_departures
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def get_departures(
    station: str,
    date: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get upcoming train departures from a station.

    Args:
        station: Station slug (e.g., "krakow-glowny") or name (e.g., "Kraków Główny").
        date: ISO date/time to start from (e.g., "2024-01-15T10:00"). Default: now.

    Returns:
        Departures at or after the given time, with train names and platforms.
    """
    return to_tool_result(await _get_departures(get_client(), station, date))


@mcp.tool()
async def get_arrivals(
    station: str,
    date: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get upcoming train arrivals at a station.

    Args:
        station: Station slug or name.
        date: ISO date/time to start from. Default: now.
    """
    return to_tool_result(await _get_arrivals(get_client(), station, date))


@mcp.tool()
async def get_all_trains(
    station: str,
    date: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get all trains (both departures and arrivals) at a station, sorted by time.

    Args:
        station: Station slug or name.
        date: ISO date/time to start from. Default: now.
    """
    return to_tool_result(await _get_all_trains(get_client(), station, date))
