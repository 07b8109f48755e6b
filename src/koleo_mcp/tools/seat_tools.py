"""MCP tools for seats and the brand/carrier catalogs."""

from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.seat_service import get_brands as _get_brands
from koleo_mcp.services.seat_service import get_carriers as _get_carriers
from koleo_mcp.services.seat_service import get_seat_availability as _get_seat_availability
from koleo_mcp.services.seat_service import get_seat_stats as _get_seat_stats
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def get_seat_stats(
    brand: str,
    train_number: str,
    stations: list[str],
    date: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Check seat occupancy statistics for a train on a given route segment.

    Args:
        brand: Brand short code or name (e.g., "IC").
        train_number: Train number (e.g., "3510").
        stations: Exactly two station names: [start_station, end_station].
        date: ISO date/time near the train's departure. Default: now.
    """
    return to_tool_result(
        await _get_seat_stats(get_client(), brand, train_number, stations, date=date)
    )


@mcp.tool()
async def get_seat_availability(
    connection_id: int,
    train_nr: int,
    place_type: int,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get raw seat availability for a connection by connection_id, train_nr, and place_type."""
    return to_tool_result(
        await _get_seat_availability(get_client(), connection_id, train_nr, place_type)
    )


@mcp.tool()
async def get_brands() -> Annotated[CallToolResult, ToolResponse]:
    """List all available train brands/operators."""
    return to_tool_result(await _get_brands(get_client()))


@mcp.tool()
async def get_carriers() -> Annotated[CallToolResult, ToolResponse]:
    """List all train carriers."""
    return to_tool_result(await _get_carriers(get_client()))
