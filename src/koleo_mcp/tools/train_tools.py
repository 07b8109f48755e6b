"""MCP tools for train routes and calendars."""

from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.train_service import get_train_by_id as _get_train_by_id
from koleo_mcp.services.train_service import get_train_calendar as _get_train_calendar
from koleo_mcp.services.train_service import get_train_route as _get_train_route
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def get_train_route(
    brand: str,
    train_number: str,
    date: str | None = None,
    closest: bool = False,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get the full route and stop schedule for a train by brand and number.

    Args:
        brand: Brand short code or name (e.g., "IC", "TLK").
        train_number: Train number (e.g., "3510").
        date: Day of the run (e.g., "2024-01-15"). Default: today.
        closest: Use the nearest running day on or after `date` even if the
                 train runs on `date`.
    """
    return to_tool_result(
        await _get_train_route(get_client(), brand, train_number, date=date, closest=closest)
    )


@mcp.tool()
async def get_train_by_id(train_id: int) -> Annotated[CallToolResult, ToolResponse]:
    """Get a train route and stops by internal Koleo train ID."""
    return to_tool_result(await _get_train_by_id(get_client(), train_id))


@mcp.tool()
async def get_train_calendar(
    brand: str,
    train_number: str,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get all dates when a specific train runs (operating calendar).

    Args:
        brand: Brand short code or name (e.g., "IC").
        train_number: Train number (e.g., "3510").
    """
    return to_tool_result(await _get_train_calendar(get_client(), brand, train_number))
