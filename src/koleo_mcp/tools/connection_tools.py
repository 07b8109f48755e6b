from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.connection_service import search_connections as _search_connections
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def search_connections(
    start: str,
    end: str,
    date: str | None = None,
    brands: list[str] | None = None,
    direct: bool = False,
    include_prices: bool = False,
    length: int = 5,
) -> Annotated[CallToolResult, ToolResponse]:
    """Search for train connections between two stations.

    Examples:
        search_connections(start="Kraków Główny", end="Warszawa Centralna")
        search_connections(start="gdynia-glowna", end="poznan-glowny", brands=["IC", "TLK"])

    Args:
        start: Origin station slug or name.
        end: Destination station slug or name.
        date: ISO date/time of earliest departure (e.g., "2024-01-15T10:00"). Default: now.
        brands: Only these brands, by name or short code (e.g., ["IC", "EIP"]).
                Unknown names are ignored.
        direct: Only connections without changes.
        include_prices: Also fetch the price of each connection.
        length: Maximum number of connections to return (default 5).

    Returns:
        Connections in departure order, with prices when requested.
    """
    return to_tool_result(
        await _search_connections(
            get_client(),
            start,
            end,
            date=date,
            brands=brands,
            direct=direct,
            include_prices=include_prices,
            length=length,
        )
    )
