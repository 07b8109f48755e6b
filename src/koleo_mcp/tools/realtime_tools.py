from typing import Annotated

from mcp.types import CallToolResult

from koleo_mcp.app import mcp
from koleo_mcp.data.koleo_client import get_client
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.services.realtime_service import get_realtime_timetable as _get_realtime_timetable
from koleo_mcp.tools.results import to_tool_result


@mcp.tool()
async def get_realtime_timetable(
    train_id: int,
    operating_day: str | None = None,
) -> Annotated[CallToolResult, ToolResponse]:
    """Get realtime timetable for a train, including actual vs scheduled times.

    Requires email and password in ~/.config/koleo-mcp/config.json.

    Args:
        train_id: Koleo train ID (see get_train_route / get_train_by_id).
        operating_day: Day of the run (e.g., "2024-01-15"). Default: today.
    """
    return to_tool_result(await _get_realtime_timetable(get_client(), train_id, operating_day))
