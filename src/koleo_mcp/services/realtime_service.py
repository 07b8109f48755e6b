"""Realtime (actual vs scheduled) timetable of a train run.

The endpoint needs a logged-in session, so the tool refuses to call it
unless credentials are configured.
"""

from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.trains import summarize_realtime_timetable
from koleo_mcp.models.responses import ToolErrorCode, ToolResponse
from koleo_mcp.normalizers.dates import format_date_ymd, parse_datetime

CREDENTIALS_HELP = (
    "This tool requires authentication. Create ~/.config/koleo-mcp/config.json with:\n"
    '  {"email": "your@email.com", "password": "yourpassword"}'
)


async def get_realtime_timetable(
    client: KoleoClient,
    train_id: int,
    operating_day: str | None = None,
) -> ToolResponse:
    """Realtime stop times for a train on an operating day (default today)."""
    if not client.config.has_credentials:
        return ToolResponse(
            data=None,
            summary=CREDENTIALS_HELP,
            error=ToolErrorCode.AUTH_REQUIRED,
        )

    try:
        day = parse_datetime(operating_day)
        timetable = await client.get_realtime_timetable(train_id, day)
        return ToolResponse(
            data=timetable,
            summary=summarize_realtime_timetable(timetable, str(train_id), format_date_ymd(day)),
        )
    except Exception as e:
        return handle_tool_error(e)
