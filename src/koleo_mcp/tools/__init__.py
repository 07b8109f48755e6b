"""MCP tool registrations.

Importing this package registers every tool on the shared FastMCP app.
"""

from koleo_mcp.tools import (  # noqa: F401
    board_tools,
    connection_tools,
    realtime_tools,
    seat_tools,
    station_tools,
    train_tools,
)
