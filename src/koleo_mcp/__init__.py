"""MCP server for the Koleo railway API."""

__version__ = "0.1.0"
