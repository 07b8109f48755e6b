from mcp.types import CallToolResult, TextContent

from koleo_mcp.models.responses import ToolResponse


def to_tool_result(response: ToolResponse) -> CallToolResult:
    """Convert a tool response envelope into an MCP tool result.

    The text content is the summary (plus the Koleo URL line), the structured
    content is the envelope itself, and the result is flagged as an error
    when the envelope carries an error code.
    """
    return CallToolResult(
        content=[TextContent(type="text", text=response.to_text())],
        structuredContent=response.to_structured(),
        isError=response.error is not None,
    )
