from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ToolErrorCode(str, Enum):
    """Error categories reported to MCP clients."""

    NOT_FOUND = "not_found"
    AUTH_REQUIRED = "auth_required"
    INVALID_PARAMS = "invalid_params"
    UNKNOWN = "unknown"


class ToolResponse(BaseModel):
    """Envelope returned by every Koleo tool."""

    data: Any = Field(default=None, description="Raw records returned by the Koleo API")
    summary: str = Field(description="Human-readable multi-line summary")
    koleo_url: str = Field(default="", description="Matching koleo.pl page, empty if none")
    error: ToolErrorCode | None = Field(
        default=None, description="Set when the call failed (not_found, auth_required, ...)"
    )

    def to_text(self) -> str:
        """Render the summary, followed by the Koleo URL line when there is one."""
        if self.koleo_url:
            return f"{self.summary}\nKoleo URL: {self.koleo_url}"
        return self.summary

    def to_structured(self) -> dict[str, Any]:
        """Dump the envelope as JSON-compatible data, omitting an unset error."""
        payload = self.model_dump(mode="json")
        if self.error is None:
            payload.pop("error")
        return payload
