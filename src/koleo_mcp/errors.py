"""Exceptions and the mapping from exceptions to tool error responses."""

import logging

from koleo_mcp.models.responses import ToolErrorCode, ToolResponse

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = (
    "Authentication required. Create ~/.config/koleo-mcp/config.json with email and password."
)


class KoleoApiError(Exception):
    """Raised when the Koleo API answers with a non-2xx status or an empty body."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Koleo API error {status}")
        self.status = status
        self.body = body


class InvalidDateTimeError(ValueError):
    """Raised when a date/time string cannot be parsed."""

    def __init__(self, value: str):
        super().__init__(f"Invalid ISO datetime: {value}")
        self.value = value


def _error_response(summary: str, error: ToolErrorCode) -> ToolResponse:
    return ToolResponse(data=None, summary=summary, koleo_url="", error=error)


def handle_tool_error(error: Exception) -> ToolResponse:
    """Translate an exception raised inside a tool into an error response.

    Mapping:
    - KoleoApiError 404 -> not_found
    - KoleoApiError 401/403 -> auth_required
    - other KoleoApiError -> unknown (status and body in the summary)
    - InvalidDateTimeError -> invalid_params
    - anything else -> unknown (type name and message in the summary)
    """
    if isinstance(error, KoleoApiError):
        if error.status == 404:
            logger.warning(f"Koleo resource not found: {error.body}")
            return _error_response(
                f"Not found: {error.body or 'requested resource does not exist'}",
                ToolErrorCode.NOT_FOUND,
            )

        if error.status in (401, 403):
            logger.warning(f"Koleo API refused the request with status {error.status}")
            return _error_response(AUTH_REQUIRED_MESSAGE, ToolErrorCode.AUTH_REQUIRED)

        logger.warning(f"Koleo API error {error.status}: {error.body}")
        return _error_response(
            f"Error: KoleoApiError({error.status}): {error.body or 'unknown API error'}",
            ToolErrorCode.UNKNOWN,
        )

    if isinstance(error, InvalidDateTimeError):
        logger.warning(str(error))
        return _error_response(str(error), ToolErrorCode.INVALID_PARAMS)

    logger.exception("Unexpected error while handling tool call")
    return _error_response(
        f"Error: {type(error).__name__}: {error}",
        ToolErrorCode.UNKNOWN,
    )
