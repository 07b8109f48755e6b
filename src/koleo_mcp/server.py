import argparse
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

import koleo_mcp.tools  # noqa: F401  (registers every tool on `mcp`)
from koleo_mcp.app import mcp
from koleo_mcp.data.config import get_settings, load_config
from koleo_mcp.data.koleo_client import KoleoClient, get_client, set_client

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    authenticated: bool


@mcp.tool()
def health() -> HealthResponse:
    """Check if the Koleo MCP server is running and healthy.

    Returns the server status, version, current timestamp, and whether
    credentials are configured for tools that need a logged-in session.
    """
    from koleo_mcp import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
        authenticated=get_client().config.has_credentials,
    )


def build_client(config_path: Path | None = None) -> KoleoClient:
    """Create the Koleo client from settings and the credentials file."""
    settings = get_settings()
    config = load_config(config_path or settings.config_path)
    return KoleoClient(config, settings)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="koleo-mcp",
        description="Koleo railway MCP Server",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=(
            "Credentials file path "
            "(default: ~/.config/koleo-mcp/config.json or KOLEO_MCP_CONFIG env var)"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Logs go to stderr; stdout carries the MCP stdio transport
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    client = build_client(args.config)
    set_client(client)
    logger.info(f"Starting Koleo MCP server (authenticated={client.config.has_credentials})")

    mcp.run()


if __name__ == "__main__":
    main()
