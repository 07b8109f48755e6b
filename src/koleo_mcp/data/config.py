import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "koleo-mcp" / "config.json"

# Public website, used for links in tool responses
KOLEO_WEB_URL = "https://koleo.pl"


class KoleoSettings(BaseSettings):
    """Server settings.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    config_path: Path = Field(default=DEFAULT_CONFIG_PATH, alias="KOLEO_MCP_CONFIG")
    api_base_url: str = Field(default="https://api.koleo.pl", alias="KOLEO_API_URL")
    web_base_url: str = Field(default=KOLEO_WEB_URL, alias="KOLEO_WEB_URL")
    language: str = Field(default="pl", alias="KOLEO_LANGUAGE")


class KoleoConfig(BaseModel):
    """User credentials file contents.

    `auth` holds session cookie values (cookie name -> value) sent with
    endpoints that require a logged-in user.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    email: str | None = None
    password: str | None = None
    auth: dict[str, Any] = {}

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)

    @property
    def cookie_header(self) -> str | None:
        """Cookie header built from the auth values, None when there are none."""
        entries = [
            f"{key}={value}"
            for key, value in self.auth.items()
            if isinstance(value, str) and value
        ]
        if not entries:
            return None
        return "; ".join(entries)


@lru_cache
def get_settings() -> KoleoSettings:
    """Get server settings (cached singleton).

    Returns:
        KoleoSettings with values from .env file or environment variables.
    """
    return KoleoSettings()


def load_config(path: Path | None = None) -> KoleoConfig:
    """Load the credentials file.

    A missing, unreadable or malformed file yields an empty config.

    Args:
        path: File to read. Defaults to the KOLEO_MCP_CONFIG setting.
    """
    config_path = path or get_settings().config_path
    if not config_path.is_file():
        logger.debug(f"No config file at {config_path}, using empty config")
        return KoleoConfig()

    try:
        return KoleoConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return KoleoConfig()
