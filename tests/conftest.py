"""Shared fixtures: a mocked Koleo client and sample API records."""

from unittest.mock import AsyncMock

import pytest

from koleo_mcp.data import koleo_client
from koleo_mcp.data.config import KoleoConfig


@pytest.fixture(autouse=True)
def reset_client():
    """Reset the shared client before and after each test."""
    koleo_client.reset_client()
    yield
    koleo_client.reset_client()


@pytest.fixture
def client() -> AsyncMock:
    """A Koleo client whose endpoint methods are AsyncMocks."""
    mock = AsyncMock()
    mock.config = KoleoConfig()
    return mock


def make_station(station_id: int, name: str, slug: str, **extra) -> dict:
    return {"id": station_id, "name": name, "name_slug": slug, "type": "station", **extra}


def make_connection(uuid: str, departure: str, arrival: str | None = None, /, **extra) -> dict:
    return {
        "uuid": uuid,
        "departure": departure,
        "arrival": arrival or departure,
        "duration": 120,
        "changes": 0,
        "legs": [
            {"leg_type": "train_leg", "train_full_name": f"IC {uuid}", "train_nr": 3510},
        ],
        **extra,
    }


@pytest.fixture
def krakow() -> dict:
    return make_station(2, "Kraków Główny", "krakow-glowny", country="pl")


@pytest.fixture
def warszawa() -> dict:
    return make_station(1, "Warszawa Centralna", "warszawa-centralna", country="pl")


@pytest.fixture
def brands() -> list[dict]:
    return [
        {"id": 28, "name": "PKP Intercity", "logo_text": "IC"},
        {"id": 29, "name": "Twoje Linie Kolejowe", "logo_text": "TLK"},
        {"id": 1, "name": "Regio", "logo_text": "REG"},
    ]
