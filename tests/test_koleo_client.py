"""Tests for the Koleo API client."""

import json
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from koleo_mcp.data import koleo_client
from koleo_mcp.data.config import KoleoConfig, KoleoSettings
from koleo_mcp.data.koleo_client import BASE_HEADERS, KoleoClient
from koleo_mcp.errors import KoleoApiError


def _response(status: int = 200, body: str = "", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.is_success = 200 <= status < 300
    response.text = body
    response.reason_phrase = reason
    response.json.side_effect = lambda: json.loads(body)
    return response


def _patched_http(response: MagicMock):
    """Patch httpx.AsyncClient so every request returns `response`."""
    patcher = patch("httpx.AsyncClient")
    mock_client_class = patcher.start()
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.request = AsyncMock(return_value=response)
    mock_client_class.return_value = mock_client
    return patcher, mock_client_class, mock_client


@pytest.fixture
def settings() -> KoleoSettings:
    return KoleoSettings(
        KOLEO_API_URL="https://api.example.com",
        KOLEO_WEB_URL="https://web.example.com",
    )


@pytest.fixture
def client(settings: KoleoSettings) -> KoleoClient:
    return KoleoClient(KoleoConfig(auth={"_koleo_token": "abc", "_other": "xyz"}), settings)


@pytest.fixture
def http():
    """Factory installing a fake response; yields (class mock, instance mock)."""
    patchers = []

    def install(response: MagicMock):
        patcher, mock_class, mock_client = _patched_http(response)
        patchers.append(patcher)
        return mock_class, mock_client

    yield install
    for patcher in patchers:
        patcher.stop()


@pytest.mark.asyncio
async def test_get_parses_json(client: KoleoClient, http):
    """A JSON body is decoded."""
    _, mock_client = http(_response(body='{"id": 1, "name": "Kraków Główny"}'))

    result = await client.get_station_by_slug("krakow-glowny")

    assert result == {"id": 1, "name": "Kraków Główny"}
    args, kwargs = mock_client.request.call_args
    assert args == ("GET", "https://api.example.com/v2/main/stations/by_slug/krakow-glowny")
    assert kwargs["params"] == {}
    assert kwargs["json"] is None


@pytest.mark.asyncio
async def test_base_headers_sent(client: KoleoClient, http):
    mock_class, _ = http(_response(body="[]"))

    await client.get_brands()

    assert mock_class.call_args.kwargs["headers"] == BASE_HEADERS
    assert BASE_HEADERS["x-koleo-version"] == "2"
    assert BASE_HEADERS["x-koleo-client"] == "Nuxt-1"


@pytest.mark.asyncio
async def test_non_json_body_returned_as_text(client: KoleoClient, http):
    http(_response(body="<html>ok</html>"))

    result = await client.get("/v2/main/something")

    assert result == "<html>ok</html>"


@pytest.mark.asyncio
async def test_error_status_raises_with_body(client: KoleoClient, http):
    http(_response(status=500, body="boom", reason="Internal Server Error"))

    with pytest.raises(KoleoApiError) as exc_info:
        await client.get_brands()

    assert exc_info.value.status == 500
    assert exc_info.value.body == "boom"


@pytest.mark.asyncio
async def test_error_status_without_body_uses_reason(client: KoleoClient, http):
    http(_response(status=403, body="", reason="Forbidden"))

    with pytest.raises(KoleoApiError) as exc_info:
        await client.get_carriers()

    assert exc_info.value.status == 403
    assert exc_info.value.body == "Forbidden"


@pytest.mark.asyncio
async def test_empty_success_body_is_not_found(client: KoleoClient, http):
    """A 2xx response with an empty body is reported as 404."""
    http(_response(status=200, body=""))

    with pytest.raises(KoleoApiError) as exc_info:
        await client.get_station_by_slug("nowhere")

    assert exc_info.value.status == 404
    assert exc_info.value.body == "Empty response"


@pytest.mark.asyncio
async def test_cookie_only_sent_with_auth(client: KoleoClient, http):
    _, mock_client = http(_response(body='{"stops": []}'))

    await client.get_realtime_timetable(123, datetime(2024, 1, 15, 8, 0))
    auth_headers = mock_client.request.call_args.kwargs["headers"]
    assert auth_headers["cookie"] == "_koleo_token=abc; _other=xyz"
    assert mock_client.request.call_args.args[1] == (
        "https://api.example.com/v2/main/train_timetable/123/2024-01-15"
    )

    await client.get_brands()
    assert "cookie" not in mock_client.request.call_args.kwargs["headers"]


@pytest.mark.asyncio
async def test_no_cookie_without_auth_values(settings: KoleoSettings, http):
    _, mock_client = http(_response(body='{"stops": []}'))
    client = KoleoClient(KoleoConfig(auth={"empty": ""}), settings)

    await client.get_realtime_timetable(123, datetime(2024, 1, 15))

    assert "cookie" not in mock_client.request.call_args.kwargs["headers"]


@pytest.mark.asyncio
async def test_find_station_uses_web_host(client: KoleoClient, http):
    _, mock_client = http(_response(body='{"stations": [{"id": 1}]}'))

    result = await client.find_station("Kraków")

    assert result == [{"id": 1}]
    args, kwargs = mock_client.request.call_args
    assert args[1] == "https://web.example.com/ls"
    assert kwargs["params"] == {"q": "Kraków", "language": "pl"}


@pytest.mark.asyncio
async def test_train_calendars_drops_unset_params(client: KoleoClient, http):
    _, mock_client = http(_response(body='{"train_calendars": []}'))

    await client.get_train_calendars("IC", 3510)

    assert mock_client.request.call_args.kwargs["params"] == {"brand": "IC", "nr": 3510}

    await client.get_train_calendars("IC", 3510, name="solina")
    assert mock_client.request.call_args.kwargs["params"]["name"] == "SOLINA"


@pytest.mark.asyncio
async def test_search_connections_payload(client: KoleoClient, http):
    _, mock_client = http(_response(body="[]"))

    await client.search_connections(1, 2, [28, 29], datetime(2024, 1, 15, 10, 0, 5), direct=True)

    args, kwargs = mock_client.request.call_args
    assert args == ("POST", "https://api.example.com/v2/main/eol_connections/search")
    assert kwargs["json"] == {
        "start_id": 1,
        "end_id": 2,
        "departure_after": "2024-01-15T10:00:05",
        "only_direct": True,
        "allowed_brands": [28, 29],
    }
    assert kwargs["headers"]["accept-eol-response-version"] == "1"


@pytest.mark.asyncio
async def test_search_connections_omits_empty_brand_filter(client: KoleoClient, http):
    _, mock_client = http(_response(body="[]"))

    await client.search_connections(1, 2, [], datetime(2024, 1, 15, 10, 0))

    payload = mock_client.request.call_args.kwargs["json"]
    assert "allowed_brands" not in payload
    assert payload["only_direct"] is False


@pytest.mark.asyncio
async def test_get_price_404_is_none(client: KoleoClient, http):
    http(_response(status=404, body="not found"))

    assert await client.get_price("abc") is None


@pytest.mark.asyncio
async def test_get_price_other_errors_propagate(client: KoleoClient, http):
    http(_response(status=500, body="boom"))

    with pytest.raises(KoleoApiError):
        await client.get_price("abc")


@pytest.mark.asyncio
async def test_get_connection_id_uses_put(client: KoleoClient, http):
    _, mock_client = http(_response(body='{"connection_id": 987}'))

    assert await client.get_connection_id("abc") == 987
    args = mock_client.request.call_args.args
    assert args == ("PUT", "https://api.example.com/v2/main/eol_connections/abc/connection_id")


def test_get_client_is_shared():
    assert koleo_client.get_client() is koleo_client.get_client()


def test_set_and_reset_client(settings: KoleoSettings):
    injected = KoleoClient(KoleoConfig(email="a@b.c", password="x"), settings)
    koleo_client.set_client(injected)
    assert koleo_client.get_client() is injected

    koleo_client.reset_client()
    assert koleo_client.get_client() is not injected
