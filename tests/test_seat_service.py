"""Tests for seat statistics and the brand/carrier catalogs."""

from unittest.mock import AsyncMock

import pytest
from conftest import make_connection

from koleo_mcp.errors import KoleoApiError
from koleo_mcp.models.responses import ToolErrorCode
from koleo_mcp.services.seat_service import (
    DEFAULT_PLACE_TYPE,
    get_brands,
    get_carriers,
    get_seat_availability,
    get_seat_stats,
)

AVAILABILITY = {
    "seats": [
        {"seat_id": 1, "state": "FREE"},
        {"seat_id": 2, "state": "RESERVED"},
        {"seat_id": 3, "state": "FREE"},
        {"seat_id": 4, "state": "BLOCKED"},
    ]
}


@pytest.fixture
def seat_client(client: AsyncMock, krakow: dict, warszawa: dict, brands: list[dict]) -> AsyncMock:
    by_slug = {"krakow-glowny": krakow, "warszawa-centralna": warszawa}
    client.get_station_by_slug.side_effect = lambda slug: by_slug[slug]
    client.get_brands.return_value = brands
    client.get_connection_id.return_value = 777
    client.get_connection.return_value = {"trains": [{"train_nr": 3510}]}
    client.get_seats_availability.return_value = AVAILABILITY
    return client


class TestGetSeatStats:
    """Tests for seat statistics of a train between two stations."""

    @pytest.mark.asyncio
    async def test_seat_stats(self, seat_client: AsyncMock) -> None:
        other = make_connection("other", "2024-01-15T09:00:00")
        other["legs"][0]["train_nr"] = 1111
        wanted = make_connection("wanted", "2024-01-15T10:00:00")
        seat_client.search_connections.return_value = [other, wanted]

        response = await get_seat_stats(
            seat_client, "IC", "3510", ["Kraków Główny", "Warszawa Centralna"], "2024-01-15T08:00"
        )

        assert response.error is None
        assert response.data == AVAILABILITY
        assert response.summary == (
            "IC 3510 on Kraków Główny -> Warszawa Centralna:\n"
            "  2/4 seats free, 1 reserved, 1 blocked"
        )
        assert seat_client.search_connections.await_args.args[2] == [28]
        seat_client.get_connection_id.assert_awaited_once_with("wanted")
        seat_client.get_connection.assert_awaited_once_with(777)
        seat_client.get_seats_availability.assert_awaited_once_with(
            777, 3510, DEFAULT_PLACE_TYPE
        )

    @pytest.mark.asyncio
    async def test_unknown_brand_searches_all(self, seat_client: AsyncMock) -> None:
        seat_client.search_connections.return_value = [make_connection("a", "2024-01-15T10:00:00")]

        await get_seat_stats(seat_client, "XYZ", "3510", ["krakow-glowny", "warszawa-centralna"])

        assert seat_client.search_connections.await_args.args[2] == [28, 29, 1]

    @pytest.mark.asyncio
    async def test_non_numeric_number_takes_any_train(self, seat_client: AsyncMock) -> None:
        seat_client.search_connections.return_value = [make_connection("a", "2024-01-15T10:00:00")]

        response = await get_seat_stats(
            seat_client, "IC", "SOLINA", ["krakow-glowny", "warszawa-centralna"]
        )

        assert response.error is None
        seat_client.get_connection_id.assert_awaited_once_with("a")

    @pytest.mark.asyncio
    async def test_train_not_on_connection(self, seat_client: AsyncMock) -> None:
        seat_client.search_connections.return_value = [make_connection("a", "2024-01-15T10:00:00")]

        response = await get_seat_stats(
            seat_client, "IC", "9999", ["krakow-glowny", "warszawa-centralna"]
        )

        assert response.summary == "Train IC 9999 not found on this connection"
        assert response.data is None
        seat_client.get_connection_id.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stations", [None, [], ["krakow-glowny"], ["a", "b", "c"]])
    async def test_requires_two_stations(self, client: AsyncMock, stations) -> None:
        response = await get_seat_stats(client, "IC", "3510", stations)

        assert response.error == ToolErrorCode.INVALID_PARAMS
        assert response.data is None
        client.get_station_by_slug.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_api_error(self, seat_client: AsyncMock) -> None:
        seat_client.search_connections.side_effect = KoleoApiError(403, "")

        response = await get_seat_stats(
            seat_client, "IC", "3510", ["krakow-glowny", "warszawa-centralna"]
        )

        assert response.error == ToolErrorCode.AUTH_REQUIRED


class TestGetSeatAvailability:
    """Tests for raw seat availability."""

    @pytest.mark.asyncio
    async def test_availability(self, client: AsyncMock) -> None:
        client.get_seats_availability.return_value = AVAILABILITY

        response = await get_seat_availability(client, 777, 3510, 2)

        client.get_seats_availability.assert_awaited_once_with(777, 3510, 2)
        assert response.data == AVAILABILITY
        assert response.summary == "2/4 seats free for connection 777, train 3510, type 2"


class TestCatalogs:
    """Tests for brand and carrier listings."""

    @pytest.mark.asyncio
    async def test_brands(self, client: AsyncMock, brands: list[dict]) -> None:
        client.get_brands.return_value = brands

        response = await get_brands(client)

        assert response.data == brands
        assert "  TLK    (Twoje Linie Kolejowe)" in response.summary.splitlines()

    @pytest.mark.asyncio
    async def test_carriers(self, client: AsyncMock) -> None:
        carriers = [{"id": 1, "name": "Koleje Mazowieckie", "short_name": "KM"}]
        client.get_carriers.return_value = carriers

        response = await get_carriers(client)

        assert response.data == carriers
        assert response.summary.splitlines() == ["Train carriers:", "  KM     -- Koleje Mazowieckie"]

    @pytest.mark.asyncio
    async def test_carriers_validated(self, client: AsyncMock) -> None:
        client.get_carriers.return_value = [{"name": "Polregio", "website": "polregio.pl"}]

        response = await get_carriers(client)

        assert response.data == [
            {"id": None, "name": "Polregio", "short_name": None, "website": "polregio.pl"}
        ]
        assert response.summary.splitlines()[1] == "         -- Polregio"
