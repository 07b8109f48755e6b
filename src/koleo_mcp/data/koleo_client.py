import logging
from datetime import date, datetime
from typing import Any

import httpx

from koleo_mcp.data.config import KoleoConfig, KoleoSettings, get_settings, load_config
from koleo_mcp.errors import KoleoApiError
from koleo_mcp.normalizers.dates import format_date_ymd, format_local_iso_seconds

logger = logging.getLogger(__name__)

BASE_HEADERS = {
    "x-koleo-version": "2",
    "x-koleo-client": "Nuxt-1",
    "user-agent": "koleo-mcp",
}

QueryValue = str | int | float | bool


def _clean_params(
    params: dict[str, QueryValue | list[QueryValue] | None] | None,
) -> dict[str, Any]:
    """Drop unset query parameters. Lists are sent as repeated keys."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


class KoleoClient:
    """Async HTTP client for the Koleo API.

    Holds immutable configuration only; every request opens its own
    httpx.AsyncClient, so one instance can be shared for the process lifetime.

    Usage:
        client = KoleoClient(load_config(), get_settings())
        station = await client.get_station_by_slug("krakow-glowny")
    """

    def __init__(self, config: KoleoConfig, settings: KoleoSettings):
        """Initialize the client.

        Args:
            config: Credentials and session cookie values.
            settings: API hosts and language.
        """
        self._config = config
        self._settings = settings

    @property
    def config(self) -> KoleoConfig:
        return self._config

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        return f"{self._settings.api_base_url}{path_or_url}"

    def _web_url(self, path: str) -> str:
        return f"{self._settings.web_base_url}{path}"

    async def request(
        self,
        method: str,
        path_or_url: str,
        params: dict[str, QueryValue | list[QueryValue] | None] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        use_auth: bool = False,
    ) -> Any:
        """Send a request and return the decoded JSON (or raw text if not JSON).

        Raises:
            KoleoApiError: On a non-2xx status, or a 2xx status with an empty body
                (reported as 404).
            httpx.HTTPError: If the transport fails.
        """
        request_headers = dict(headers or {})
        if use_auth:
            cookie = self._config.cookie_header
            if cookie:
                request_headers["cookie"] = cookie

        url = self._url(path_or_url)
        logger.debug(f"{method} {url}")

        async with httpx.AsyncClient(headers=BASE_HEADERS) as http:
            response = await http.request(
                method,
                url,
                params=_clean_params(params),
                json=json,
                headers=request_headers,
            )

        text = response.text
        if not response.is_success:
            raise KoleoApiError(response.status_code, text or response.reason_phrase)

        if not text:
            raise KoleoApiError(404, "Empty response")

        try:
            return response.json()
        except ValueError:
            return text

    async def get(self, path_or_url: str, **kwargs: Any) -> Any:
        return await self.request("GET", path_or_url, **kwargs)

    async def post(self, path_or_url: str, **kwargs: Any) -> Any:
        return await self.request("POST", path_or_url, **kwargs)

    async def put(self, path_or_url: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path_or_url, **kwargs)

    # Stations

    async def get_stations(self) -> list[dict[str, Any]]:
        """Full station catalog."""
        return await self.get("/v2/main/stations")

    async def find_station(self, query: str, language: str | None = None) -> list[dict[str, Any]]:
        """Station name search (website endpoint)."""
        payload = await self.get(
            self._web_url("/ls"),
            params={"q": query, "language": language or self._settings.language},
        )
        return payload.get("stations", []) if isinstance(payload, dict) else []

    async def get_station_by_slug(self, slug: str) -> dict[str, Any]:
        return await self.get(f"/v2/main/stations/by_slug/{slug}")

    async def get_station_info_by_slug(self, slug: str) -> dict[str, Any]:
        return await self.get(f"/v2/main/station_info/{slug}")

    # Boards

    async def get_departures(self, station_id: int, day: date) -> list[dict[str, Any]]:
        return await self.get(
            f"/v2/main/timetables/{station_id}/{format_date_ymd(day)}/departures"
        )

    async def get_arrivals(self, station_id: int, day: date) -> list[dict[str, Any]]:
        return await self.get(f"/v2/main/timetables/{station_id}/{format_date_ymd(day)}/arrivals")

    # Trains

    async def get_train_calendars(
        self, brand: str, number: int, name: str | None = None
    ) -> dict[str, Any]:
        return await self.get(
            self._web_url("/pl/train_calendars"),
            params={"brand": brand, "nr": number, "name": name.upper() if name else None},
        )

    async def get_train(self, train_id: int) -> dict[str, Any]:
        return await self.get(self._web_url(f"/pl/trains/{train_id}"))

    async def get_realtime_timetable(self, train_id: int, operating_day: date) -> dict[str, Any]:
        """Realtime stop times for a train run. Requires session cookies."""
        return await self.get(
            f"/v2/main/train_timetable/{train_id}/{format_date_ymd(operating_day)}",
            use_auth=True,
        )

    # Catalogs

    async def get_brands(self) -> list[dict[str, Any]]:
        return await self.get("/v2/main/brands")

    async def get_carriers(self) -> list[dict[str, Any]]:
        return await self.get("/v2/main/carriers")

    # Connections

    async def search_connections(
        self,
        start_station_id: int,
        end_station_id: int,
        brand_ids: list[int],
        departure_after: datetime,
        direct: bool = False,
    ) -> list[dict[str, Any]]:
        """Fetch one page of connections departing at or after `departure_after`.

        An empty `brand_ids` list means no brand restriction.
        """
        payload: dict[str, Any] = {
            "start_id": start_station_id,
            "end_id": end_station_id,
            "departure_after": format_local_iso_seconds(departure_after),
            "only_direct": direct,
        }
        if brand_ids:
            payload["allowed_brands"] = brand_ids

        return await self.post(
            "/v2/main/eol_connections/search",
            json=payload,
            headers={"accept-eol-response-version": "1"},
        )

    async def get_price(self, uuid: str) -> dict[str, Any] | None:
        """Price for a connection, or None when Koleo has no price for it (404)."""
        try:
            return await self.get(f"/v2/main/eol_connections/{uuid}/price")
        except KoleoApiError as e:
            if e.status == 404:
                return None
            raise

    async def get_connection_id(self, uuid: str) -> int:
        """Resolve the numeric connection id behind a connection uuid."""
        payload = await self.put(f"/v2/main/eol_connections/{uuid}/connection_id")
        return int(payload["connection_id"])

    async def get_connection(self, connection_id: int) -> dict[str, Any]:
        return await self.get(f"/v2/main/connections/{connection_id}")

    async def get_seats_availability(
        self, connection_id: int, train_nr: int, place_type: int
    ) -> dict[str, Any]:
        return await self.get(
            f"/v2/main/seats_availability/{connection_id}/{train_nr}/{place_type}"
        )


# Process-wide client handle (lazy-initialized, replaceable)
_client: KoleoClient | None = None


def get_client() -> KoleoClient:
    """Get the shared client, building it from settings and the config file on first use."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = KoleoClient(load_config(settings.config_path), settings)
    return _client


def set_client(client: KoleoClient) -> None:
    """Install the client every tool will use."""
    global _client
    _client = client


def reset_client() -> None:
    """Drop the shared client and cached settings. Useful for testing."""
    global _client
    _client = None
    get_settings.cache_clear()
