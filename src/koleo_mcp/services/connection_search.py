"""Paginated connection search with optional price enrichment.

The Koleo search endpoint returns a bounded page of connections departing
after a given time and has no continuation token. Paging is simulated by
moving the departure-after cursor past the last departure seen:

1. Fetch a page at the cursor. An empty page ends the search.
2. Append the whole page (no truncation yet).
3. Move the cursor to the last departure + 30 min 1 s.
4. Repeat until enough connections are collected or MAX_ITERATIONS pages
   were fetched, then truncate once.

This relies on pages being ordered by departure. Services clustered within
the 30 minute skip after the last connection of a page can be missed; this
is a known limitation of the cursor heuristic.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import InvalidDateTimeError
from koleo_mcp.models.koleo import Brand, Connection
from koleo_mcp.normalizers.dates import koleo_time_to_datetime

logger = logging.getLogger(__name__)

# Hard cap on pages fetched per search
MAX_ITERATIONS = 10

# Cursor step past the last departure of a page
PAGE_ADVANCE = timedelta(minutes=30, seconds=1)


def resolve_brand_ids(catalog: Iterable[Brand], requested: Iterable[str] | None) -> list[int]:
    """Map requested brand names or short codes to brand ids.

    Matching is case-insensitive on the brand name or its short code.
    Unknown names are dropped. With nothing requested every brand id in the
    catalog is returned; if nothing matches the result is empty, which the
    search endpoint treats as "all brands".
    """
    wanted = [name for name in (requested or []) if name]
    if not wanted:
        return [brand.id for brand in catalog]
    return [brand.id for brand in catalog if any(brand.matches(name) for name in wanted)]


def _next_cursor(page: list[Connection]) -> datetime | None:
    """Cursor for the page after `page`, or None if the last departure is unusable."""
    last_departure = page[-1].departure
    if not last_departure:
        return None
    try:
        return koleo_time_to_datetime(last_departure) + PAGE_ADVANCE
    except InvalidDateTimeError:
        return None


async def search(
    client: KoleoClient,
    origin_id: int,
    destination_id: int,
    brand_ids: list[int],
    start: datetime,
    direct: bool,
    want: int,
) -> list[Connection]:
    """Collect up to `want` connections departing at or after `start`.

    Args:
        client: Koleo client.
        origin_id: Start station id.
        destination_id: End station id.
        brand_ids: Allowed brand ids (empty means all brands).
        start: Initial departure-after cursor.
        direct: Only direct connections.
        want: Maximum number of connections to return.

    Returns:
        Connections in the order the API returned them (departure order),
        at most `want` of them.
    """
    results: list[Connection] = []
    fetch_from = start
    iteration = 0

    while len(results) < want and iteration < MAX_ITERATIONS:
        raw_page = await client.search_connections(
            origin_id, destination_id, brand_ids, fetch_from, direct
        )
        if not raw_page:
            logger.debug(f"Empty page at {fetch_from.isoformat()}, stopping")
            break

        page = [Connection.model_validate(raw) for raw in raw_page]
        results.extend(page)
        iteration += 1

        next_from = _next_cursor(page)
        if next_from is None:
            logger.debug("Last connection of page has no usable departure, stopping")
            break
        fetch_from = next_from

    logger.debug(f"Collected {len(results)} connections in {iteration} page(s)")
    return results[:want]


async def fetch_prices(
    client: KoleoClient,
    connections: list[Connection],
) -> dict[str, dict[str, Any] | None]:
    """Fetch prices for all connections in parallel.

    Returns:
        Mapping of connection uuid to price data, None where Koleo has no price.
        Errors other than 404 propagate.
    """
    prices = await asyncio.gather(*(client.get_price(c.uuid) for c in connections))
    return {connection.uuid: price for connection, price in zip(connections, prices)}
