"""Seat availability, brands and carriers."""

import asyncio
import logging

from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.seats import (
    count_seats,
    summarize_brands,
    summarize_carriers,
    summarize_seat_availability,
    summarize_seat_stats,
)
from koleo_mcp.models.koleo import Brand, Carrier, Connection, Station
from koleo_mcp.models.responses import ToolErrorCode, ToolResponse
from koleo_mcp.normalizers.dates import parse_datetime
from koleo_mcp.normalizers.slugs import name_to_slug

logger = logging.getLogger(__name__)

# place_type used for seat statistics (regular seats)
DEFAULT_PLACE_TYPE = 1


async def get_seat_stats(
    client: KoleoClient,
    brand: str,
    train_number: str,
    stations: list[str] | None,
    date: str | None = None,
) -> ToolResponse:
    """Seat occupancy for a train between two stations.

    Finds the connection carrying the train, resolves its numeric connection
    id, then counts seat states of the first train of that connection.
    """
    if not stations or len(stations) != 2:
        return ToolResponse(
            data=None,
            summary="stations parameter is required: provide [start_station, end_station]",
            error=ToolErrorCode.INVALID_PARAMS,
        )

    try:
        moment = parse_datetime(date)
        raw_start, raw_end, raw_brands = await asyncio.gather(
            client.get_station_by_slug(name_to_slug(stations[0])),
            client.get_station_by_slug(name_to_slug(stations[1])),
            client.get_brands(),
        )
        start_station = Station.model_validate(raw_start)
        end_station = Station.model_validate(raw_end)
        catalog = [Brand.model_validate(raw) for raw in raw_brands]

        matched = next((b for b in catalog if b.matches(brand)), None)
        brand_ids = [matched.id] if matched else [b.id for b in catalog]
        train_nr = int(train_number) if train_number.isdigit() else None

        page = await client.search_connections(
            start_station.id, end_station.id, brand_ids, moment
        )
        candidates = [Connection.model_validate(raw) for raw in page]
        connection = next((c for c in candidates if c.carries_train(train_nr)), None)
        if connection is None:
            return ToolResponse(
                data=None,
                summary=f"Train {brand} {train_number} not found on this connection",
            )

        connection_id = await client.get_connection_id(connection.uuid)
        detail = await client.get_connection(connection_id)
        trains = detail.get("trains") if isinstance(detail, dict) else None
        first_train = trains[0] if isinstance(trains, list) and trains else {}
        detail_train_nr = int(first_train.get("train_nr") or 0)
        logger.debug(f"Connection {connection_id}, train {detail_train_nr}")

        availability = await client.get_seats_availability(
            connection_id, detail_train_nr, DEFAULT_PLACE_TYPE
        )
        return ToolResponse(
            data=availability,
            summary=summarize_seat_stats(
                count_seats(availability),
                brand,
                train_number,
                start_station.name,
                end_station.name,
            ),
        )
    except Exception as e:
        return handle_tool_error(e)


async def get_seat_availability(
    client: KoleoClient,
    connection_id: int,
    train_nr: int,
    place_type: int,
) -> ToolResponse:
    """Raw seat availability for a connection, train and place type."""
    try:
        availability = await client.get_seats_availability(connection_id, train_nr, place_type)
        return ToolResponse(
            data=availability,
            summary=summarize_seat_availability(
                count_seats(availability), connection_id, train_nr, place_type
            ),
        )
    except Exception as e:
        return handle_tool_error(e)


async def get_brands(client: KoleoClient) -> ToolResponse:
    try:
        brands = await client.get_brands()
        return ToolResponse(data=brands, summary=summarize_brands(brands))
    except Exception as e:
        return handle_tool_error(e)


async def get_carriers(client: KoleoClient) -> ToolResponse:
    try:
        raw_carriers = await client.get_carriers()
        carriers = [Carrier.model_validate(raw) for raw in raw_carriers]
        return ToolResponse(
            data=[carrier.model_dump() for carrier in carriers],
            summary=summarize_carriers(carriers),
        )
    except Exception as e:
        return handle_tool_error(e)
