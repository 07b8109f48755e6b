"""Train routes and operating calendars."""

import logging
from datetime import datetime
from typing import Any

from koleo_mcp.data.config import KOLEO_WEB_URL
from koleo_mcp.data.koleo_client import KoleoClient
from koleo_mcp.errors import handle_tool_error
from koleo_mcp.formatters.trains import summarize_train_calendar, summarize_train_route
from koleo_mcp.models.responses import ToolResponse
from koleo_mcp.normalizers.dates import format_date_ymd, parse_datetime

logger = logging.getLogger(__name__)


def parse_train_number(train_number: str) -> int:
    """Numeric train number, 0 when the input is not all digits."""
    return int(train_number) if train_number.isdigit() else 0


def _first_calendar(payload: Any) -> dict[str, Any] | None:
    calendars = payload.get("train_calendars") if isinstance(payload, dict) else None
    if not isinstance(calendars, list) or not calendars:
        return None
    return calendars[0]


def _sorted_dates(calendar: dict[str, Any]) -> list[str]:
    dates = calendar.get("dates")
    if not isinstance(dates, list):
        return []
    return sorted(str(entry) for entry in dates)


def choose_run_date(calendar: dict[str, Any], wanted: str, closest: bool = False) -> str:
    """Pick the date of the train run to show.

    The wanted date is used when the train runs on it (and `closest` is not
    set). Otherwise the first running date on or after it, falling back to
    the last known running date, and finally to the wanted date itself.
    """
    date_train_map = calendar.get("date_train_map") or {}
    if not closest and date_train_map.get(wanted):
        return wanted

    dates = _sorted_dates(calendar)
    upcoming = [entry for entry in dates if entry >= wanted]
    if upcoming:
        return upcoming[0]
    if dates:
        return dates[-1]
    return wanted


def _train_response(detail: Any, train_id: int) -> ToolResponse:
    train = detail.get("train") if isinstance(detail, dict) else None
    stops = detail.get("stops") if isinstance(detail, dict) else None
    return ToolResponse(
        data=detail,
        summary=summarize_train_route(train, stops or []),
        koleo_url=f"{KOLEO_WEB_URL}/pl/trains/{train_id}",
    )


async def get_train_route(
    client: KoleoClient,
    brand: str,
    train_number: str,
    date: str | None = None,
    closest: bool = False,
) -> ToolResponse:
    """Route and stop schedule of a train identified by brand and number."""
    try:
        moment = parse_datetime(date)
        payload = await client.get_train_calendars(
            brand.upper(), parse_train_number(train_number)
        )

        calendar = _first_calendar(payload)
        if calendar is None:
            return ToolResponse(
                data=None,
                summary=f"No train found for {brand} {train_number}",
            )

        run_date = choose_run_date(calendar, format_date_ymd(moment), closest)
        train_id = (calendar.get("date_train_map") or {}).get(run_date)
        if not train_id:
            return ToolResponse(
                data=None,
                summary=f"Train {brand} {train_number} does not run on {run_date}",
            )

        logger.debug(f"{brand} {train_number} on {run_date} is train id {train_id}")
        detail = await client.get_train(int(train_id))
        return _train_response(detail, int(train_id))
    except Exception as e:
        return handle_tool_error(e)


async def get_train_by_id(client: KoleoClient, train_id: int) -> ToolResponse:
    """Route and stop schedule of a train by its Koleo train id."""
    try:
        detail = await client.get_train(train_id)
        return _train_response(detail, train_id)
    except Exception as e:
        return handle_tool_error(e)


async def get_train_calendar(client: KoleoClient, brand: str, train_number: str) -> ToolResponse:
    """All dates a train runs on, and the next one from today."""
    try:
        payload = await client.get_train_calendars(
            brand.upper(), parse_train_number(train_number)
        )

        calendar = _first_calendar(payload)
        if calendar is None:
            return ToolResponse(
                data=[],
                summary=f"No calendar found for {brand} {train_number}",
            )

        dates = _sorted_dates(calendar)
        today = format_date_ymd(datetime.now())
        next_date = next((entry for entry in dates if entry >= today), None)

        return ToolResponse(
            data=payload["train_calendars"],
            summary=summarize_train_calendar(calendar, brand, train_number, dates, next_date),
        )
    except Exception as e:
        return handle_tool_error(e)
