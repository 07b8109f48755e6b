"""Seat availability and catalog summaries."""

from dataclasses import dataclass
from typing import Any

from koleo_mcp.formatters.fields import as_record, as_records, text


@dataclass
class SeatCounts:
    """Seat states counted from a seats_availability response."""

    total: int
    free: int
    reserved: int

    @property
    def blocked(self) -> int:
        return self.total - self.free - self.reserved


def count_seats(availability: Any) -> SeatCounts:
    seats = as_records(as_record(availability).get("seats"))
    return SeatCounts(
        total=len(seats),
        free=sum(1 for seat in seats if seat.get("state") == "FREE"),
        reserved=sum(1 for seat in seats if seat.get("state") == "RESERVED"),
    )


def summarize_seat_stats(
    counts: SeatCounts,
    brand: str,
    train_number: str,
    start_name: str,
    end_name: str,
) -> str:
    return (
        f"{brand} {train_number} on {start_name} -> {end_name}:\n"
        f"  {counts.free}/{counts.total} seats free, {counts.reserved} reserved, "
        f"{counts.blocked} blocked"
    )


def summarize_seat_availability(
    counts: SeatCounts,
    connection_id: int,
    train_nr: int,
    place_type: int,
) -> str:
    return (
        f"{counts.free}/{counts.total} seats free for connection {connection_id}, "
        f"train {train_nr}, type {place_type}"
    )


def summarize_brands(brands: list[Any]) -> str:
    lines = ["Available train brands:"]
    for brand in as_records(brands):
        lines.append(f"  {text(brand.get('logo_text')):<6} ({text(brand.get('name'))})")
    return "\n".join(lines)


def summarize_carriers(carriers: list[Any]) -> str:
    lines = ["Train carriers:"]
    for carrier in as_records(carriers):
        lines.append(f"  {text(carrier.get('short_name')):<6} -- {text(carrier.get('name'))}")
    return "\n".join(lines)
