"""Records returned by the Koleo API.

Only the fields the server relies on are declared; everything else the API
sends is kept as extra data so it can be passed back to MCP clients untouched.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Station(BaseModel):
    """A station as returned by the by-slug and catalog endpoints."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    name_slug: str = ""
    type: str | None = None
    country: str | None = None


class Brand(BaseModel):
    """A train brand (service tier / operator product), e.g. IC, TLK, REG."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str | None = None
    logo_text: str | None = Field(default=None, description="Short code, e.g. 'IC'")

    def matches(self, requested: str) -> bool:
        """Case-insensitive match on name or short code."""
        wanted = requested.lower()
        return wanted in ((self.name or "").lower(), (self.logo_text or "").lower())


class Carrier(BaseModel):
    """A railway carrier (company operating trains)."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    name: str | None = None
    short_name: str | None = None


class TimeOfDay(BaseModel):
    """Wall-clock time without a date, as sent by some Koleo endpoints."""

    model_config = ConfigDict(extra="ignore")

    hour: int
    minute: int
    second: int = 0


class Leg(BaseModel):
    """One segment of a connection: a train ride or a walk/transfer."""

    model_config = ConfigDict(extra="allow")

    leg_type: str | None = None
    train_full_name: str | None = None
    train_nr: int | None = None

    @property
    def is_train_leg(self) -> bool:
        return self.leg_type == "train_leg"


class Connection(BaseModel):
    """A connection returned by the EOL connection search."""

    model_config = ConfigDict(extra="allow")

    uuid: str = ""
    departure: str | None = None
    arrival: str | None = None
    duration: int | None = Field(default=None, description="Travel time in minutes")
    changes: int | None = None
    legs: list[Leg] = []

    @field_validator("uuid", mode="before")
    @classmethod
    def _uuid_as_string(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("legs", mode="before")
    @classmethod
    def _keep_leg_records(cls, value: Any) -> list[Any]:
        """Missing or malformed legs become an empty list; non-record entries are dropped."""
        if not isinstance(value, (list, tuple)):
            return []
        return [leg for leg in value if isinstance(leg, (Mapping, Leg))]

    def carries_train(self, train_nr: int | None = None) -> bool:
        """Check whether any train leg matches the given number (any train if None)."""
        return any(
            leg.is_train_leg and (train_nr is None or leg.train_nr == train_nr)
            for leg in self.legs
        )
