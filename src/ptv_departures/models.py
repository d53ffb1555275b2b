from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class Departure:
    at_platform: bool
    scheduled_departure_utc: Optional[str] = None
    estimated_departure_utc: Optional[str] = None


@dataclass(frozen=True)
class DeparturesResponse:
    """Departures for one stop and platform, soonest first as sent by PTV."""

    departures: Sequence[Departure] = ()


@dataclass(frozen=True)
class DepartureMinutes:
    minutes: int

    def to_dict(self) -> dict[str, int]:
        return {"minutes": self.minutes}


@dataclass(frozen=True)
class DepartureTimes:
    to_city_departures: Sequence[DepartureMinutes]
    from_city_departures: Sequence[DepartureMinutes]


@dataclass(frozen=True)
class DeparturesResult:
    """Outcome of one departures lookup.

    Either ``departures`` is set and the status code is 200, or
    ``error_message`` is set alongside a 4xx/5xx status code. Use the
    ``success`` and ``failure`` constructors rather than building one directly.
    """

    status_code: int
    departures: Optional[DepartureTimes] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, departures: DepartureTimes) -> "DeparturesResult":
        return cls(status_code=200, departures=departures)

    @classmethod
    def failure(cls, status_code: int, message: str) -> "DeparturesResult":
        if 200 <= status_code < 300:
            raise ValueError(f"failure result needs an error status code, got {status_code}")
        return cls(status_code=status_code, error_message=message)

    @property
    def ok(self) -> bool:
        return self.departures is not None

    def to_dict(self) -> dict[str, Any]:
        if self.departures is None:
            body: dict[str, Any] = {"errorMessage": self.error_message or ""}
        else:
            body = {
                "toCityDepartures": [d.to_dict() for d in self.departures.to_city_departures],
                "fromCityDepartures": [d.to_dict() for d in self.departures.from_city_departures],
            }
        return {"statusCode": self.status_code, "body": body}
