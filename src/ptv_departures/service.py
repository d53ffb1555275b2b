from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Optional, Sequence

from .config import PtvSettings
from .departures import DepartureResolveError, resolve_departure_minutes
from .models import DepartureMinutes, DeparturesResult, DepartureTimes
from .ptv_api import (
    PLATFORM_FROM_CITY,
    PLATFORM_TO_CITY,
    InvalidBaseUri,
    PtvClient,
    PtvDecodeError,
    PtvTransportError,
    PtvUpstreamError,
)
from .stations import get_stop_id

logger = logging.getLogger(__name__)

TO_CITY = "to city"
FROM_CITY = "from city"


async def _direction_minutes(
    client: PtvClient,
    stop_id: int,
    platform: int,
    now: Optional[dt.datetime],
) -> Sequence[DepartureMinutes]:
    response = await client.get_departures(stop_id, platform)
    return resolve_departure_minutes(response, now=now)


def _failure_for(direction: str, exc: Exception) -> DeparturesResult:
    if isinstance(exc, InvalidBaseUri):
        return DeparturesResult.failure(500, f"could not construct request {direction}. {exc}")
    if isinstance(exc, PtvTransportError):
        return DeparturesResult.failure(500, f"did not successfully complete request. {exc}")
    if isinstance(exc, PtvUpstreamError):
        return DeparturesResult.failure(
            424, f"error response received from ptv. code: {exc.status_code}"
        )
    if isinstance(exc, PtvDecodeError):
        return DeparturesResult.failure(500, f"could not read json response. {exc}")
    if isinstance(exc, DepartureResolveError):
        return DeparturesResult.failure(500, f"could not get departure minutes. {exc}")

    logger.error("Unexpected error fetching departures %s", direction, exc_info=exc)
    return DeparturesResult.failure(500, f"unexpected error fetching departures {direction}. {exc}")


async def fetch_departure_times(
    station: Optional[str],
    client: PtvClient,
    *,
    now: Optional[dt.datetime] = None,
) -> DeparturesResult:
    """Look up the next departures towards and away from the city for ``station``.

    Never raises for lookup or upstream problems: every failure is returned
    as a ``DeparturesResult`` carrying a status code and message.
    """

    if station is None or not station.strip():
        return DeparturesResult.failure(400, "no station provided")

    stop_id = get_stop_id(station)
    if stop_id is None:
        return DeparturesResult.failure(404, f"could not find station '{station}'")

    # both directions always run to completion, a failure in one does not cancel the other
    results = await asyncio.gather(
        _direction_minutes(client, stop_id, PLATFORM_TO_CITY, now),
        _direction_minutes(client, stop_id, PLATFORM_FROM_CITY, now),
        return_exceptions=True,
    )

    for direction, result in zip((TO_CITY, FROM_CITY), results):
        if isinstance(result, Exception):
            failure = _failure_for(direction, result)
            logger.warning(
                "Departures %s for %s failed with %s: %s",
                direction,
                station,
                failure.status_code,
                failure.error_message,
            )
            return failure
        if isinstance(result, BaseException):
            raise result

    to_city, from_city = results
    return DeparturesResult.success(
        DepartureTimes(
            to_city_departures=list(to_city),
            from_city_departures=list(from_city),
        )
    )


class DeparturesService:
    """Owns a PTV client and answers departures lookups by station name."""

    def __init__(self, settings: PtvSettings, *, client: Optional[PtvClient] = None) -> None:
        self._settings = settings
        self._client = client

    @property
    def client(self) -> PtvClient:
        if self._client is None:
            self._client = PtvClient(self._settings)
        return self._client

    async def get(self, station: Optional[str]) -> DeparturesResult:
        try:
            return await fetch_departure_times(station, self.client)
        except Exception as exc:
            logger.exception("Departures lookup for %r failed", station)
            return DeparturesResult.failure(500, f"unexpected error. {exc}")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
