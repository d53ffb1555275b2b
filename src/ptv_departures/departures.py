from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Optional

from .models import Departure, DepartureMinutes, DeparturesResponse

logger = logging.getLogger(__name__)

_ONE_MINUTE = dt.timedelta(minutes=1)
_RFC3339 = re.compile(r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})")


class DepartureResolveError(ValueError):
    """Raised when departures cannot be turned into minutes from now."""


class NoDeparturesFound(DepartureResolveError):
    def __init__(self) -> None:
        super().__init__("no departures found")


class MissingTimestamp(DepartureResolveError):
    def __init__(self) -> None:
        super().__init__("could not find timestamps from departure")


class TimestampParseError(DepartureResolveError):
    """Raised for departure timestamps that are not RFC 3339 date-times."""


def parse_timestamp(value: str) -> dt.datetime:
    if not _RFC3339.fullmatch(value):
        raise TimestampParseError(f"invalid timestamp {value!r}: not an RFC 3339 date-time")
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError as exc:
        raise TimestampParseError(f"invalid timestamp {value!r}: {exc}") from exc


def minutes_until(timestamp: str, *, now: dt.datetime) -> int:
    """Return whole minutes from ``now`` until ``timestamp``, truncated toward zero.

    190 seconds ahead is 3 minutes, five seconds ago is 0 and a minute ago is -1.
    """

    minutes, remainder = divmod(parse_timestamp(timestamp) - now, _ONE_MINUTE)
    if minutes < 0 and remainder:
        minutes += 1
    return minutes


def departure_minutes(departure: Departure, *, now: dt.datetime) -> int:
    timestamp = departure.estimated_departure_utc
    if timestamp is None:
        timestamp = departure.scheduled_departure_utc
    if timestamp is None:
        raise MissingTimestamp()
    return minutes_until(timestamp, now=now)


def resolve_departure_minutes(
    response: DeparturesResponse,
    *,
    now: Optional[dt.datetime] = None,
) -> list[DepartureMinutes]:
    """Convert the first two departures of ``response`` into minutes from now.

    The first departure must resolve, otherwise its error is raised. The
    second one is optional: if it cannot be resolved it is left out.
    """

    now = now or dt.datetime.now(dt.UTC)
    if not response.departures:
        raise NoDeparturesFound()

    resolved = [DepartureMinutes(departure_minutes(response.departures[0], now=now))]

    if len(response.departures) > 1:
        try:
            second = departure_minutes(response.departures[1], now=now)
        except DepartureResolveError as exc:
            logger.debug("Ignoring unusable second departure: %s", exc)
        else:
            resolved.append(DepartureMinutes(second))

    return resolved
