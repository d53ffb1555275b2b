from __future__ import annotations

from typing import Iterable, Sequence

from .models import DepartureMinutes, DeparturesResult


def format_departure_times(station: str, result: DeparturesResult) -> str:
    """Render a departures lookup for Telegram."""

    if result.departures is None:
        return f"Couldn't get departures for {_display_name(station)} ({result.status_code}): {result.error_message}"

    lines = [
        f"Next trains from {_display_name(station)}",
        f"Towards the city: {_format_minutes(result.departures.to_city_departures)}",
        f"Away from the city: {_format_minutes(result.departures.from_city_departures)}",
    ]
    return "\n".join(lines)


def format_station_list(names: Iterable[str]) -> str:
    names = sorted(names)
    if not names:
        return "No stations match that search term."
    return "Known stations:\n" + "\n".join(f"- {name}" for name in names)


def _format_minutes(departures: Sequence[DepartureMinutes]) -> str:
    if not departures:
        return "no departures"
    return ", ".join(_format_single(d.minutes) for d in departures)


def _format_single(minutes: int) -> str:
    if minutes < 0:
        return "departed"
    if minutes == 0:
        return "now"
    return f"{minutes} min"


def _display_name(station: str) -> str:
    return station.replace("_", " ").title()
