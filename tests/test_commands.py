"""Tests for the Telegram command handlers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from ptv_departures import commands
from ptv_departures.models import DepartureMinutes, DeparturesResult, DepartureTimes


def make_update() -> MagicMock:
    update = MagicMock()
    update.message.reply_text = AsyncMock()
    return update


def make_context(args: list[str], service: MagicMock | None = None) -> MagicMock:
    context = MagicMock()
    context.args = args
    context.application.bot_data = {"departures_service": service or MagicMock()}
    return context


def replied_text(update: MagicMock) -> str:
    update.message.reply_text.assert_awaited_once()
    return update.message.reply_text.await_args.args[0]


@pytest.mark.asyncio
async def test_departures_command_formats_result() -> None:
    """Given a station argument, when handling /departures, then the service result is rendered."""
    service = MagicMock()
    service.get = AsyncMock(
        return_value=DeparturesResult.success(
            DepartureTimes(
                to_city_departures=[DepartureMinutes(2), DepartureMinutes(9)],
                from_city_departures=[DepartureMinutes(0)],
            )
        )
    )
    update = make_update()

    await commands.departures(update, make_context(["Flinders", "Street"], service))

    service.get.assert_awaited_once_with("flinders_street")
    text = replied_text(update)
    assert "Flinders Street" in text
    assert "Towards the city: 2 min, 9 min" in text
    assert "Away from the city: now" in text


@pytest.mark.asyncio
async def test_departures_command_reports_failures() -> None:
    """Given an unknown station, when handling /departures, then the error message is shown."""
    service = MagicMock()
    service.get = AsyncMock(
        return_value=DeparturesResult.failure(404, "could not find station 'atlantis'")
    )
    update = make_update()

    await commands.departures(update, make_context(["Atlantis"], service))

    service.get.assert_awaited_once_with("atlantis")
    assert "could not find station 'atlantis'" in replied_text(update)


@pytest.mark.asyncio
async def test_departures_command_without_station() -> None:
    """Given no arguments, when handling /departures, then usage help is sent and no lookup happens."""
    service = MagicMock()
    service.get = AsyncMock()
    update = make_update()

    await commands.departures(update, make_context([], service))

    service.get.assert_not_awaited()
    assert "/departures Rushall" in replied_text(update)


@pytest.mark.asyncio
async def test_stations_command_filters() -> None:
    """Given a search term, when handling /stations, then only matching names are listed."""
    update = make_update()

    await commands.stations(update, make_context(["richmond"]))

    text = replied_text(update)
    assert "north_richmond" in text
    assert "west_richmond" in text
    assert "rushall" not in text


@pytest.mark.asyncio
async def test_stations_command_lists_all() -> None:
    """Given no search term, when handling /stations, then every known station is listed."""
    update = make_update()

    await commands.stations(update, make_context([]))

    text = replied_text(update)
    assert "rushall" in text
    assert "southern cross" in text
