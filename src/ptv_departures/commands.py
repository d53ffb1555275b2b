from __future__ import annotations

from telegram import Update
from telegram.ext import ContextTypes

from .formatter import format_departure_times, format_station_list
from .service import DeparturesService
from .stations import STATIONS, normalise_station_name


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send greeting and usage basics."""

    message = (
        "👋 Hi! Send /departures followed by a station name, e.g.\n"
        "/departures Rushall\n\n"
        "Not sure of the name? Try /stations."
    )
    await update.message.reply_text(message)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = (
        "Usage:\n"
        "  /departures <station>\n"
        "  /stations [search term]\n\n"
        "Examples:\n"
        "  /departures Rushall\n"
        "  /departures Flinders Street\n"
        "  /stations rich"
    )
    await update.message.reply_text(message)


async def stations(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """List the stations the bot knows, optionally filtered by a search term."""

    query = normalise_station_name(" ".join(context.args)) if context.args else ""
    names = [name for name in STATIONS if _matches(name, query)]
    await update.message.reply_text(format_station_list(names))


async def departures(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle the /departures command."""

    if not context.args:
        await update.message.reply_text(
            "Please supply a station name, e.g. /departures Rushall"
        )
        return

    station = normalise_station_name(" ".join(context.args))
    result = await _service(context).get(station)
    await update.message.reply_text(format_departure_times(station, result))


def _matches(name: str, query: str) -> bool:
    if not query:
        return True
    return query.replace("_", " ") in name.replace("_", " ")


def _service(context: ContextTypes.DEFAULT_TYPE) -> DeparturesService:
    return context.application.bot_data["departures_service"]
