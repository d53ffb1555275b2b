from __future__ import annotations

from telegram.ext import Application, ApplicationBuilder, CommandHandler

from .commands import departures, help_command, start, stations
from .config import BotSettings
from .service import DeparturesService


def build_application(settings: BotSettings) -> Application:
    """Configure the Telegram application with command handlers."""

    service = DeparturesService(settings.ptv_settings)

    async def _close_service(application: Application) -> None:
        await service.close()

    application = (
        ApplicationBuilder()
        .token(settings.telegram_token)
        .post_shutdown(_close_service)
        .build()
    )

    application.bot_data["departures_service"] = service

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("stations", stations))
    application.add_handler(CommandHandler("departures", departures))

    return application
