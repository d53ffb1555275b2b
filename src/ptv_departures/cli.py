from __future__ import annotations

import logging

from dotenv import load_dotenv

from .app import build_application
from .config import BotSettings


def main() -> None:
    """Entry point for launching the Telegram bot."""

    load_dotenv()
    settings = BotSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request urls, signature included, at info
    logging.getLogger("httpx").setLevel(logging.WARNING)
    application = build_application(settings)
    application.run_polling()


if __name__ == "__main__":
    main()
