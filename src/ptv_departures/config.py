from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Self


def _require_env(name: str) -> str:
    try:
        return os.environ[name]
    except KeyError:
        raise RuntimeError(f"Missing PTV setting in environment: {name}") from None


def _parse_developer_id(raw: str) -> int:
    if not raw:
        raise RuntimeError("APP_DEVELOPER_ID field is empty")
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"APP_DEVELOPER_ID must be an unsigned integer, got {raw!r}") from None
    if value < 0:
        raise RuntimeError(f"APP_DEVELOPER_ID must be an unsigned integer, got {raw!r}")
    return value


def _parse_timeout(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"APP_TIMEOUT must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class PtvSettings:
    """Credentials and options for the PTV Timetable API."""

    api_key: str
    developer_id: int
    base_url: str = "http://timetableapi.ptv.vic.gov.au"
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> Self:
        api_key = _require_env("APP_API_KEY")
        developer_id = _parse_developer_id(_require_env("APP_DEVELOPER_ID"))
        base_url = os.environ.get("APP_URI", cls.base_url)
        timeout = _parse_timeout(os.environ.get("APP_TIMEOUT"), cls.timeout)
        return cls(
            api_key=api_key,
            developer_id=developer_id,
            base_url=base_url,
            timeout=timeout,
        )


@dataclass(frozen=True)
class BotSettings:
    """Configuration options for the Telegram bot."""

    telegram_token: str
    ptv_settings: PtvSettings
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Create settings object from environment variables."""

        try:
            telegram_token = os.environ["TELEGRAM_BOT_TOKEN"]
        except KeyError as exc:
            missing = exc.args[0]
            raise RuntimeError(
                f"Missing Telegram credential in environment: {missing}"
            ) from None

        return cls(
            telegram_token=telegram_token,
            ptv_settings=PtvSettings.from_env(),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
        )
