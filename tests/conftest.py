"""Shared fixtures for PTV departures tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx
import pytest

from ptv_departures.config import PtvSettings
from ptv_departures.ptv_api import PtvClient

FAKE_API_KEY = "9c132d31-6a30-4cac-8d8b-8a1970834799"

Handler = Callable[[httpx.Request], httpx.Response]


def utc_text(moment: datetime) -> str:
    """Render a UTC instant the way PTV does, whole seconds with a trailing Z."""
    return moment.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def departures_body(*departures: dict[str, Any]) -> bytes:
    return json.dumps({"departures": list(departures)}).encode()


@pytest.fixture
def settings() -> PtvSettings:
    """Create settings pointing at a fake PTV host."""
    return PtvSettings(api_key=FAKE_API_KEY, developer_id=32, base_url="http://example.com")


@pytest.fixture
def make_client(settings: PtvSettings) -> Callable[[Handler], PtvClient]:
    """Build PtvClient instances whose requests are answered by ``handler``."""

    def _make(handler: Handler, client_settings: PtvSettings | None = None) -> PtvClient:
        return PtvClient(client_settings or settings, transport=httpx.MockTransport(handler))

    return _make
