from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Optional

import httpx

from .config import PtvSettings
from .models import Departure, DeparturesResponse

logger = logging.getLogger(__name__)

ROUTE_TYPE_TRAIN = 0
# only the next two departures are ever shown
MAX_RESULTS = 2

PLATFORM_TO_CITY = 1
PLATFORM_FROM_CITY = 2


class PtvError(RuntimeError):
    """Base class for failures talking to the PTV Timetable API."""


class InvalidBaseUri(PtvError):
    """Raised when a request URL cannot be built from the configured base URI."""


class PtvTransportError(PtvError):
    """Raised when a request could not be completed (connection, timeout...)."""


class PtvUpstreamError(PtvError):
    """Raised when PTV answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"PTV returned status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PtvDecodeError(PtvError):
    """Raised when a successful response body is not a departures payload."""


def departures_path(stop_id: int, platform: int, developer_id: int) -> str:
    return (
        f"/v3/departures/route_type/{ROUTE_TYPE_TRAIN}/stop/{stop_id}"
        f"?platform_numbers={platform}&max_results={MAX_RESULTS}"
        f"&include_cancelled=false&devid={developer_id}"
    )


def sign_path(api_key: bytes | str, path: str) -> str:
    """Return the lowercase hex HMAC-SHA1 signature PTV expects for ``path``."""

    key = api_key.encode("utf-8") if isinstance(api_key, str) else api_key
    return hmac.new(key, path.encode("utf-8"), hashlib.sha1).hexdigest()


def build_signed_url(
    base_url: str,
    api_key: bytes | str,
    developer_id: int,
    platform: int,
    stop_id: int,
) -> httpx.URL:
    """Build the signed departures URL for one stop and platform.

    No I/O happens here and the result depends only on the arguments.
    """

    path = departures_path(stop_id, platform, developer_id)
    signature = sign_path(api_key, path)
    try:
        url = httpx.URL(f"{base_url}{path}&signature={signature}")
    except httpx.InvalidURL as exc:
        raise InvalidBaseUri(f"invalid base uri {base_url!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidBaseUri(f"invalid base uri {base_url!r}: expected an absolute http(s) uri")
    return url


class PtvClient:
    """Async client for the PTV Timetable API departures endpoint."""

    def __init__(
        self,
        settings: PtvSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            timeout=settings.timeout,
            headers={"Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PtvClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def signed_url(self, stop_id: int, platform: int) -> httpx.URL:
        return build_signed_url(
            self._settings.base_url,
            self._settings.api_key,
            self._settings.developer_id,
            platform,
            stop_id,
        )

    async def get_departures(self, stop_id: int, platform: int) -> DeparturesResponse:
        """Return the next departures from ``platform`` at ``stop_id``."""

        url = self.signed_url(stop_id, platform)
        logger.debug("Requesting departures for stop %s platform %s", stop_id, platform)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise PtvTransportError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "PTV returned %s for stop %s platform %s",
                response.status_code,
                stop_id,
                platform,
            )
            raise PtvUpstreamError(response.status_code, response.text[:200])

        try:
            payload = response.json()
        except ValueError as exc:
            snippet = response.text[:200] or "<empty body>"
            raise PtvDecodeError(f"body is not valid JSON: {snippet}") from exc

        return self._parse_departures(payload)

    @staticmethod
    def _parse_departures(payload: Any) -> DeparturesResponse:
        if not isinstance(payload, dict):
            raise PtvDecodeError(f"expected a JSON object, got {type(payload).__name__}")
        items = payload.get("departures")
        if not isinstance(items, list):
            raise PtvDecodeError("missing field `departures`")
        return DeparturesResponse(
            departures=tuple(PtvClient._parse_departure(item) for item in items)
        )

    @staticmethod
    def _parse_departure(data: Any) -> Departure:
        if not isinstance(data, dict):
            raise PtvDecodeError(f"expected a departure object, got {type(data).__name__}")
        at_platform = data.get("at_platform")
        if not isinstance(at_platform, bool):
            raise PtvDecodeError("missing or invalid field `at_platform`")
        return Departure(
            at_platform=at_platform,
            scheduled_departure_utc=PtvClient._optional_timestamp(data, "scheduled_departure_utc"),
            estimated_departure_utc=PtvClient._optional_timestamp(data, "estimated_departure_utc"),
        )

    @staticmethod
    def _optional_timestamp(data: dict[str, Any], field: str) -> Optional[str]:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise PtvDecodeError(f"invalid field `{field}`: expected a string or null")
        return value
