"""HTTP access to the Signal K server's device registry."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from pypgn._constants import SOURCES_API_PATH
from pypgn.exceptions import PgnTransportError

_logger = logging.getLogger(__name__)


class SignalKSources:
    """Fetches the ``/sources`` tree used for device registry lookups."""

    def __init__(
        self,
        base_url: str,
        http_session: aiohttp.ClientSession,
        *,
        token: str | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}{SOURCES_API_PATH}"
        self._http = http_session
        self._token = token

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> dict[str, Any]:
        """Return the current ``/sources`` snapshot."""
        headers: dict[str, str] = {"accept": "application/json"}
        if self._token:
            headers["authorization"] = f"Bearer {self._token}"

        _logger.debug("GET %s", self._url)

        try:
            async with self._http.get(self._url, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise PgnTransportError(
                        f"HTTP {resp.status} from {self._url}: {text[:200]}",
                        status_code=resp.status,
                        url=self._url,
                    )
        except PgnTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise PgnTransportError(f"Request to {self._url} failed: {exc}", url=self._url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PgnTransportError(f"Invalid JSON from {self._url}: {text[:200]}", url=self._url) from exc

        if not isinstance(body, dict):
            raise PgnTransportError(f"Unexpected /sources payload from {self._url}", url=self._url)
        return body
