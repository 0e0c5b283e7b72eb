"""HTTP transport with bearer auth and JSON decoding."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyweelo._constants import USER_AGENT
from pyweelo._redact import redact_for_log
from pyweelo.config import WeeloConfig
from pyweelo.exceptions import WeeloTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Returns ``(http_status, decoded_body)``. Non-2xx statuses are not
    raised here; the endpoint layer folds them into the response
    envelope.
    """

    async def get_json(
        self,
        endpoint: str,
        params: Mapping[str, str] | None = None,
    ) -> tuple[int, dict[str, Any]]: ...


class HttpTransport:
    """aiohttp transport for the Weelo REST API."""

    def __init__(self, config: WeeloConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if self._config.access_token:
            headers["authorization"] = f"Bearer {self._config.access_token}"
        return headers

    async def get_json(
        self,
        endpoint: str,
        params: Mapping[str, str] | None = None,
    ) -> tuple[int, dict[str, Any]]:
        url = f"{self._config.api_root}{endpoint}"
        query = dict(params or {})

        _logger.debug("GET %s", url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "GET %s headers=%s params=%s",
                url,
                redact_for_log(self._headers()),
                redact_for_log(query),
            )

        try:
            async with self._http.get(url, params=query, headers=self._headers(), timeout=self._timeout) as resp:
                status = resp.status
                text = await resp.text()
        except TimeoutError as exc:
            raise WeeloTransportError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc
        except aiohttp.ClientError as exc:
            raise WeeloTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        if not text.strip():
            body: Any = {}
        else:
            try:
                body = json.loads(text)
            except json.JSONDecodeError as exc:
                raise WeeloTransportError(
                    f"Invalid JSON from {endpoint} (HTTP {status}): {text[:200]}",
                    status_code=status,
                    endpoint=endpoint,
                ) from exc

        if not isinstance(body, dict):
            raise WeeloTransportError(
                f"Unexpected response shape from {endpoint}: {type(body).__name__}",
                status_code=status,
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("GET %s -> %s %s", url, status, redact_for_log(body))

        return status, body
