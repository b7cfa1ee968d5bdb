"""HTTP transport for the Webfleet extern endpoint."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pywebfleet._constants import EMPTY_DOCUMENT_MARKER, ERROR_MESSAGE_HEADER
from pywebfleet._redact import redact_query
from pywebfleet.config import WebfleetConfig
from pywebfleet.exceptions import (
    WebfleetApiError,
    WebfleetAuthenticationError,
    WebfleetConfigError,
    WebfleetError,
    WebfleetTransportError,
)

_logger = logging.getLogger(__name__)

# Plain-text errors look like "8011, request quota reached".
_TEXT_ERROR_RE = re.compile(r"^(\d+),\s*(.*)$", re.DOTALL)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, action: str, params: Mapping[str, Any]) -> Any:
        ...


def build_query(config: WebfleetConfig, action: str, params: Mapping[str, Any]) -> dict[str, str]:
    """Merge action parameters with the account-wide query fields.

    ``None`` values are dropped; everything else is stringified.
    """
    merged: dict[str, Any] = {
        **params,
        "action": action,
        "account": config.account,
        "apikey": config.api_key or None,
        "outputformat": "json",
        "lang": config.language,
        "useISO8601": "true",
    }
    return {key: str(value) for key, value in merged.items() if value is not None}


def parse_response_text(action: str, text: str) -> Any:
    """Decode a response body.

    Webfleet answers "no data" in several ways (empty body, an XML
    "document is empty" notice, ``[]``); all of them decode to ``[]``.
    """
    stripped = text.strip()
    if not stripped or EMPTY_DOCUMENT_MARKER in stripped or stripped == "[]":
        return []

    try:
        return json.loads(stripped)
    except json.JSONDecodeError as exc:
        match = _TEXT_ERROR_RE.match(stripped)
        if match:
            raise WebfleetApiError(
                f"{action} failed: code={match.group(1)} message={match.group(2).strip()}",
                code=match.group(1),
                action=action,
            ) from exc
        raise WebfleetTransportError(
            f"Invalid JSON from {action}: {stripped[:200]}",
            action=action,
        ) from exc


class HttpTransport:
    """HTTP transport carrying account credentials on every request."""

    def __init__(
        self,
        config: WebfleetConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session

    def _auth(self) -> aiohttp.BasicAuth:
        if not self._config.username or not self._config.password:
            raise WebfleetConfigError("Username and password are required for authentication.")
        return aiohttp.BasicAuth(self._config.username, self._config.password)

    async def get_json(self, action: str, params: Mapping[str, Any]) -> Any:
        """Run one extern action and return the decoded JSON body.

        Raises
        ------
        WebfleetAuthenticationError
            The server answered HTTP 401.
        WebfleetTransportError
            Network failure, non-200 status or an undecodable body.
        WebfleetApiError
            The body is a plain-text ``<code>,<message>`` error.
        """
        auth = self._auth()
        query = build_query(self._config, action, params)

        _logger.debug("GET %s params=%s", self._config.base_url, redact_query(query))

        try:
            async with self._http.get(self._config.base_url, params=query, auth=auth) as resp:
                text = await resp.text()
                if resp.status == 401:
                    raise WebfleetAuthenticationError(
                        "Authentication failed. Please check your username and password.",
                        code="401",
                        action=action,
                    )
                if resp.status != 200:
                    message = resp.headers.get(ERROR_MESSAGE_HEADER) or text[:200]
                    raise WebfleetTransportError(
                        f"HTTP {resp.status} from {action}: {message}",
                        status_code=resp.status,
                        action=action,
                    )
        except WebfleetError:
            raise
        except aiohttp.ClientError as exc:
            raise WebfleetTransportError(
                f"Request to {action} failed: {exc}",
                action=action,
            ) from exc

        return parse_response_text(action, text)
