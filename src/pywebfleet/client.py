"""High-level async client for the Webfleet extern API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pywebfleet._api.login import verify_credentials
from pywebfleet._api.objects import fetch_vehicles
from pywebfleet._transport import HttpTransport
from pywebfleet.config import WebfleetConfig
from pywebfleet.exceptions import WebfleetConfigError, WebfleetError
from pywebfleet.ingestion.history import fetch_history
from pywebfleet.models.history import HistoricalDataPoint
from pywebfleet.models.requests import HistoryRequest
from pywebfleet.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)


class WebfleetClient:
    """Async client for cold-chain telemetry from Webfleet.

    Usage::

        async with WebfleetClient(config) as client:
            await client.login()
            vehicles = await client.get_vehicles()
            history = await client.get_historical_data(vehicles[0].uid, range_pattern="d0")
    """

    def __init__(
        self,
        config: WebfleetConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None
        self._authenticated = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WebfleetClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._authenticated = False

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    async def login(self) -> None:
        """Check the configured credentials against Webfleet.

        Raises :class:`~pywebfleet.exceptions.WebfleetAuthenticationError`
        when they are rejected.
        """
        self._require_credentials()
        transport = self._require_transport()
        await verify_credentials(transport)
        self._authenticated = True

    async def logout(self) -> None:
        """Forget the login state. Webfleet keeps no server-side session."""
        self._authenticated = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise WebfleetError("Client not initialized. Use 'async with WebfleetClient(...) as client:'")
        return self._transport

    def _require_credentials(self) -> None:
        if not self._config.username or not self._config.password:
            raise WebfleetConfigError("Username and password are required for authentication.")

    def _require_api_key(self, purpose: str) -> None:
        if not self._config.api_key:
            raise WebfleetConfigError(f"API key is required to fetch {purpose}.")

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_vehicles(self) -> list[Vehicle]:
        """Fetch all vehicles and assets with their current status."""
        self._require_credentials()
        self._require_api_key("vehicle data")
        transport = self._require_transport()
        return await fetch_vehicles(transport)

    async def get_historical_data(
        self,
        objectuid: str,
        *,
        range_pattern: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> list[HistoricalDataPoint]:
        """Fetch the reconciled cold-chain history of one object.

        Parameters
        ----------
        objectuid : str
            Webfleet object id.
        range_pattern : str or None
            Opaque relative range token (e.g. ``"d0"`` for today),
            forwarded verbatim in one request per stream.
        start_time, end_time : int or None
            Explicit ``[start_time, end_time)`` window in epoch
            milliseconds, fetched in bounded chunks per stream.

        Returns
        -------
        list of HistoricalDataPoint
            Points in strictly ascending timestamp order. Empty when no
            stream returned data.

        Raises
        ------
        WebfleetConfigError
            Neither (or both) range modes given, or missing credentials
            or API key; raised before any request is sent.
        WebfleetAuthenticationError
            Credentials rejected by the server.
        """
        try:
            request = HistoryRequest(
                objectuid=objectuid,
                range_pattern=range_pattern,
                start_time=start_time,
                end_time=end_time,
            )
        except ValidationError as exc:
            raise WebfleetConfigError(f"Invalid history query: {exc}") from exc

        self._require_credentials()
        self._require_api_key("historical data")
        transport = self._require_transport()
        points = await fetch_history(self._config, transport, request)
        _logger.debug("History objectuid=%s: %d point(s)", request.objectuid, len(points))
        return points
