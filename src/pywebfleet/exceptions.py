"""Custom exception hierarchy for pywebfleet."""

from __future__ import annotations


class WebfleetError(Exception):
    """Base exception for all pywebfleet errors."""


class WebfleetConfigError(WebfleetError):
    """Invalid or missing configuration.

    Raised before any network call is made, e.g. when credentials are
    missing or a history query names neither a range pattern nor an
    explicit time window.
    """


class WebfleetTransportError(WebfleetError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        action: str = "",
    ) -> None:
        self.status_code = status_code
        self.action = action
        super().__init__(message)


class WebfleetApiError(WebfleetError):
    """Webfleet reported an application-level error for an action."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        action: str = "",
    ) -> None:
        self.code = code
        self.action = action
        super().__init__(message)


class WebfleetAuthenticationError(WebfleetApiError):
    """Credentials were rejected (HTTP 401).

    Never retried and never swallowed by the per-stream error handling;
    it is fatal to the whole call.
    """
