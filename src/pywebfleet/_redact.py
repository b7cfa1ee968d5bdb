"""Helpers for safe debug logging.

Every Webfleet request carries the API key as a query parameter, and
callers may add other secrets to the action parameters. Such fields are
masked before the query reaches DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping

_SENSITIVE_PARAMS: frozenset[str] = frozenset(
    {
        "apikey",
        "api_key",
        "password",
        "token",
    }
)

_REDACTED = "<redacted>"


def redact_query(query: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *query* with secret parameters masked.

    Parameter names are matched case-insensitively.
    """
    return {key: _REDACTED if key.lower() in _SENSITIVE_PARAMS else value for key, value in query.items()}
