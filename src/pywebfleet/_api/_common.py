"""Shared helpers for Webfleet endpoint modules.

This module centralizes the most repeated patterns:
- building the temporal query parameters
- running an action and mapping JSON error objects
- reducing a response to its list of record dicts

It is internal to pywebfleet and may change at any time.
"""

from __future__ import annotations

from typing import Any

from pywebfleet._transport import Transport
from pywebfleet.exceptions import WebfleetApiError
from pywebfleet.ingestion.normalize import format_timestamp_ms


def range_params(
    *,
    range_pattern: str | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
) -> dict[str, str]:
    """Build the temporal parameters of a history action.

    A range pattern is forwarded verbatim; an explicit window is sent as
    ISO-8601 UTC ``rangefrom_string``/``rangeto_string``.
    """
    if range_pattern is not None:
        return {"range_pattern": range_pattern}
    params: dict[str, str] = {}
    if start_ms is not None:
        params["rangefrom_string"] = format_timestamp_ms(start_ms)
    if end_ms is not None:
        params["rangeto_string"] = format_timestamp_ms(end_ms)
    return params


def _raise_for_error(action: str, decoded: Any) -> None:
    if not isinstance(decoded, dict):
        return
    code = decoded.get("errorCode")
    if code is None:
        return
    message = decoded.get("errorMsg") or decoded.get("errorMessage") or ""
    raise WebfleetApiError(
        f"{action} failed: code={code} message={message}",
        code=str(code),
        action=action,
    )


async def fetch_records(
    transport: Transport,
    action: str,
    params: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Run *action* and return its record dicts.

    Non-list payloads and non-dict items are discarded.
    """
    decoded = await transport.get_json(action, params or {})
    _raise_for_error(action, decoded)
    items = decoded if isinstance(decoded, list) else []
    return [item for item in items if isinstance(item, dict)]
