"""Normalization helpers.

Centralizes defensive parsing of loosely typed Webfleet record fields.
Every helper returns ``None`` instead of raising on unusable input.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pywebfleet._constants import MICRODEGREES_PER_DEGREE


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def parse_timestamp_ms(value: Any) -> int | None:
    """Convert a record timestamp to epoch milliseconds.

    Accepts ISO-8601 strings (what Webfleet sends with ``useISO8601``),
    ``datetime`` objects and numbers already in epoch milliseconds.
    Naive datetimes are taken as UTC. Non-positive results are treated
    as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, (int, float)):
        parsed = safe_int(value)
        return parsed if parsed is not None and parsed > 0 else None
    else:
        text = safe_str(value)
        if text is None:
            return None
        numeric = safe_int(text)
        if numeric is not None:
            return numeric if numeric > 0 else None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    ms = int(round(moment.timestamp() * 1000))
    return ms if ms > 0 else None


def format_timestamp_ms(value: int) -> str:
    """Render epoch milliseconds as an ISO-8601 UTC string for range parameters."""
    return datetime.fromtimestamp(value / 1000, tz=UTC).isoformat(timespec="seconds")


def parse_hex_id(value: Any) -> int | None:
    """Parse a hex-coded sensor identifier (``"1A"``, ``"0x1a"``)."""
    text = safe_str(value)
    if text is None:
        return None
    try:
        return int(text, 16)
    except ValueError:
        return None


def microdegrees_to_degrees(value: Any) -> float | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return parsed / MICRODEGREES_PER_DEGREE
