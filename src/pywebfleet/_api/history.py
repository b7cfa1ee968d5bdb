"""Historical stream endpoints.

Endpoints:
  - getHistoricalTemperatureData
  - getHistoricalRefrigeratedDoorStatusData
  - showTracks

Each call covers either one range pattern or one explicit window; the
chunking of long windows lives in :mod:`pywebfleet.ingestion.chunks`.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from pywebfleet._api._common import fetch_records, range_params
from pywebfleet._constants import HISTORICAL_DOOR_STATUS_ACTION, HISTORICAL_TEMPERATURE_ACTION, TRACK_ACTION
from pywebfleet._transport import Transport
from pywebfleet.models._base import WebfleetRecord
from pywebfleet.models.readings import DoorRecord, TemperatureRecord, TrackRecord

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WebfleetRecord)


async def _fetch_stream(
    action: str,
    model: type[M],
    transport: Transport,
    objectuid: str,
    *,
    range_pattern: str | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
) -> list[M]:
    params = {
        "objectuid": objectuid,
        **range_params(range_pattern=range_pattern, start_ms=start_ms, end_ms=end_ms),
    }
    items = await fetch_records(transport, action, params)
    _logger.debug("%s objectuid=%s: %d record(s)", action, objectuid, len(items))
    return [model.model_validate(item) for item in items]


async def fetch_temperature_records(
    transport: Transport,
    objectuid: str,
    *,
    range_pattern: str | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
) -> list[TemperatureRecord]:
    """Fetch historical temperature records for one object."""
    return await _fetch_stream(
        HISTORICAL_TEMPERATURE_ACTION,
        TemperatureRecord,
        transport,
        objectuid,
        range_pattern=range_pattern,
        start_ms=start_ms,
        end_ms=end_ms,
    )


async def fetch_door_records(
    transport: Transport,
    objectuid: str,
    *,
    range_pattern: str | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
) -> list[DoorRecord]:
    """Fetch historical refrigerated-door records for one object."""
    return await _fetch_stream(
        HISTORICAL_DOOR_STATUS_ACTION,
        DoorRecord,
        transport,
        objectuid,
        range_pattern=range_pattern,
        start_ms=start_ms,
        end_ms=end_ms,
    )


async def fetch_track_records(
    transport: Transport,
    objectuid: str,
    *,
    range_pattern: str | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
) -> list[TrackRecord]:
    """Fetch the position track for one object."""
    return await _fetch_stream(
        TRACK_ACTION,
        TrackRecord,
        transport,
        objectuid,
        range_pattern=range_pattern,
        start_ms=start_ms,
        end_ms=end_ms,
    )
