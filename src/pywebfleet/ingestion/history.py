"""History ingestion.

This module owns the fetch → normalize → merge → compact pipeline for one
object's cold-chain history. The underlying actions live in
:mod:`pywebfleet._api.history`; merging and compaction live in
:mod:`pywebfleet.state`.

The three streams are fetched concurrently. A stream that fails (for any
reason other than rejected credentials) contributes an empty list, so
partial telemetry still renders.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Protocol, TypeVar

from pywebfleet._api.history import fetch_door_records, fetch_temperature_records, fetch_track_records
from pywebfleet._transport import Transport
from pywebfleet.config import WebfleetConfig
from pywebfleet.exceptions import WebfleetAuthenticationError, WebfleetConfigError
from pywebfleet.ingestion.chunks import fetch_chunked
from pywebfleet.ingestion.sensors import assign_sensor_ids
from pywebfleet.models.history import HistoricalDataPoint
from pywebfleet.models.requests import HistoryRequest
from pywebfleet.state.compact import compact_snapshots
from pywebfleet.state.merge import merge_streams

_logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class _StreamFetcher(Protocol[T_co]):
    def __call__(
        self,
        transport: Transport,
        objectuid: str,
        *,
        range_pattern: str | None = None,
        start_ms: int | None = None,
        end_ms: int | None = None,
    ) -> Awaitable[Sequence[T_co]]: ...


async def fetch_stream(
    fetcher: _StreamFetcher[T],
    transport: Transport,
    request: HistoryRequest,
    max_chunk_ms: int,
    *,
    label: str,
) -> list[T]:
    """Fetch one stream for *request*, chunking explicit windows.

    Returns ``[]`` when the stream fails; authentication and configuration
    errors propagate.
    """
    window = request.window
    try:
        if window is None:
            return list(await fetcher(transport, request.objectuid, range_pattern=request.range_pattern))

        def _chunk(chunk_start: int, chunk_end: int) -> Awaitable[Sequence[T]]:
            return fetcher(transport, request.objectuid, start_ms=chunk_start, end_ms=chunk_end)

        start_ms, end_ms = window
        return await fetch_chunked(_chunk, start_ms, end_ms, max_chunk_ms, label=label)
    except (WebfleetAuthenticationError, WebfleetConfigError):
        raise
    except Exception:
        _logger.debug("%s stream failed for objectuid=%s", label, request.objectuid, exc_info=True)
        return []


async def fetch_history(
    config: WebfleetConfig,
    transport: Transport,
    request: HistoryRequest,
) -> list[HistoricalDataPoint]:
    """Fetch and reconcile the temperature, door and track streams of one object."""
    temperatures, doors, track = await asyncio.gather(
        fetch_stream(fetch_temperature_records, transport, request, config.temperature_chunk_ms, label="temperature"),
        fetch_stream(fetch_door_records, transport, request, config.door_chunk_ms, label="door"),
        fetch_stream(fetch_track_records, transport, request, config.track_chunk_ms, label="track"),
    )
    _logger.debug(
        "History objectuid=%s: temperature=%d door=%d track=%d record(s)",
        request.objectuid,
        len(temperatures),
        len(doors),
        len(track),
    )

    snapshots = merge_streams(
        temperatures=assign_sensor_ids(temperatures),
        doors=assign_sensor_ids(doors),
        track=track,
    )
    return compact_snapshots(
        snapshots,
        gap_threshold_ms=config.gap_threshold_ms,
        location_triggers_event=config.location_triggers_event,
    )
