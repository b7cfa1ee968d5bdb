from __future__ import annotations

import asyncio

import pytest

from pywebfleet._constants import DAY_MS
from pywebfleet.exceptions import WebfleetAuthenticationError, WebfleetConfigError, WebfleetTransportError
from pywebfleet.ingestion.chunks import fetch_chunked, split_range


def test_split_range_clips_final_chunk() -> None:
    assert split_range(0, 20 * DAY_MS, 7 * DAY_MS) == [
        (0, 7 * DAY_MS),
        (7 * DAY_MS, 14 * DAY_MS),
        (14 * DAY_MS, 20 * DAY_MS),
    ]


def test_split_range_exact_multiple_has_no_empty_tail() -> None:
    assert split_range(100, 300, 100) == [(100, 200), (200, 300)]


def test_split_range_empty_window() -> None:
    assert split_range(500, 500, 100) == []


def test_split_range_rejects_non_positive_bound() -> None:
    with pytest.raises(WebfleetConfigError):
        split_range(0, 10, 0)


@pytest.mark.asyncio
async def test_fetch_chunked_requests_chunks_in_order_and_concatenates() -> None:
    calls: list[tuple[int, int]] = []

    async def _fetch(start_ms: int, end_ms: int) -> list[str]:
        calls.append((start_ms, end_ms))
        return [f"{start_ms}-a", f"{start_ms}-b"]

    records = await fetch_chunked(_fetch, 0, 20 * DAY_MS, 7 * DAY_MS, label="temperature")

    assert calls == [(0, 7 * DAY_MS), (7 * DAY_MS, 14 * DAY_MS), (14 * DAY_MS, 20 * DAY_MS)]
    assert records == [
        "0-a",
        "0-b",
        f"{7 * DAY_MS}-a",
        f"{7 * DAY_MS}-b",
        f"{14 * DAY_MS}-a",
        f"{14 * DAY_MS}-b",
    ]


@pytest.mark.asyncio
async def test_fetch_chunked_runs_chunks_sequentially() -> None:
    in_flight = 0
    peak = 0

    async def _fetch(start_ms: int, end_ms: int) -> list[int]:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        try:
            await asyncio.sleep(0)
            return [start_ms]
        finally:
            in_flight -= 1

    await fetch_chunked(_fetch, 0, 10, 2)

    assert peak == 1


@pytest.mark.asyncio
async def test_failing_chunk_is_skipped_and_remaining_chunks_still_fetched() -> None:
    calls: list[int] = []

    async def _fetch(start_ms: int, end_ms: int) -> list[int]:
        calls.append(start_ms)
        if start_ms == 7 * DAY_MS:
            raise WebfleetTransportError("HTTP 500 from getHistoricalTemperatureData: boom", status_code=500)
        return [start_ms]

    records = await fetch_chunked(_fetch, 0, 20 * DAY_MS, 7 * DAY_MS)

    assert calls == [0, 7 * DAY_MS, 14 * DAY_MS]
    assert records == [0, 14 * DAY_MS]


@pytest.mark.asyncio
async def test_authentication_failure_aborts_the_stream() -> None:
    calls: list[int] = []

    async def _fetch(start_ms: int, end_ms: int) -> list[int]:
        calls.append(start_ms)
        raise WebfleetAuthenticationError("Authentication failed.", code="401")

    with pytest.raises(WebfleetAuthenticationError):
        await fetch_chunked(_fetch, 0, 30, 10)

    assert calls == [0]


@pytest.mark.asyncio
async def test_empty_window_makes_no_calls() -> None:
    async def _fetch(start_ms: int, end_ms: int) -> list[int]:
        raise AssertionError("no chunk expected")

    assert await fetch_chunked(_fetch, 1000, 1000, 10) == []


@pytest.mark.asyncio
async def test_configuration_error_aborts_the_stream() -> None:
    calls: list[int] = []

    async def _fetch(start_ms: int, end_ms: int) -> list[int]:
        calls.append(start_ms)
        raise WebfleetConfigError("Username and password are required for authentication.")

    with pytest.raises(WebfleetConfigError):
        await fetch_chunked(_fetch, 0, 30, 10)

    assert calls == [0]
