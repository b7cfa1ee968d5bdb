"""Chunked range fetching.

Webfleet caps the time window a single history call may span, and the
cap differs per stream. A long window is therefore split into
consecutive, non-overlapping ``[start, end)`` chunks that are requested
one after the other. A failing chunk contributes nothing; it neither
aborts the stream nor is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from pywebfleet.exceptions import WebfleetAuthenticationError, WebfleetConfigError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

ChunkFetcher = Callable[[int, int], Awaitable[Sequence[T]]]
"""Coroutine function fetching the records of one ``[start_ms, end_ms)`` chunk."""


def split_range(start_ms: int, end_ms: int, max_chunk_ms: int) -> list[tuple[int, int]]:
    """Split ``[start_ms, end_ms)`` into chunks of at most *max_chunk_ms*.

    The final chunk is clipped to *end_ms*. An empty window yields no chunks.

    Raises
    ------
    WebfleetConfigError
        If *max_chunk_ms* is not positive.
    """
    if max_chunk_ms <= 0:
        raise WebfleetConfigError(f"max chunk duration must be positive, got {max_chunk_ms}")

    chunks: list[tuple[int, int]] = []
    cursor = start_ms
    while cursor < end_ms:
        chunk_end = min(cursor + max_chunk_ms, end_ms)
        chunks.append((cursor, chunk_end))
        cursor = chunk_end
    return chunks


async def fetch_chunked(
    fetch_chunk: ChunkFetcher[T],
    start_ms: int,
    end_ms: int,
    max_chunk_ms: int,
    *,
    label: str = "stream",
) -> list[T]:
    """Fetch ``[start_ms, end_ms)`` chunk by chunk and concatenate the results.

    Chunk N+1 is requested only after chunk N completed. Authentication
    failures propagate; any other chunk failure is logged and skipped.
    """
    chunks = split_range(start_ms, end_ms, max_chunk_ms)
    results: list[T] = []
    for chunk_start, chunk_end in chunks:
        try:
            records = await fetch_chunk(chunk_start, chunk_end)
        except (WebfleetAuthenticationError, WebfleetConfigError):
            raise
        except Exception:
            _logger.debug(
                "%s chunk [%d, %d) failed; continuing without it",
                label,
                chunk_start,
                chunk_end,
                exc_info=True,
            )
            continue
        results.extend(records)

    _logger.debug("%s: %d record(s) from %d chunk(s)", label, len(results), len(chunks))
    return results
