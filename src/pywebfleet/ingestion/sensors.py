"""Sensor identity assignment.

Webfleet devices identify their sensors inconsistently: some records
carry a numeric id, some a hex-coded one, some nothing at all. This
module maps one stream's records onto a numeric id space that is stable
for the duration of one fetch call.

Anonymous readings are numbered per timestamp: at each timestamp the
n-th anonymous reading (in source order) gets the n-th id of a pool that
starts right after the largest explicit id. The pool is as large as the
busiest timestamp, so a device reporting two anonymous sensors always maps
them to the same two ids.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import TypeVar

from pywebfleet.ingestion.normalize import parse_hex_id
from pywebfleet.models.readings import SensorRecord

_logger = logging.getLogger(__name__)

R = TypeVar("R", bound=SensorRecord)


def resolve_hex_id(record: R) -> R:
    """Fill ``sensor_id`` from ``sensor_code`` when only the hex form is present.

    A code that does not parse leaves the record unresolved.
    """
    if record.sensor_id is not None or record.sensor_code is None:
        return record
    parsed = parse_hex_id(record.sensor_code)
    if parsed is None:
        return record
    return record.model_copy(update={"sensor_id": parsed})


def assign_sensor_ids(records: Iterable[R], *, current: bool = False) -> list[R]:
    """Return the usable records of one stream, each with an integer ``sensor_id``.

    Records without the stream's quantity, without a timestamp or with an
    unparseable hex code are dropped. Input order is preserved. When no
    anonymous record remains the filtered records are returned as they are.

    With *current* set the records are one object's current status: the
    timestamp is optional and all anonymous readings form a single group,
    since each sensor reports its own message time.
    """
    retained: list[R] = []
    for record in records:
        record = resolve_hex_id(record)
        if not record.has_value:
            continue
        if not current and record.timestamp is None:
            continue
        if record.sensor_id is None and not record.is_anonymous:
            # Malformed hex id: can never key a sensor series.
            continue
        retained.append(record)

    explicit_ids: set[int] = set()
    anonymous_by_timestamp: dict[int | None, list[int]] = defaultdict(list)
    for index, record in enumerate(retained):
        if record.sensor_id is not None:
            explicit_ids.add(record.sensor_id)
        else:
            anonymous_by_timestamp[None if current else record.timestamp].append(index)

    pool_size = max((len(indices) for indices in anonymous_by_timestamp.values()), default=0)
    if pool_size == 0:
        return retained

    first_id = max(explicit_ids, default=0) + 1
    pool = range(first_id, first_id + pool_size)
    _logger.debug(
        "Assigning %d fabricated sensor id(s) %d..%d across %d timestamp(s)",
        pool_size,
        pool[0],
        pool[-1],
        len(anonymous_by_timestamp),
    )

    assigned = list(retained)
    for indices in anonymous_by_timestamp.values():
        for slot, index in enumerate(indices):
            assigned[index] = assigned[index].model_copy(update={"sensor_id": pool[slot]})
    return assigned
