"""Stream merging.

Reconciles the temperature, door-status and track streams into one
chronological list of :class:`~pywebfleet.models.history.Snapshot`,
keyed by the union of all timestamps seen in any stream.

Write rules per timestamp:

* temperature: last write wins for a repeated sensor id
* door status: last write wins, stored as ``1`` (open) / ``0`` (closed)
* location: first write wins
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pywebfleet.models.history import Snapshot
from pywebfleet.models.readings import DoorRecord, TemperatureRecord, TrackRecord
from pywebfleet.state.policy import ordered

_logger = logging.getLogger(__name__)


def merge_streams(
    temperatures: Iterable[TemperatureRecord] = (),
    doors: Iterable[DoorRecord] = (),
    track: Iterable[TrackRecord] = (),
) -> list[Snapshot]:
    """Merge normalized streams into snapshots sorted by ascending timestamp.

    Records that cannot be placed (no timestamp, no sensor id, no
    recognized value, no coordinate) are skipped.
    """
    snapshots: dict[int, Snapshot] = {}

    def _snapshot(timestamp: int) -> Snapshot:
        snapshot = snapshots.get(timestamp)
        if snapshot is None:
            snapshot = Snapshot(timestamp=timestamp)
            snapshots[timestamp] = snapshot
        return snapshot

    for temperature in temperatures:
        reading = temperature.to_reading()
        if temperature.timestamp is None or reading is None:
            continue
        snapshot = _snapshot(temperature.timestamp)
        if snapshot.temperatures is None:
            snapshot.temperatures = {}
        snapshot.temperatures[reading.sensor_id] = reading

    for door in doors:
        door_reading = door.to_reading()
        if door.timestamp is None or door_reading is None:
            continue
        snapshot = _snapshot(door.timestamp)
        if snapshot.door_status is None:
            snapshot.door_status = {}
        snapshot.door_status[door_reading.sensor_id] = door_reading.state.bit

    for position in track:
        location = position.to_location()
        if position.timestamp is None or location is None:
            continue
        snapshot = _snapshot(position.timestamp)
        if snapshot.location is None:
            snapshot.location = location

    result: list[Snapshot] = []
    for timestamp in sorted(snapshots):
        snapshot = snapshots[timestamp]
        if snapshot.temperatures is not None:
            snapshot.temperatures = ordered(snapshot.temperatures)
        if snapshot.door_status is not None:
            snapshot.door_status = ordered(snapshot.door_status)
        result.append(snapshot)

    _logger.debug("Merged streams into %d snapshot(s)", len(result))
    return result
