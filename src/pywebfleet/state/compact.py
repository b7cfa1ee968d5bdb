"""History compaction.

Folds the dense snapshot sequence into the sparse list of
:class:`~pywebfleet.models.history.HistoricalDataPoint` handed to charts
and reports. The fold carries the last known temperatures, door status
and location in an immutable :class:`CarryState`, so every emitted point
shows the most recent value of each quantity.

A snapshot is emitted when it is the first one, carries temperature
data, changes the door status, or (depending on policy) carries a new
position. Before an emitted point that is further than the gap threshold
from the previous one, a synthetic point at ``timestamp - 1`` repeats the
previous state so consumers do not interpolate across the gap.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import NamedTuple

from pywebfleet.models.history import HistoricalDataPoint, Snapshot
from pywebfleet.models.readings import LocationSample, TemperatureReading
from pywebfleet.state.policy import door_changed, is_event, merge_sensor_maps, needs_boundary


@dataclass(frozen=True, slots=True)
class CarryState:
    """Accumulator threaded through the compaction fold."""

    temperatures: dict[int, TemperatureReading] | None = None
    door_status: dict[int, int] | None = None
    location: LocationSample | None = None
    last_emitted: int | None = None

    def point(self, timestamp: int, *, synthetic: bool = False) -> HistoricalDataPoint:
        return HistoricalDataPoint(
            timestamp=timestamp,
            temperatures=self.temperatures,
            door_status=self.door_status,
            location=self.location,
            synthetic=synthetic,
        )


def step(
    state: CarryState,
    snapshot: Snapshot,
    *,
    gap_threshold_ms: int = 1,
    location_triggers_event: bool = True,
) -> tuple[CarryState, list[HistoricalDataPoint]]:
    """Fold one snapshot into *state*, returning the new state and emitted points."""
    has_temperature = bool(snapshot.temperatures)
    combined_door = merge_sensor_maps(state.door_status, snapshot.door_status)
    has_location = snapshot.location is not None

    emit = is_event(
        first=state.last_emitted is None,
        has_temperature=has_temperature,
        door_status_changed=door_changed(state.door_status, combined_door),
        has_location=has_location,
        location_triggers_event=location_triggers_event,
    )
    if not emit:
        # Not a point of its own, but later points must still show this position.
        if has_location:
            return replace(state, location=snapshot.location), []
        return state, []

    points: list[HistoricalDataPoint] = []
    if needs_boundary(state.last_emitted, snapshot.timestamp, gap_threshold_ms):
        points.append(state.point(snapshot.timestamp - 1, synthetic=True))

    temperatures = state.temperatures
    if has_temperature:
        temperatures = merge_sensor_maps(state.temperatures, snapshot.temperatures)

    next_state = CarryState(
        temperatures=temperatures,
        door_status=combined_door,
        location=snapshot.location if has_location else state.location,
        last_emitted=snapshot.timestamp,
    )
    points.append(next_state.point(snapshot.timestamp))
    return next_state, points


def compact_snapshots(
    snapshots: Iterable[Snapshot],
    *,
    initial: CarryState | None = None,
    gap_threshold_ms: int = 1,
    location_triggers_event: bool = True,
) -> list[HistoricalDataPoint]:
    """Compact ascending *snapshots* into carry-forward history points.

    A pure function of the sequence and the initial state; never raises
    on data, since absent quantities are represented as ``None``.
    """
    state = initial if initial is not None else CarryState()
    points: list[HistoricalDataPoint] = []
    for snapshot in snapshots:
        state, emitted = step(
            state,
            snapshot,
            gap_threshold_ms=gap_threshold_ms,
            location_triggers_event=location_triggers_event,
        )
        points.extend(emitted)
    return points


class SensorIds(NamedTuple):
    temperature: list[int]
    door: list[int]


def sensor_ids(points: Sequence[HistoricalDataPoint]) -> SensorIds:
    """Scan *points* for the distinct temperature and door sensor ids."""
    temperature: set[int] = set()
    door: set[int] = set()
    for point in points:
        if point.temperatures:
            temperature.update(point.temperatures)
        if point.door_status:
            door.update(point.door_status)
    return SensorIds(temperature=sorted(temperature), door=sorted(door))
