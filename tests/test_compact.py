from __future__ import annotations

import random

from pywebfleet.models.history import Snapshot
from pywebfleet.models.readings import LocationSample, TemperatureReading
from pywebfleet.state.compact import CarryState, compact_snapshots, sensor_ids, step


def _reading(sensor_id: int, value: float) -> TemperatureReading:
    return TemperatureReading(value=value, sensor_name=f"Sensor {sensor_id}", sensor_id=sensor_id)


def _door(ts: int, **states: int) -> Snapshot:
    return Snapshot(timestamp=ts, door_status={int(k[1:]): v for k, v in states.items()})


def _real(points: list) -> list:
    return [p for p in points if not p.synthetic]


def test_unchanged_door_state_is_not_emitted() -> None:
    snapshots = [_door(100, s1=1), _door(200, s1=1), _door(500, s1=0)]

    points = compact_snapshots(snapshots)

    assert [p.timestamp for p in _real(points)] == [100, 500]
    assert [p.door_status for p in _real(points)] == [{1: 1}, {1: 0}]


def test_gap_boundary_point_repeats_previous_state() -> None:
    snapshots = [
        Snapshot(timestamp=1000, temperatures={1: _reading(1, 5.0)}),
        Snapshot(timestamp=5000, temperatures={1: _reading(1, 7.0)}),
    ]

    points = compact_snapshots(snapshots)

    assert [(p.timestamp, p.synthetic) for p in points] == [(1000, False), (4999, True), (5000, False)]
    assert points[1].temperatures == points[0].temperatures
    assert points[1].temperatures is not None
    assert points[1].temperatures[1].value == 5.0
    assert points[2].temperatures is not None
    assert points[2].temperatures[1].value == 7.0


def test_adjacent_points_need_no_boundary() -> None:
    snapshots = [
        Snapshot(timestamp=1000, temperatures={1: _reading(1, 5.0)}),
        Snapshot(timestamp=1001, temperatures={1: _reading(1, 6.0)}),
    ]

    points = compact_snapshots(snapshots)

    assert [p.timestamp for p in points] == [1000, 1001]
    assert not any(p.synthetic for p in points)


def test_configurable_gap_threshold() -> None:
    snapshots = [
        Snapshot(timestamp=0, temperatures={1: _reading(1, 1.0)}),
        Snapshot(timestamp=60_000, temperatures={1: _reading(1, 2.0)}),
        Snapshot(timestamp=600_000, temperatures={1: _reading(1, 3.0)}),
    ]

    points = compact_snapshots(snapshots, gap_threshold_ms=5 * 60_000)

    assert [(p.timestamp, p.synthetic) for p in points] == [
        (0, False),
        (60_000, False),
        (599_999, True),
        (600_000, False),
    ]


def test_values_carry_forward_across_quantities() -> None:
    location = LocationSample(lat=52.0, lng=4.0, address="Depot")
    snapshots = [
        Snapshot(timestamp=1, temperatures={1: _reading(1, 5.0), 2: _reading(2, -18.0)}),
        Snapshot(timestamp=2, door_status={1: 1}),
        Snapshot(timestamp=3, location=location),
        Snapshot(timestamp=4, temperatures={2: _reading(2, -17.5)}),
    ]

    points = compact_snapshots(snapshots)

    last = points[-1]
    assert last.timestamp == 4
    assert last.temperatures is not None
    assert {k: v.value for k, v in last.temperatures.items()} == {1: 5.0, 2: -17.5}
    assert last.door_status == {1: 1}
    assert last.location == location


def test_door_status_is_none_until_first_door_reading() -> None:
    snapshots = [
        Snapshot(timestamp=1, temperatures={1: _reading(1, 5.0)}),
        Snapshot(timestamp=2, door_status={1: 0}),
    ]

    points = compact_snapshots(snapshots)

    assert points[0].door_status is None
    assert points[-1].door_status == {1: 0}


def test_new_door_sensor_counts_as_change() -> None:
    snapshots = [_door(1, s1=0), _door(2, s1=0, s2=0)]

    points = compact_snapshots(snapshots)

    assert [p.door_status for p in points] == [{1: 0}, {1: 0, 2: 0}]


def test_location_only_update_is_emitted_by_default() -> None:
    snapshots = [
        Snapshot(timestamp=1, temperatures={1: _reading(1, 5.0)}),
        Snapshot(timestamp=2, location=LocationSample(lat=1.0, lng=2.0)),
    ]

    points = compact_snapshots(snapshots)

    assert [p.timestamp for p in points] == [1, 2]
    assert points[1].temperatures == points[0].temperatures


def test_location_only_update_folds_into_next_point_when_not_an_event() -> None:
    location = LocationSample(lat=1.0, lng=2.0, address="Yard")
    snapshots = [
        Snapshot(timestamp=1, temperatures={1: _reading(1, 5.0)}),
        Snapshot(timestamp=2, location=location),
        Snapshot(timestamp=3, temperatures={1: _reading(1, 6.0)}),
    ]

    points = compact_snapshots(snapshots, location_triggers_event=False)

    assert [p.timestamp for p in points] == [1, 2, 3]
    assert points[1].synthetic
    assert points[1].location == location
    assert points[1].temperatures == points[0].temperatures
    assert points[2].location == location


def test_first_snapshot_is_always_emitted() -> None:
    snapshots = [Snapshot(timestamp=10, location=LocationSample(lat=1.0, lng=1.0))]

    points = compact_snapshots(snapshots, location_triggers_event=False)

    assert [p.timestamp for p in points] == [10]


def test_step_from_initial_state() -> None:
    initial = CarryState(door_status={1: 1}, last_emitted=50)

    state, points = step(initial, _door(51, s1=1))
    assert points == []
    assert state is initial

    state, points = step(state, _door(60, s1=0))
    assert [(p.timestamp, p.synthetic, p.door_status) for p in points] == [
        (59, True, {1: 1}),
        (60, False, {1: 0}),
    ]
    assert state.last_emitted == 60


def test_timestamps_strictly_increase_on_random_input() -> None:
    rng = random.Random(1234)
    timestamps = sorted(rng.sample(range(1, 100_000), 400))
    snapshots: list[Snapshot] = []
    for ts in timestamps:
        kind = rng.choice(("temperature", "door", "location"))
        if kind == "temperature":
            sensor = rng.randint(1, 3)
            snapshots.append(Snapshot(timestamp=ts, temperatures={sensor: _reading(sensor, rng.uniform(-20, 8))}))
        elif kind == "door":
            snapshots.append(Snapshot(timestamp=ts, door_status={rng.randint(1, 2): rng.randint(0, 1)}))
        else:
            snapshots.append(Snapshot(timestamp=ts, location=LocationSample(lat=rng.random(), lng=rng.random())))

    for policy in (True, False):
        points = compact_snapshots(snapshots, location_triggers_event=policy)
        stamps = [p.timestamp for p in points]
        assert all(a < b for a, b in zip(stamps, stamps[1:]))


def test_empty_sequence() -> None:
    assert compact_snapshots([]) == []


def test_sensor_ids_collects_distinct_ids() -> None:
    points = compact_snapshots(
        [
            Snapshot(timestamp=1, temperatures={3: _reading(3, 1.0)}, door_status={2: 0}),
            Snapshot(timestamp=2, temperatures={1: _reading(1, 1.0)}),
        ]
    )

    ids = sensor_ids(points)

    assert ids.temperature == [1, 3]
    assert ids.door == [2]
