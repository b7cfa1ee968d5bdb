"""State/reconciliation layer.

This package is the single place where the normalized telemetry streams
are merged into snapshots and compacted into the carry-forward history
series. Nothing here performs I/O or keeps state between calls.
"""

from pywebfleet.state.compact import CarryState, SensorIds, compact_snapshots, sensor_ids, step
from pywebfleet.state.merge import merge_streams

__all__ = [
    "CarryState",
    "SensorIds",
    "compact_snapshots",
    "merge_streams",
    "sensor_ids",
    "step",
]
