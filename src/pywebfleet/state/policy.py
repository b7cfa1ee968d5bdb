"""Deterministic emission policy for history compaction.

This module intentionally contains *no* payload parsing. The record
schemas and sensor-id assignment have already produced clean readings;
these helpers only decide how carried state combines and when a
snapshot becomes an emitted point.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

V = TypeVar("V")


def ordered(mapping: Mapping[int, V]) -> dict[int, V]:
    """Copy *mapping* with keys in ascending sensor-id order."""
    return {key: mapping[key] for key in sorted(mapping)}


def merge_sensor_maps(base: Mapping[int, V] | None, update: Mapping[int, V] | None) -> dict[int, V] | None:
    """Shallow-merge two sensor maps; *update* wins. ``None`` when both are empty."""
    merged: dict[int, V] = {}
    if base:
        merged.update(base)
    if update:
        merged.update(update)
    return ordered(merged) if merged else None


def door_changed(previous: Mapping[int, int] | None, combined: Mapping[int, int] | None) -> bool:
    """Compare key sets and values; "no door data" on both sides is unchanged."""
    return dict(previous or {}) != dict(combined or {})


def is_event(
    *,
    first: bool,
    has_temperature: bool,
    door_status_changed: bool,
    has_location: bool,
    location_triggers_event: bool,
) -> bool:
    """Whether a snapshot is emitted as a history point."""
    if first or has_temperature or door_status_changed:
        return True
    return has_location and location_triggers_event


def needs_boundary(previous_timestamp: int | None, timestamp: int, gap_threshold_ms: int) -> bool:
    """Whether a synthetic point must guard the gap before *timestamp*."""
    if previous_timestamp is None:
        return False
    return timestamp - previous_timestamp > gap_threshold_ms
