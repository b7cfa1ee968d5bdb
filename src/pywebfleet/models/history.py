"""Reconciled history models."""

from __future__ import annotations

from dataclasses import dataclass

from pywebfleet.models._base import WebfleetModel
from pywebfleet.models.readings import LocationSample, TemperatureReading


@dataclass(slots=True)
class Snapshot:
    """Everything observed at one exact timestamp.

    Lives only for the duration of one reconciliation call. Sensor maps
    are ``None`` until the first reading for that quantity lands.
    """

    timestamp: int
    temperatures: dict[int, TemperatureReading] | None = None
    door_status: dict[int, int] | None = None
    location: LocationSample | None = None


class HistoricalDataPoint(WebfleetModel):
    """One point of the reconciled series handed to charts and reports.

    Every field carries the most recent known value at ``timestamp``,
    not only what was observed exactly then.

    Parameters
    ----------
    timestamp : int
        Epoch milliseconds.
    temperatures : dict or None
        Sensor id → latest temperature reading, in ascending id order.
    door_status : dict or None
        Sensor id → ``1`` (open) or ``0`` (closed). ``None`` until the
        first door reading.
    location : LocationSample or None
        Latest known position.
    synthetic : bool
        ``True`` for a gap-boundary point inserted at ``next - 1`` to
        hold the previous state up to the next real point.
    """

    timestamp: int
    temperatures: dict[int, TemperatureReading] | None = None
    door_status: dict[int, int] | None = None
    location: LocationSample | None = None
    synthetic: bool = False
