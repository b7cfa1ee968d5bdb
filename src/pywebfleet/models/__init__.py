"""Data models for Webfleet records and reconciled history."""

from pywebfleet.models._base import EpochMillis, WebfleetModel, WebfleetRecord
from pywebfleet.models.history import HistoricalDataPoint, Snapshot
from pywebfleet.models.readings import (
    DoorReading,
    DoorRecord,
    DoorState,
    LocationSample,
    SensorRecord,
    TemperatureReading,
    TemperatureRecord,
    TrackRecord,
)
from pywebfleet.models.requests import HistoryRequest, ObjectRequest
from pywebfleet.models.vehicle import ObjectRecord, ObjectType, Vehicle

__all__ = [
    "DoorReading",
    "DoorRecord",
    "DoorState",
    "EpochMillis",
    "HistoricalDataPoint",
    "HistoryRequest",
    "LocationSample",
    "ObjectRecord",
    "ObjectRequest",
    "ObjectType",
    "SensorRecord",
    "Snapshot",
    "TemperatureReading",
    "TemperatureRecord",
    "TrackRecord",
    "Vehicle",
    "WebfleetModel",
    "WebfleetRecord",
]
