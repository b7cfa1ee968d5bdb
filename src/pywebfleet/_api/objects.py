"""Object list with current cold-chain status.

Endpoints:
  - showObjectReportExtern (objectclass=asset,vehicle)
  - getCurrentTemperatureData
  - getCurrentRefrigeratedDoorStatusData

The two status actions are optional: when either fails the objects are
still returned, just without that quantity.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any

from pywebfleet._api._common import fetch_records
from pywebfleet._constants import CURRENT_DOOR_STATUS_ACTION, CURRENT_TEMPERATURE_ACTION, OBJECT_REPORT_ACTION
from pywebfleet._transport import Transport
from pywebfleet.exceptions import WebfleetAuthenticationError, WebfleetConfigError
from pywebfleet.ingestion.sensors import assign_sensor_ids
from pywebfleet.models.readings import DoorRecord, DoorState, TemperatureReading, TemperatureRecord
from pywebfleet.models.vehicle import ObjectRecord, Vehicle
from pywebfleet.state.policy import ordered

_logger = logging.getLogger(__name__)


async def _fetch_optional(transport: Transport, action: str) -> list[dict[str, Any]]:
    try:
        return await fetch_records(transport, action)
    except (WebfleetAuthenticationError, WebfleetConfigError):
        raise
    except Exception:
        _logger.debug("%s failed; continuing without it", action, exc_info=True)
        return []


def _current_temperatures(items: list[dict[str, Any]]) -> dict[str, dict[int, TemperatureReading]]:
    by_object: dict[str, list[TemperatureRecord]] = defaultdict(list)
    for item in items:
        record = TemperatureRecord.model_validate(item)
        if record.objectuid:
            by_object[record.objectuid].append(record)

    result: dict[str, dict[int, TemperatureReading]] = {}
    for objectuid, records in by_object.items():
        readings: dict[int, TemperatureReading] = {}
        for record in assign_sensor_ids(records, current=True):
            reading = record.to_reading()
            if reading is not None:
                readings[reading.sensor_id] = reading
        if readings:
            result[objectuid] = ordered(readings)
    return result


def _current_doors(items: list[dict[str, Any]]) -> dict[str, dict[int, DoorState]]:
    by_object: dict[str, list[DoorRecord]] = defaultdict(list)
    for item in items:
        record = DoorRecord.model_validate(item)
        if record.objectuid:
            by_object[record.objectuid].append(record)

    result: dict[str, dict[int, DoorState]] = {}
    for objectuid, records in by_object.items():
        states: dict[int, DoorState] = {}
        for record in assign_sensor_ids(records, current=True):
            reading = record.to_reading()
            if reading is not None:
                states[reading.sensor_id] = reading.state
        if states:
            result[objectuid] = ordered(states)
    return result


async def fetch_vehicles(transport: Transport) -> list[Vehicle]:
    """Fetch all vehicles and assets with their current temperature, door and position."""
    object_items, temperature_items, door_items = await asyncio.gather(
        fetch_records(transport, OBJECT_REPORT_ACTION, {"objectclass": "asset,vehicle"}),
        _fetch_optional(transport, CURRENT_TEMPERATURE_ACTION),
        _fetch_optional(transport, CURRENT_DOOR_STATUS_ACTION),
    )

    temperatures = _current_temperatures(temperature_items)
    doors = _current_doors(door_items)

    vehicles: list[Vehicle] = []
    for item in object_items:
        record = ObjectRecord.model_validate(item)
        vehicles.append(
            Vehicle(
                uid=record.objectuid,
                name=record.objectname,
                type=record.object_type,
                temperatures=temperatures.get(record.objectuid),
                door_status=doors.get(record.objectuid),
                location=record.location(),
            )
        )
    return vehicles
