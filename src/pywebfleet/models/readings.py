"""Record schemas for the three telemetry streams and their typed readings.

Enum values and field aliases follow the Webfleet extern JSON output.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pywebfleet._constants import DEFAULT_ADDRESS
from pywebfleet.ingestion.normalize import microdegrees_to_degrees, safe_float, safe_int, safe_str
from pywebfleet.models._base import EpochMillis, WebfleetModel, WebfleetRecord

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class DoorState(StrEnum):
    """Refrigerated-door state token."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"

    @property
    def bit(self) -> int:
        """``1`` for open, ``0`` for closed (the charted encoding)."""
        return 1 if self is DoorState.OPEN else 0


# ------------------------------------------------------------------
# Typed readings
# ------------------------------------------------------------------


class TemperatureReading(WebfleetModel):
    """One temperature value from one sensor."""

    value: float
    """Temperature in °C."""
    sensor_name: str
    sensor_id: int


class DoorReading(WebfleetModel):
    """One door state from one sensor."""

    state: DoorState
    sensor_id: int


class LocationSample(WebfleetModel):
    """A position in degrees with its reverse-geocoded address.

    One coordinate may be ``None`` when the source only carried the other.
    """

    lat: float | None = None
    lng: float | None = None
    address: str = DEFAULT_ADDRESS


# ------------------------------------------------------------------
# Raw record schemas
# ------------------------------------------------------------------


class SensorRecord(WebfleetRecord):
    """Fields shared by temperature and door-status records.

    ``sensor_id`` is the explicit numeric identifier; ``sensor_code`` is
    the hex-coded form some devices send instead. Both may be absent
    (anonymous sensor).
    """

    objectuid: str | None = Field(default=None, validation_alias=AliasChoices("objectuid", "objectUid", "object_uid"))
    timestamp: EpochMillis = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "msgtime", "msg_time", "time"),
    )
    sensor_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("sensor_id", "sensorid", "sensorId", "sensor_number", "sensornumber"),
    )
    sensor_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sensor_code", "sensorcode", "sensorCode", "sensor_hex"),
    )
    sensor_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sensor_name", "sensorname", "sensorName", "name"),
    )

    @property
    def has_value(self) -> bool:
        """Whether the record carries its stream's quantity."""
        return True

    @property
    def is_anonymous(self) -> bool:
        return self.sensor_id is None and self.sensor_code is None

    @field_validator("objectuid", "sensor_code", "sensor_name", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("sensor_id", mode="before")
    @classmethod
    def _coerce_sensor_id(cls, value: Any) -> int | None:
        return safe_int(value)


class TemperatureRecord(SensorRecord):
    """A temperature record from ``get*TemperatureData``."""

    value: float | None = Field(default=None, validation_alias=AliasChoices("value", "temperature", "temp"))
    """Temperature in °C."""

    @property
    def has_value(self) -> bool:
        return self.value is not None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> float | None:
        return safe_float(value)

    def to_reading(self) -> TemperatureReading | None:
        if self.value is None or self.sensor_id is None:
            return None
        return TemperatureReading(
            value=self.value,
            sensor_name=self.sensor_name or f"Sensor {self.sensor_id}",
            sensor_id=self.sensor_id,
        )


class DoorRecord(SensorRecord):
    """A refrigerated-door record from ``get*RefrigeratedDoorStatusData``.

    ``state`` is ``None`` for tokens other than ``OPEN``/``CLOSED``.
    """

    state: DoorState | None = Field(default=None, validation_alias=AliasChoices("state", "status", "doorstatus"))

    @property
    def has_value(self) -> bool:
        return self.state is not None

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> DoorState | None:
        if isinstance(value, DoorState):
            return value
        token = safe_str(value)
        if token is None:
            return None
        try:
            return DoorState(token.upper())
        except ValueError:
            return None

    def to_reading(self) -> DoorReading | None:
        if self.state is None or self.sensor_id is None:
            return None
        return DoorReading(state=self.state, sensor_id=self.sensor_id)


class TrackRecord(WebfleetRecord):
    """A position record from ``showTracks``.

    Coordinates arrive in micro-degrees.
    """

    timestamp: EpochMillis = Field(
        default=None,
        validation_alias=AliasChoices("pos_time", "timestamp", "msgtime", "msg_time"),
    )
    latitude_mdeg: int | None = Field(default=None, validation_alias=AliasChoices("latitude_mdeg", "latitude"))
    longitude_mdeg: int | None = Field(default=None, validation_alias=AliasChoices("longitude_mdeg", "longitude"))
    address: str | None = Field(default=None, validation_alias=AliasChoices("postext", "address", "pos_text"))

    @field_validator("latitude_mdeg", "longitude_mdeg", mode="before")
    @classmethod
    def _coerce_coordinates(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("address", mode="before")
    @classmethod
    def _coerce_address(cls, value: Any) -> str | None:
        return safe_str(value)

    def to_location(self) -> LocationSample | None:
        """Return the sample in degrees, or ``None`` without any coordinate."""
        lat = microdegrees_to_degrees(self.latitude_mdeg)
        lng = microdegrees_to_degrees(self.longitude_mdeg)
        if lat is None and lng is None:
            return None
        return LocationSample(lat=lat, lng=lng, address=self.address or DEFAULT_ADDRESS)
