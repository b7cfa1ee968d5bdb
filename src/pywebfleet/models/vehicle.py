"""Vehicle / asset models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pywebfleet._constants import DEFAULT_ADDRESS
from pywebfleet.ingestion.normalize import microdegrees_to_degrees, safe_int, safe_str
from pywebfleet.models._base import WebfleetModel, WebfleetRecord
from pywebfleet.models.readings import DoorState, LocationSample, TemperatureReading


class ObjectType(StrEnum):
    VEHICLE = "Vehicle"
    ASSET = "Asset"


class ObjectRecord(WebfleetRecord):
    """A row of ``showObjectReportExtern``."""

    objectuid: str = Field(default="", validation_alias=AliasChoices("objectuid", "objectUid"))
    objectname: str = Field(default="", validation_alias=AliasChoices("objectname", "objectName"))
    objectclass: str = Field(default="", validation_alias=AliasChoices("objectclass", "objectClass"))
    latitude_mdeg: int | None = Field(default=None, validation_alias=AliasChoices("latitude_mdeg", "latitude"))
    longitude_mdeg: int | None = Field(default=None, validation_alias=AliasChoices("longitude_mdeg", "longitude"))
    postext: str | None = None

    @field_validator("objectuid", "objectname", "objectclass", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("latitude_mdeg", "longitude_mdeg", mode="before")
    @classmethod
    def _coerce_coordinates(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("postext", mode="before")
    @classmethod
    def _coerce_postext(cls, value: Any) -> str | None:
        return safe_str(value)

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.ASSET if self.objectclass.lower() == "asset" else ObjectType.VEHICLE

    def location(self) -> LocationSample | None:
        """Current position; both coordinates are required here."""
        if self.latitude_mdeg is None or self.longitude_mdeg is None:
            return None
        return LocationSample(
            lat=microdegrees_to_degrees(self.latitude_mdeg),
            lng=microdegrees_to_degrees(self.longitude_mdeg),
            address=self.postext or DEFAULT_ADDRESS,
        )


class Vehicle(WebfleetModel):
    """Current cold-chain status of one vehicle or asset."""

    uid: str
    """Webfleet ``objectuid``."""
    name: str
    type: ObjectType
    temperatures: dict[int, TemperatureReading] | None = None
    """Latest temperature per sensor."""
    door_status: dict[int, DoorState] | None = None
    """Latest door state per sensor."""
    location: LocationSample | None = None
