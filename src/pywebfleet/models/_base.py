"""Base model for Webfleet records.

Every raw record model inherits from :class:`WebfleetRecord` which
provides:

* A ``model_validator(mode="before")`` that strips placeholder values
  (``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original record.

Output models inherit from :class:`WebfleetModel`, which serializes
snake_case fields under camelCase aliases for report and chart consumers.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pywebfleet.ingestion.normalize import parse_timestamp_ms

# Placeholder strings Webfleet uses for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})

EpochMillis = Annotated[int | None, BeforeValidator(parse_timestamp_ms)]
"""Annotated type that coerces ISO-8601 strings or epoch-ms numbers to epoch ms."""


class WebfleetModel(BaseModel):
    """Base for typed output models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class WebfleetRecord(BaseModel):
    """Base for raw Webfleet record schemas.

    Field validators coerce bad values to ``None`` rather than raising,
    so a malformed record still validates and is dropped later by the
    stage that needs the missing field.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API record."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw record."""
        if not isinstance(values, dict):
            return values
        cleaned = WebfleetRecord._clean_dict(values)
        # Keep a caller-supplied raw (kwargs construction) untouched.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
