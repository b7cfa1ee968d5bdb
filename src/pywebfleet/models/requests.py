"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pywebfleet.client.WebfleetClient`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ObjectRequest(BaseModel):
    """Request scoped to one Webfleet object."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    objectuid: str

    @field_validator("objectuid")
    @classmethod
    def _objectuid_non_empty(cls, value: str) -> str:
        objectuid = value.strip()
        if not objectuid:
            raise ValueError("objectuid must be non-empty")
        return objectuid


class HistoryRequest(ObjectRequest):
    """History query in exactly one of two temporal modes.

    Either ``range_pattern`` (an opaque token such as ``"d0"`` forwarded
    verbatim, surrounding whitespace included) or an explicit
    ``[start_time, end_time)`` pair of epoch milliseconds.
    """

    range_pattern: str | None = None
    start_time: int | None = Field(default=None, ge=0)
    end_time: int | None = Field(default=None, ge=0)

    @field_validator("range_pattern")
    @classmethod
    def _blank_pattern_is_missing(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _exactly_one_range_mode(self) -> HistoryRequest:
        has_window = self.start_time is not None or self.end_time is not None
        if self.range_pattern is not None and has_window:
            raise ValueError("range_pattern and start_time/end_time are mutually exclusive")
        if self.range_pattern is None:
            if self.start_time is None or self.end_time is None:
                raise ValueError("either range_pattern or both start_time and end_time are required")
            if self.start_time > self.end_time:
                raise ValueError("start_time must not be after end_time")
        return self

    @property
    def window(self) -> tuple[int, int] | None:
        """The explicit ``(start_time, end_time)`` pair, or ``None`` in range-pattern mode."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.start_time, self.end_time
