"""Client configuration for pywebfleet."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pywebfleet._constants import BASE_URL, DAY_MS
from pywebfleet.exceptions import WebfleetConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class WebfleetConfig:
    """Client configuration.

    Parameters
    ----------
    account : str
        Webfleet account name.
    username : str
        Webfleet user name.
    password : str
        Webfleet user password.
    api_key : str
        Webfleet.connect API key. Required for every data action.
    base_url : str
        Extern endpoint URL.
    language : str
        Language code sent as ``lang``.
    temperature_chunk_days : float
        Longest time window requested in one temperature history call.
    door_chunk_days : float
        Longest time window requested in one door-status history call.
    track_chunk_days : float
        Longest time window requested in one track call. Track data is
        denser, so the bound is shorter than for the sensor streams.
    gap_threshold_ms : int
        Two consecutive emitted history points further apart than this
        get a synthetic boundary point at ``later - 1``. Must be >= 1.
    location_triggers_event : bool
        Whether a snapshot carrying only a new position is emitted as a
        history point on its own.
    """

    account: str
    username: str
    password: str
    api_key: str = ""
    base_url: str = BASE_URL
    language: str = "en"
    temperature_chunk_days: float = 7
    door_chunk_days: float = 7
    track_chunk_days: float = 1
    gap_threshold_ms: int = 1
    location_triggers_event: bool = True

    def __post_init__(self) -> None:
        for name in ("temperature_chunk_days", "door_chunk_days", "track_chunk_days"):
            if getattr(self, name) <= 0:
                raise WebfleetConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.gap_threshold_ms < 1:
            raise WebfleetConfigError(f"gap_threshold_ms must be >= 1, got {self.gap_threshold_ms}")

    @property
    def temperature_chunk_ms(self) -> int:
        return int(self.temperature_chunk_days * DAY_MS)

    @property
    def door_chunk_ms(self) -> int:
        return int(self.door_chunk_days * DAY_MS)

    @property
    def track_chunk_ms(self) -> int:
        return int(self.track_chunk_days * DAY_MS)

    @classmethod
    def from_env(cls, **overrides: Any) -> WebfleetConfig:
        """Create configuration from environment variables.

        Reads ``WEBFLEET_ACCOUNT``, ``WEBFLEET_USERNAME``,
        ``WEBFLEET_PASSWORD``, ``WEBFLEET_API_KEY`` and the optional
        ``WEBFLEET_*`` tuning variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        WebfleetConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "WEBFLEET_ACCOUNT": "account",
            "WEBFLEET_USERNAME": "username",
            "WEBFLEET_PASSWORD": "password",
            "WEBFLEET_API_KEY": "api_key",
            "WEBFLEET_BASE_URL": "base_url",
            "WEBFLEET_LANGUAGE": "language",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields, handled separately
        _ENV_FLOAT_MAP = {
            "WEBFLEET_TEMPERATURE_CHUNK_DAYS": "temperature_chunk_days",
            "WEBFLEET_DOOR_CHUNK_DAYS": "door_chunk_days",
            "WEBFLEET_TRACK_CHUNK_DAYS": "track_chunk_days",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = float(val)

        gap_env = env.get("WEBFLEET_GAP_THRESHOLD_MS")
        if gap_env is not None and "gap_threshold_ms" not in overrides:
            config_kwargs["gap_threshold_ms"] = int(gap_env)

        if "location_triggers_event" not in overrides:
            config_kwargs["location_triggers_event"] = _env_bool(
                env.get("WEBFLEET_LOCATION_TRIGGERS_EVENT"),
                True,
            )

        config_kwargs.update(overrides)

        for required in ("account", "username", "password"):
            config_kwargs.setdefault(required, "")

        return cls(**config_kwargs)
