from __future__ import annotations

import pytest

from pywebfleet._constants import BASE_URL, DAY_MS
from pywebfleet.config import WebfleetConfig
from pywebfleet.exceptions import WebfleetConfigError


def test_defaults() -> None:
    config = WebfleetConfig(account="acme", username="u", password="p")

    assert config.base_url == BASE_URL
    assert config.temperature_chunk_ms == 7 * DAY_MS
    assert config.door_chunk_ms == 7 * DAY_MS
    assert config.track_chunk_ms == DAY_MS
    assert config.gap_threshold_ms == 1
    assert config.location_triggers_event is True


def test_from_env_reads_webfleet_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBFLEET_ACCOUNT", "acme")
    monkeypatch.setenv("WEBFLEET_USERNAME", "dispatcher")
    monkeypatch.setenv("WEBFLEET_PASSWORD", "secret")
    monkeypatch.setenv("WEBFLEET_API_KEY", "key-1")
    monkeypatch.setenv("WEBFLEET_TRACK_CHUNK_DAYS", "0.5")
    monkeypatch.setenv("WEBFLEET_GAP_THRESHOLD_MS", "300000")
    monkeypatch.setenv("WEBFLEET_LOCATION_TRIGGERS_EVENT", "no")

    config = WebfleetConfig.from_env()

    assert (config.account, config.username, config.password, config.api_key) == (
        "acme",
        "dispatcher",
        "secret",
        "key-1",
    )
    assert config.track_chunk_ms == DAY_MS // 2
    assert config.gap_threshold_ms == 300_000
    assert config.location_triggers_event is False


def test_from_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBFLEET_ACCOUNT", "acme")
    monkeypatch.setenv("WEBFLEET_GAP_THRESHOLD_MS", "5")
    monkeypatch.setenv("WEBFLEET_LOCATION_TRIGGERS_EVENT", "false")

    config = WebfleetConfig.from_env(account="other", gap_threshold_ms=60_000, location_triggers_event=True)

    assert config.account == "other"
    assert config.gap_threshold_ms == 60_000
    assert config.location_triggers_event is True


def test_from_env_without_variables_uses_empty_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WEBFLEET_ACCOUNT", "WEBFLEET_USERNAME", "WEBFLEET_PASSWORD", "WEBFLEET_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    config = WebfleetConfig.from_env()

    assert (config.account, config.username, config.password, config.api_key) == ("", "", "", "")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature_chunk_days": 0},
        {"door_chunk_days": -1},
        {"track_chunk_days": 0},
        {"gap_threshold_ms": 0},
    ],
)
def test_invalid_tuning_is_rejected(kwargs: dict) -> None:
    with pytest.raises(WebfleetConfigError):
        WebfleetConfig(account="acme", username="u", password="p", **kwargs)
