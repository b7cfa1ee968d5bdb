from __future__ import annotations

from pywebfleet._redact import redact_query
from pywebfleet._transport import build_query
from pywebfleet.config import WebfleetConfig


def test_redact_query_masks_api_key_and_keeps_the_rest() -> None:
    config = WebfleetConfig(account="acme", username="u", password="p", api_key="key-1")
    query = build_query(config, "showTracks", {"objectuid": "1-V1", "range_pattern": "d0"})

    redacted = redact_query(query)

    assert redacted["apikey"] == "<redacted>"
    assert {k: v for k, v in redacted.items() if k != "apikey"} == {k: v for k, v in query.items() if k != "apikey"}
    assert query["apikey"] == "key-1"


def test_redact_query_matches_names_case_insensitively() -> None:
    redacted = redact_query({"ApiKey": "k", "Password": "pw", "lang": "en"})

    assert redacted == {"ApiKey": "<redacted>", "Password": "<redacted>", "lang": "en"}
