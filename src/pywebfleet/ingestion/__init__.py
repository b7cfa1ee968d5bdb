"""Ingestion layer.

This package contains the steps that fetch raw Webfleet records and turn
them into normalized streams: record parsing helpers, sensor identity
assignment, chunked range fetching and the history pipeline.
"""

__all__: list[str] = []
