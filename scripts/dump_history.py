#!/usr/bin/env python3
"""Dump the reconciled cold-chain history of Webfleet objects.

This script logs in, lists the account's vehicles and assets, and prints
the carry-forward history of one object (or all of them) so you can
check sensor ids, door compaction and gap-boundary points against the
Webfleet UI.

Usage
-----
Set environment variables and run::

    export WEBFLEET_ACCOUNT="my-account"
    export WEBFLEET_USERNAME="user"
    export WEBFLEET_PASSWORD="your-password"
    export WEBFLEET_API_KEY="your-api-key"
    python scripts/dump_history.py --range-pattern d0

Options::

    --objectuid UID      Only query this object (default: all objects)
    --range-pattern P    Relative range token, e.g. d0 (today) or w-1
    --start ISO          Explicit window start (ISO-8601, UTC if naive)
    --end ISO            Explicit window end (ISO-8601, UTC if naive)
    --json               Output as machine-readable JSON
    --output FILE        Write JSON to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import traceback
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pywebfleet import HistoricalDataPoint, WebfleetClient, WebfleetConfig, sensor_ids  # noqa: E402
from pywebfleet.ingestion.normalize import parse_timestamp_ms  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def _format_point(point: HistoricalDataPoint, temperature_ids: list[int], door_ids: list[int]) -> str:
    cells = [_format_time(point.timestamp), "*" if point.synthetic else " "]
    for sensor_id in temperature_ids:
        reading = (point.temperatures or {}).get(sensor_id)
        cells.append(f"{reading.value:7.1f}" if reading is not None else "      -")
    for sensor_id in door_ids:
        bit = (point.door_status or {}).get(sensor_id)
        cells.append("   -" if bit is None else ("OPEN" if bit else "shut"))
    if point.location is not None:
        cells.append(point.location.address)
    return "  ".join(cells)


def _print_history(objectuid: str, points: list[HistoricalDataPoint], out: list[str]) -> None:
    ids = sensor_ids(points)
    out.append(_section(f"HISTORY  objectuid={objectuid}  ({len(points)} point(s))"))
    header = ["time".ljust(23), " "]
    header.extend(f"T{sensor_id}".rjust(7) for sensor_id in ids.temperature)
    header.extend(f"D{sensor_id}".rjust(4) for sensor_id in ids.door)
    header.append("location")
    out.append("  ".join(header))
    for point in points:
        out.append(_format_point(point, ids.temperature, ids.door))


def _parse_bound(value: str | None, flag: str) -> int | None:
    if value is None:
        return None
    parsed = parse_timestamp_ms(value)
    if parsed is None:
        raise SystemExit(f"{flag}: cannot parse {value!r} as a timestamp")
    return parsed


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump reconciled Webfleet cold-chain history for debugging / development.",
    )
    parser.add_argument("--objectuid", help="Only query this object (default: all objects)")
    parser.add_argument("--range-pattern", help="Relative range token forwarded to Webfleet, e.g. d0")
    parser.add_argument("--start", help="Explicit window start (ISO-8601)")
    parser.add_argument("--end", help="Explicit window end (ISO-8601)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    start_time = _parse_bound(args.start, "--start")
    end_time = _parse_bound(args.end, "--end")
    range_pattern = args.range_pattern
    if range_pattern is None and start_time is None and end_time is None:
        range_pattern = "d0"

    config = WebfleetConfig.from_env()
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "account": config.account,
        "range_pattern": range_pattern,
        "start_time": start_time,
        "end_time": end_time,
        "objects": [],
    }

    out: list[str] = [_section("pywebfleet dump_history")]
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  account   : {config.account}")
    out.append(f"  range     : {range_pattern or f'[{args.start}, {args.end})'}")

    async with WebfleetClient(config) as client:
        await client.login()
        vehicles = await client.get_vehicles()
        for vehicle in vehicles:
            out.append(f"  {vehicle.type:<8} {vehicle.uid:<12} {vehicle.name}")

        targets = [args.objectuid] if args.objectuid else [vehicle.uid for vehicle in vehicles]
        for objectuid in targets:
            entry: dict[str, Any] = {"objectuid": objectuid}
            try:
                points = await client.get_historical_data(
                    objectuid,
                    range_pattern=range_pattern,
                    start_time=start_time,
                    end_time=end_time,
                )
            except Exception as exc:
                out.append(_section(f"HISTORY  objectuid={objectuid}"))
                out.append(f"  !! history failed: {exc}")
                entry["error"] = str(exc)
                entry["traceback"] = traceback.format_exc()
            else:
                _print_history(objectuid, points, out)
                entry["points"] = [point.model_dump(mode="json", by_alias=True) for point in points]
            result["objects"].append(entry)

    # ── Output ──
    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    else:
        print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
