#!/usr/bin/env python3
"""Dump every read endpoint pyweelo can fetch.

Prints the parsed model fields **and** the raw payload of each response
so fields that are not parsed yet are easy to spot.

Usage
-----
Set environment variables and run::

    export WEELO_ACCESS_TOKEN="eyJ..."
    python scripts/dump_all.py

Options::

    --trip-id ID         Also fetch tracking for this trip
    --assignment-id ID   Also fetch this assignment
    --json               Output as machine-readable JSON
    --verbose            Enable debug logging (with redacted API traces)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from pyweelo import ApiResponse, WeeloClient, WeeloConfig, WeeloError
from pyweelo._redact import redact_for_log


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n {title}\n{'=' * 60}"


def _describe(response: ApiResponse[Any]) -> dict[str, Any]:
    data = response.data
    return {
        "success": response.success,
        "http_status": response.http_status,
        "message": response.message,
        "parsed": data.model_dump(exclude={"raw"}, mode="json") if data is not None else None,
        "raw": redact_for_log(getattr(data, "raw", None)),
    }


async def _fetch(call: Callable[[], Awaitable[ApiResponse[Any]]]) -> dict[str, Any]:
    try:
        return _describe(await call())
    except (WeeloError, ValueError) as exc:
        return {"error": f"{type(exc).__name__}: {exc}"}


async def main() -> None:
    parser = argparse.ArgumentParser(description="Dump all data pyweelo can fetch for debugging / development.")
    parser.add_argument("--trip-id", help="Also fetch live tracking for this trip")
    parser.add_argument("--assignment-id", help="Also fetch this assignment")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = WeeloConfig.from_env(api_trace_enabled=args.verbose)
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "api_root": config.api_root}

    async with WeeloClient(config) as client:
        calls: dict[str, Callable[[], Awaitable[ApiResponse[Any]]]] = {
            "performance": client.get_performance,
            "earnings_today": lambda: client.get_earnings("today"),
            "earnings_week": lambda: client.get_earnings("week"),
            "earnings_month": lambda: client.get_earnings("month"),
            "trips": lambda: client.get_trips(limit=10),
            "active_trip": client.get_active_trip,
        }
        if args.trip_id:
            calls["tracking"] = lambda: client.get_trip_tracking(args.trip_id)
        if args.assignment_id:
            calls["assignment"] = lambda: client.get_assignment_details(args.assignment_id)

        for name, call in calls.items():
            result[name] = await _fetch(call)

    if args.json_mode:
        print(json.dumps(result, indent=2, default=str))
        return

    print(_section("pyweelo dump_all"))
    print(f"  time      : {result['timestamp']}")
    print(f"  api_root  : {result['api_root']}")
    for name, section in result.items():
        if not isinstance(section, dict):
            continue
        print(_section(name))
        print(json.dumps(section, indent=2, default=str))


if __name__ == "__main__":
    asyncio.run(main())
