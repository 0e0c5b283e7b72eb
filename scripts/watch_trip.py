#!/usr/bin/env python3
"""Follow a trip live until it completes, is cancelled or fails.

Usage
-----
::

    export WEELO_ACCESS_TOKEN="eyJ..."
    python scripts/watch_trip.py TRIP_ID [--interval 5]
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from pyweelo import Error, Loading, ResourceState, Success, TrackingSample, WeeloClient, WeeloConfig
from pyweelo.live import LiveTripTracker
from pyweelo.timeago import format_relative


def _render(state: ResourceState[TrackingSample]) -> None:
    match state:
        case Loading():
            print("... waiting for first position")
        case Success(data=sample):
            print(
                f"[{format_relative(sample.observed_at)}] {sample.trip_status:<18}"
                f" lat={sample.latitude} lon={sample.longitude} speed={sample.speed_kmh} km/h"
            )
        case Error(message=message):
            print(f"!! {message}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Poll live tracking for one trip.")
    parser.add_argument("trip_id", help="Trip to follow")
    parser.add_argument("--interval", type=float, help="Seconds between polls (default: WEELO_POLL_INTERVAL or 5)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {"poll_interval": args.interval} if args.interval else {}
    config = WeeloConfig.from_env(**overrides)

    async with WeeloClient(config) as client:
        tracker: LiveTripTracker = client.track_trip(args.trip_id)
        tracker.samples.subscribe(_render)
        async with tracker:
            await tracker.wait()
        print(f"Trip {args.trip_id} finished with status {tracker.status}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
