from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from pyweelo.exceptions import WeeloTransportError
from pyweelo.live.tracking import LiveTripTracker
from pyweelo.models.driver import ActiveTrip
from pyweelo.models.envelope import ApiResponse
from pyweelo.models.tracking import TripTracking
from pyweelo.state.resource import Error, Success

OBSERVED_AT = datetime(2026, 2, 1, 9, 30, tzinfo=UTC)


async def _yield_sleep(_delay: float) -> None:
    await asyncio.sleep(0)


def _active(status: str | None) -> ApiResponse[ActiveTrip]:
    payload: dict[str, Any] = {} if status is None else {"trip": {"id": "T1", "status": status}}
    return ApiResponse[ActiveTrip].model_validate({"success": True, "data": payload})


def _tracking(status: str, lat: float = 19.07) -> ApiResponse[TripTracking]:
    return ApiResponse[TripTracking].model_validate(
        {"success": True, "data": {"latitude": lat, "longitude": 72.87, "speedKmh": 28, "status": status}}
    )


@dataclass
class FakeTrackingGateway:
    active_trip: Any
    tracking: list[Any] = field(default_factory=list)
    active_trip_calls: int = 0
    tracking_calls: list[str] = field(default_factory=list)

    async def get_active_trip(self) -> ApiResponse[ActiveTrip]:
        self.active_trip_calls += 1
        if isinstance(self.active_trip, BaseException):
            raise self.active_trip
        return self.active_trip

    async def get_trip_tracking(self, trip_id: str) -> ApiResponse[TripTracking]:
        self.tracking_calls.append(trip_id)
        if not self.tracking:
            pytest.fail("tracking polled past the end of its script")
        item = self.tracking.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def _tracker(gateway: FakeTrackingGateway) -> LiveTripTracker:
    return LiveTripTracker(gateway, "T1", interval=5.0, clock=lambda: OBSERVED_AT, sleep=_yield_sleep)


@pytest.mark.asyncio
async def test_tracks_until_trip_completes() -> None:
    gateway = FakeTrackingGateway(
        active_trip=_active("heading_to_pickup"),
        tracking=[_tracking("in_transit"), _tracking("in_transit", lat=19.08), _tracking("COMPLETED")],
    )
    tracker = _tracker(gateway)
    samples: list[Any] = []
    tracker.samples.subscribe(samples.append)

    tracker.start()
    await tracker.wait()

    assert gateway.active_trip_calls == 1
    assert gateway.tracking_calls == ["T1", "T1", "T1"]
    assert tracker.status == "completed"
    assert tracker.latest_sample is not None
    assert tracker.latest_sample.trip_status == "completed"
    assert tracker.latest_sample.observed_at == OBSERVED_AT
    assert [s.data.latitude for s in samples if isinstance(s, Success)] == [19.07, 19.08, 19.07]
    assert isinstance(tracker.trip_state.value, Success)
    await tracker.close()


@pytest.mark.asyncio
async def test_already_finished_trip_is_not_polled() -> None:
    gateway = FakeTrackingGateway(active_trip=_active("Cancelled"))

    async with _tracker(gateway) as tracker:
        await tracker.wait()

    assert gateway.tracking_calls == []
    assert tracker.status == "cancelled"
    assert tracker.latest_sample is None


@pytest.mark.asyncio
async def test_missing_active_trip_surfaces_error_and_keeps_polling() -> None:
    gateway = FakeTrackingGateway(active_trip=_active(None), tracking=[_tracking("completed")])
    tracker = _tracker(gateway)
    seen: list[Any] = []
    tracker.samples.subscribe(seen.append)

    tracker.start()
    await tracker.wait()

    assert Error("Trip data not found") in seen
    assert tracker.trip_state.value == Error("Trip data not found")
    assert gateway.tracking_calls == ["T1"]


@pytest.mark.asyncio
async def test_failed_tick_does_not_replace_last_sample() -> None:
    gateway = FakeTrackingGateway(
        active_trip=_active("in_transit"),
        tracking=[
            _tracking("in_transit"),
            WeeloTransportError("timeout"),
            ApiResponse[TripTracking].model_validate({"success": False, "message": "Server busy"}),
            _tracking("completed"),
        ],
    )
    tracker = _tracker(gateway)
    seen: list[Any] = []
    tracker.samples.subscribe(seen.append)

    tracker.start()
    await tracker.wait()

    assert not any(isinstance(state, Error) for state in seen)
    assert len(gateway.tracking_calls) == 4
    assert tracker.session.ticks == 4


@pytest.mark.asyncio
async def test_close_mid_wait_stops_polling() -> None:
    entered = asyncio.Event()

    async def _blocking_sleep(_delay: float) -> None:
        entered.set()
        await asyncio.Event().wait()

    gateway = FakeTrackingGateway(active_trip=_active("in_transit"))
    tracker = LiveTripTracker(gateway, "T1", sleep=_blocking_sleep)

    tracker.start()
    await entered.wait()
    await tracker.close()

    assert gateway.tracking_calls == []
    assert not tracker.session.active
    assert not isinstance(tracker.samples.value, Error)


def test_terminal_statuses_are_case_insensitive() -> None:
    tracker = LiveTripTracker(FakeTrackingGateway(active_trip=_active("x")), "T1", terminal_statuses={"Delivered"})
    assert tracker.is_terminal("DELIVERED")
    assert not tracker.is_terminal("completed")
