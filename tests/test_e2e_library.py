from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyweelo.client import WeeloClient
from pyweelo.config import WeeloConfig
from pyweelo.exceptions import WeeloApiError, WeeloError
from pyweelo.gateway import require_data
from pyweelo.models.assignment import DriverResponseStatus
from pyweelo.state.resource import Error, Success


@dataclass
class FakeWeeloBackend:
    trip_id: str = "TRIP-42"
    calls: dict[str, int] = field(default_factory=dict)
    params: dict[str, list[dict[str, str]]] = field(default_factory=dict)
    tracking_statuses: list[str] = field(default_factory=lambda: ["in_transit", "in_transit", "completed"])
    performance_status: int = 200
    malformed_earnings: bool = False

    def _record_call(self, endpoint: str, params: Mapping[str, str] | None) -> None:
        self.calls[endpoint] = self.calls.get(endpoint, 0) + 1
        self.params.setdefault(endpoint, []).append(dict(params or {}))

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> tuple[int, dict[str, Any]]:
        self._record_call(endpoint, params)

        if endpoint == "/driver/performance":
            if self.performance_status != 200:
                return self.performance_status, {"success": False}
            return 200, {"success": True, "data": {"rating": 4.8, "totalTrips": 40, "completionRate": 95}}

        if endpoint == "/driver/earnings":
            if self.malformed_earnings:
                return 200, {"success": True, "data": {"totalEarnings": "lots"}}
            return 200, {"success": True, "data": {"totalEarnings": 9000, "totalTrips": 18, "breakdown": []}}

        if endpoint == "/driver/trips":
            return 200, {"success": True, "data": {"trips": [{"id": "T1", "status": "completed"}]}}

        if endpoint == "/driver/active-trip":
            return 200, {"success": True, "data": {"trip": {"id": self.trip_id, "status": "heading_to_pickup"}}}

        if endpoint == f"/tracking/trip/{self.trip_id}":
            status = self.tracking_statuses.pop(0)
            return 200, {
                "success": True,
                "data": {"latitude": 19.0, "longitude": 72.8, "speedKmh": 40, "status": status},
            }

        if endpoint == "/assignments/A%2F1":
            return 200, {
                "success": True,
                "data": {
                    "broadcastId": "B1",
                    "subAssignments": [
                        {"driverId": "d1", "vehicleId": "v1", "status": "driver_accepted"},
                        {"driverId": "d2", "vehicleId": "v2", "status": "timeout"},
                    ],
                },
            }

        return 404, {"success": False, "message": "Route not found"}


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeWeeloBackend:
    fake = FakeWeeloBackend()

    async def fake_get_json(
        _self: Any, endpoint: str, params: Mapping[str, str] | None = None
    ) -> tuple[int, dict[str, Any]]:
        return await fake.get_json(endpoint, params)

    monkeypatch.setattr("pyweelo._transport.HttpTransport.get_json", fake_get_json)
    return fake


@pytest.fixture
def config() -> WeeloConfig:
    return WeeloConfig(access_token="token-1", poll_interval=0.01, cache_ttl=300)


@pytest.mark.asyncio
async def test_e2e_read_endpoints(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    async with WeeloClient(config) as client:
        perf = require_data(await client.get_performance(), "performance")
        earnings = require_data(await client.get_earnings("WEEK"), "earnings")
        trips = require_data(await client.get_trips(status="completed", limit=5), "trips")
        active = require_data(await client.get_active_trip(), "active trip")
        assignment = await client.get_assignment_details("A/1")

    assert perf.rating == 4.8
    assert earnings.total_earnings == 9000
    assert backend.params["/driver/earnings"] == [{"period": "week"}]
    assert backend.params["/driver/trips"] == [{"limit": "5", "status": "completed"}]
    assert trips.trips[0].id == "T1"
    assert active.trip is not None
    assert active.trip.id == "TRIP-42"
    assert assignment.http_status == 200
    assert assignment.data is not None
    assert assignment.data.assignment_id == "A/1"
    assert [s.status for s in assignment.data.sub_assignments] == [
        DriverResponseStatus.ACCEPTED,
        DriverResponseStatus.DECLINED,
    ]


@pytest.mark.asyncio
async def test_e2e_http_error_becomes_failed_envelope(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    backend.performance_status = 503

    async with WeeloClient(config) as client:
        response = await client.get_performance()

    assert response.success is False
    assert response.http_status == 503
    assert response.message == "Request failed (HTTP 503)"
    with pytest.raises(WeeloApiError, match="HTTP 503"):
        require_data(response, "performance")


@pytest.mark.asyncio
async def test_e2e_malformed_payload_raises_api_error(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    backend.malformed_earnings = True

    async with WeeloClient(config) as client:
        with pytest.raises(WeeloApiError) as exc_info:
            await client.get_earnings("today")

    assert exc_info.value.code == "invalid_payload"
    assert exc_info.value.endpoint == "/driver/earnings"


@pytest.mark.asyncio
async def test_e2e_invalid_period_is_rejected_before_request(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    async with WeeloClient(config) as client:
        with pytest.raises(ValueError):
            await client.get_earnings("year")

    assert "/driver/earnings" not in backend.calls


@pytest.mark.asyncio
async def test_e2e_client_requires_context_manager(config: WeeloConfig) -> None:
    client = WeeloClient(config)
    with pytest.raises(WeeloError, match="not initialized"):
        await client.get_performance()


@pytest.mark.asyncio
async def test_e2e_live_tracking_runs_to_completion(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    async with WeeloClient(config) as client:
        async with client.track_trip(backend.trip_id) as tracker:
            await asyncio.wait_for(tracker.wait(), timeout=5)

    assert backend.calls["/driver/active-trip"] == 1
    assert backend.calls[f"/tracking/trip/{backend.trip_id}"] == 3
    assert tracker.status == "completed"
    assert isinstance(tracker.samples.value, Success)


@pytest.mark.asyncio
async def test_e2e_assignment_monitor_initial_load(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    async with WeeloClient(config) as client:
        monitor = client.monitor_assignment("A/1")
        result = await monitor.load()
        await monitor.close()

    assert isinstance(result, Success)
    assert monitor.summary.value.accepted_count == 1
    assert monitor.summary.value.declined_count == 1
    assert [a.driver_id for a in monitor.summary.value.reassignable] == ["d2"]


@pytest.mark.asyncio
async def test_e2e_cached_stores_use_config_ttl(config: WeeloConfig, backend: FakeWeeloBackend) -> None:
    async with WeeloClient(config) as client:
        store = client.earnings_store()
        await store.load("month")
        await store.load("month")
        missing = await client.trip_history_store().load("archived")

    assert client.cache_ttl is not None
    assert client.cache_ttl.total_seconds() == 300
    assert backend.calls["/driver/earnings"] == 1
    assert isinstance(missing, Error)
