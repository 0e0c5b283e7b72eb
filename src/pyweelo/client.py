"""High-level async client for the Weelo driver/transporter API."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import aiohttp

from pyweelo._api import assignments as _assignments_api
from pyweelo._api import driver as _driver_api
from pyweelo._api import tracking as _tracking_api
from pyweelo._transport import HttpTransport, Transport
from pyweelo.config import WeeloConfig
from pyweelo.exceptions import WeeloError
from pyweelo.live import dashboard as _dashboard
from pyweelo.live.assignments import AssignmentStatusMonitor
from pyweelo.live.dashboard import PerformanceOverview
from pyweelo.live.tracking import LiveTripTracker
from pyweelo.models.assignment import TripAssignment
from pyweelo.models.driver import ActiveTrip, Earnings, Performance, TripList, TripSummary
from pyweelo.models.envelope import ApiResponse
from pyweelo.models.tracking import TripTracking
from pyweelo.state.store import CachedResourceStore

_logger = logging.getLogger(__name__)


class WeeloClient:
    """Async HTTP implementation of :class:`pyweelo.gateway.RemoteDataGateway`.

    Usage::

        async with WeeloClient(config) as client:
            response = await client.get_performance()

    Each read returns the response envelope as-is; turning it into data
    or an error is left to the caller (see :func:`pyweelo.gateway.require_data`).
    """

    def __init__(
        self,
        config: WeeloConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or WeeloConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None

    @property
    def config(self) -> WeeloConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeeloClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        _logger.debug("Weelo client ready for %s", self._config.api_root)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise WeeloError("Client not initialized. Use 'async with WeeloClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_performance(self) -> ApiResponse[Performance]:
        return await _driver_api.fetch_performance(self._require_transport())

    async def get_earnings(self, period: str) -> ApiResponse[Earnings]:
        return await _driver_api.fetch_earnings(self._require_transport(), period)

    async def get_trips(self, status: str | None = None, limit: int = 20) -> ApiResponse[TripList]:
        return await _driver_api.fetch_trips(self._require_transport(), status=status, limit=limit)

    async def get_active_trip(self) -> ApiResponse[ActiveTrip]:
        return await _driver_api.fetch_active_trip(self._require_transport())

    async def get_trip_tracking(self, trip_id: str) -> ApiResponse[TripTracking]:
        return await _tracking_api.fetch_trip_tracking(self._require_transport(), trip_id)

    async def get_assignment_details(self, assignment_id: str) -> ApiResponse[TripAssignment]:
        return await _assignments_api.fetch_assignment_details(self._require_transport(), assignment_id)

    # ------------------------------------------------------------------
    # Live helpers
    # ------------------------------------------------------------------

    def track_trip(self, trip_id: str) -> LiveTripTracker:
        """Build a tracker polling at ``config.poll_interval`` (not started)."""
        return LiveTripTracker(self, trip_id, interval=self._config.poll_interval)

    def monitor_assignment(self, assignment_id: str) -> AssignmentStatusMonitor:
        """Build an assignment monitor refreshing at ``config.poll_interval`` (not started)."""
        return AssignmentStatusMonitor(self, assignment_id, interval=self._config.poll_interval)

    # ------------------------------------------------------------------
    # Cached dashboard resources
    # ------------------------------------------------------------------

    @property
    def cache_ttl(self) -> timedelta | None:
        if self._config.cache_ttl is None:
            return None
        return timedelta(seconds=self._config.cache_ttl)

    def performance_store(self) -> CachedResourceStore[str, PerformanceOverview]:
        return _dashboard.performance_store(self, ttl=self.cache_ttl)

    def earnings_store(self) -> CachedResourceStore[str, Earnings]:
        return _dashboard.earnings_store(self, ttl=self.cache_ttl)

    def trip_history_store(self, *, limit: int = 50) -> CachedResourceStore[str, list[TripSummary]]:
        return _dashboard.trip_history_store(self, limit=limit, ttl=self.cache_ttl)
