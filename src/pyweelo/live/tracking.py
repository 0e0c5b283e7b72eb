"""Live trip tracking.

The active trip is loaded once through a cache store to establish the
baseline status; tracking is then polled on a fixed cadence until the
trip completes, is cancelled or fails.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection
from datetime import UTC, datetime
from typing import Any

from pyweelo._constants import DEFAULT_POLL_INTERVAL, TRIP_TERMINAL_STATUSES
from pyweelo.exceptions import WeeloError, WeeloNotFoundError
from pyweelo.gateway import RemoteDataGateway, require_data
from pyweelo.models.driver import TripSummary
from pyweelo.models.tracking import TrackingSample
from pyweelo.state.flow import StateFlow
from pyweelo.state.polling import PollHandle, PollingSession
from pyweelo.state.resource import Error, ResourceState, Success
from pyweelo.state.store import CachedResourceStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LiveTripTracker:
    """Tracks one trip until it reaches a terminal status.

    Usage::

        async with LiveTripTracker(client, trip_id) as tracker:
            tracker.samples.subscribe(render)
            await tracker.wait()
    """

    def __init__(
        self,
        gateway: RemoteDataGateway,
        trip_id: str,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        terminal_statuses: Collection[str] = TRIP_TERMINAL_STATUSES,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.trip_id = trip_id
        self._gateway = gateway
        self._clock = clock
        self._terminal_statuses = frozenset(status.lower() for status in terminal_statuses)
        self.trip: CachedResourceStore[str, TripSummary] = CachedResourceStore(
            self._fetch_active_trip,
            name="active-trip",
            clock=clock,
        )
        self.session: PollingSession[TrackingSample] = PollingSession(
            fetch=self._poll,
            status_of=lambda sample: sample.trip_status,
            is_terminal=self.is_terminal,
            baseline=self._baseline,
            interval=interval,
            name=f"tracking-{trip_id}",
            sleep=sleep,
        )
        self._handle: PollHandle | None = None

    async def __aenter__(self) -> LiveTripTracker:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def samples(self) -> StateFlow[ResourceState[TrackingSample]]:
        return self.session.state

    @property
    def trip_state(self) -> StateFlow[ResourceState[TripSummary]]:
        return self.trip.state(self.trip_id)

    @property
    def latest_sample(self) -> TrackingSample | None:
        current = self.session.state.value
        return current.data if isinstance(current, Success) else None

    @property
    def status(self) -> str | None:
        return self.session.last_status

    def is_terminal(self, status: str) -> bool:
        return status.lower() in self._terminal_statuses

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> PollHandle:
        self._handle = self.session.start()
        return self._handle

    async def wait(self) -> None:
        if self._handle is not None:
            await self._handle.wait()

    async def close(self) -> None:
        """Stop polling and cancel any in-flight gateway call."""
        self.session.cancel()
        await self.wait()
        await self.trip.close()

    # ------------------------------------------------------------------
    # Gateway calls
    # ------------------------------------------------------------------

    async def _fetch_active_trip(self, _trip_id: str) -> TripSummary:
        active = require_data(await self._gateway.get_active_trip(), "trip data")
        if active.trip is None:
            raise WeeloNotFoundError("Trip data not found", code="not_found")
        return active.trip

    async def _baseline(self) -> str:
        state = await self.trip.load(self.trip_id)
        if isinstance(state, Error):
            raise WeeloError(state.message)
        if not isinstance(state, Success):
            raise WeeloError("Trip data not loaded")
        return state.data.status.strip().lower()

    async def _poll(self) -> TrackingSample:
        tracking = require_data(await self._gateway.get_trip_tracking(self.trip_id), "trip tracking")
        sample = TrackingSample.from_tracking(tracking, observed_at=self._clock())
        _logger.debug(
            "Trip %s at (%s, %s) status=%s",
            self.trip_id,
            sample.latitude,
            sample.longitude,
            sample.trip_status,
        )
        return sample
