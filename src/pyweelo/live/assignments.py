"""Assignment status screen: driver responses with periodic refresh.

The initial load and a manual refresh go through a cache store and
surface errors. Heartbeat reloads only ever apply successful results;
a failed beat leaves the last good assignment and summary in place.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pyweelo._constants import DEFAULT_POLL_INTERVAL
from pyweelo.aggregation import AssignmentSummary, aggregate_assignment_statuses
from pyweelo.gateway import RemoteDataGateway, require_data
from pyweelo.models.assignment import TripAssignment
from pyweelo.state.flow import StateFlow
from pyweelo.state.heartbeat import RefreshHeartbeat
from pyweelo.state.polling import PollHandle
from pyweelo.state.resource import Error, Loading, ResourceState, Success
from pyweelo.state.store import CachedResourceStore

_logger = logging.getLogger(__name__)


class AssignmentStatusMonitor:
    """Keeps an assignment and its response summary up to date."""

    def __init__(
        self,
        gateway: RemoteDataGateway,
        assignment_id: str,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.assignment_id = assignment_id
        self._gateway = gateway
        self.store: CachedResourceStore[str, TripAssignment] = CachedResourceStore(
            self._fetch,
            name="assignment",
        )
        self.state: StateFlow[ResourceState[TripAssignment]] = StateFlow(Loading())
        self.summary: StateFlow[AssignmentSummary] = StateFlow(aggregate_assignment_statuses(()))
        self.heartbeat = RefreshHeartbeat(
            self._reload,
            interval=interval,
            name=f"assignment-{assignment_id}",
            sleep=sleep,
        )
        self._handle: PollHandle | None = None

    async def __aenter__(self) -> AssignmentStatusMonitor:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def refreshing(self) -> StateFlow[bool]:
        return self.heartbeat.refreshing

    async def start(self) -> PollHandle:
        """Load the assignment, then start the refresh heartbeat."""
        await self.load()
        self._handle = self.heartbeat.start()
        return self._handle

    async def load(self) -> ResourceState[TripAssignment]:
        result = await self.store.load(self.assignment_id)
        self._apply(result)
        return result

    async def refresh(self) -> ResourceState[TripAssignment]:
        """Manual refresh; a failure is shown like a failed initial load."""
        with self.heartbeat.indicate():
            result = await self.store.refresh(self.assignment_id)
        self._apply(result)
        return result

    async def close(self) -> None:
        self.heartbeat.cancel()
        if self._handle is not None:
            await self._handle.wait()
        await self.store.close()

    async def _fetch(self, assignment_id: str) -> TripAssignment:
        return require_data(await self._gateway.get_assignment_details(assignment_id), "assignment")

    async def _reload(self) -> None:
        result = await self.store.refresh(self.assignment_id)
        if isinstance(result, Error):
            _logger.debug("Assignment %s: keeping last state after failed reload", self.assignment_id)
            return
        self._apply(result)

    def _apply(self, result: ResourceState[TripAssignment]) -> None:
        self.state.publish(result)
        if isinstance(result, Success):
            self.summary.publish(aggregate_assignment_statuses(result.data.sub_assignments))
