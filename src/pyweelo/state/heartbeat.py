"""Fixed-interval refresh heartbeat with a "refreshing" indicator.

Unlike :class:`pyweelo.state.polling.PollingSession` the heartbeat has
no terminal condition: it runs until its owner cancels it.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Iterator

from pyweelo._constants import DEFAULT_POLL_INTERVAL
from pyweelo.state.flow import StateFlow
from pyweelo.state.polling import PollHandle

_logger = logging.getLogger(__name__)


class RefreshHeartbeat:
    """Run *reload* every *interval* seconds, flagging ``refreshing`` around it."""

    def __init__(
        self,
        reload: Callable[[], Awaitable[object]],
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        name: str = "heartbeat",
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.refreshing: StateFlow[bool] = StateFlow(False)
        self._reload = reload
        self._name = name
        self._sleep = sleep
        self._beats = 0
        self._holders = 0
        self._handle: PollHandle | None = None

    @property
    def beats(self) -> int:
        return self._beats

    def start(self) -> PollHandle:
        if self._handle is not None:
            raise RuntimeError(f"{self._name} was already started")
        self._handle = PollHandle(asyncio.create_task(self._run(), name=self._name))
        return self._handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()

    @contextlib.contextmanager
    def indicate(self) -> Iterator[None]:
        """Hold ``refreshing`` at True for the duration of the block.

        Holds nest: the indicator drops back to False only when the last
        overlapping reload has finished.
        """
        self._holders += 1
        if self._holders == 1:
            self.refreshing.publish(True)
        try:
            yield
        finally:
            self._holders -= 1
            if self._holders == 0:
                self.refreshing.publish(False)

    async def refresh_now(self) -> None:
        """Reload once, outside the cadence (manual refresh button)."""
        with self.indicate():
            try:
                await self._reload()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                _logger.warning("%s: reload failed: %s", self._name, exc)

    async def _run(self) -> None:
        try:
            while True:
                await self._sleep(self.interval)
                self._beats += 1
                await self.refresh_now()
        except asyncio.CancelledError:
            _logger.debug("%s: stopped after %d beats", self._name, self._beats)
            raise
