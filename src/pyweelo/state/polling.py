"""Bounded-lifetime polling of a live resource.

A :class:`PollingSession` fetches a resource on a fixed cadence until
its status is terminal or the owner cancels it. Failed ticks are logged
and skipped; they never end the loop or overwrite the last known status.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from pyweelo._constants import DEFAULT_POLL_INTERVAL
from pyweelo.exceptions import error_message
from pyweelo.state.flow import StateFlow
from pyweelo.state.resource import Error, Loading, ResourceState, Success

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class PollHandle:
    """Owner-side handle of a running loop.

    :meth:`cancel` is the only way to stop a loop early.
    """

    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        self._task.cancel()

    async def wait(self) -> None:
        """Wait until the loop has stopped, whether finished or cancelled."""
        await asyncio.wait({self._task})


class PollingSession(Generic[T]):
    """Recurring fetch bound to a terminal-status predicate.

    Parameters
    ----------
    fetch
        Coroutine function performing one tick's gateway call.
    status_of
        Extracts the status from a tick result.
    is_terminal
        Returns True for statuses after which polling must stop.
    baseline
        Optional coroutine function returning the initial status. When
        the baseline is already terminal the loop never starts. A failed
        baseline publishes ``Error`` and polling continues with an
        unknown status.
    interval
        Seconds slept before every tick.
    sleep
        Sleep coroutine; injectable for tests.

    Ticks are sequential: the next sleep starts only after the previous
    gateway call has resolved or failed. Stopping is final.
    """

    def __init__(
        self,
        *,
        fetch: Callable[[], Awaitable[T]],
        status_of: Callable[[T], str],
        is_terminal: Callable[[str], bool],
        baseline: Callable[[], Awaitable[str]] | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        name: str = "poll",
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.session_id = f"{name}-{secrets.token_hex(4)}"
        self.interval = interval
        self.is_terminal = is_terminal
        self.state: StateFlow[ResourceState[T]] = StateFlow(Loading())
        self._fetch = fetch
        self._status_of = status_of
        self._baseline = baseline
        self._sleep = sleep
        self._last_status: str | None = None
        self._ticks = 0
        self._active = False
        self._handle: PollHandle | None = None
        self._stopped = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def last_status(self) -> str | None:
        return self._last_status

    @property
    def ticks(self) -> int:
        """Number of tick gateway calls attempted so far."""
        return self._ticks

    def start(self) -> PollHandle:
        """Start the loop in a new task and return its handle.

        Raises :class:`RuntimeError` when called more than once; a stopped
        session is never resumed.
        """
        if self._handle is not None or self._stopped:
            raise RuntimeError(f"Polling session {self.session_id} was already started or stopped")
        self._active = True
        task = asyncio.create_task(self._run(), name=self.session_id)
        self._handle = PollHandle(task)
        return self._handle

    def cancel(self) -> None:
        self._stopped = True
        self._active = False
        if self._handle is not None:
            self._handle.cancel()

    def _terminal(self) -> bool:
        return self._last_status is not None and self.is_terminal(self._last_status)

    async def _run(self) -> None:
        try:
            if self._baseline is not None:
                await self._establish_baseline()
            while not self._terminal():
                await self._sleep(self.interval)
                # The status may have turned terminal while sleeping.
                if self._terminal():
                    break
                await self._tick()
        except asyncio.CancelledError:
            _logger.debug("%s: cancelled after %d ticks", self.session_id, self._ticks)
            raise
        finally:
            self._active = False
        _logger.info("%s: poll loop exited (status=%s)", self.session_id, self._last_status)

    async def _establish_baseline(self) -> None:
        assert self._baseline is not None  # noqa: S101
        try:
            status = await self._baseline()
        except Exception as exc:
            _logger.warning("%s: initial fetch failed: %s", self.session_id, exc)
            self.state.publish(Error(error_message(exc)))
            return
        self._last_status = status
        if self._terminal():
            _logger.info("%s: initial status %s is terminal; not polling", self.session_id, status)

    async def _tick(self) -> None:
        self._ticks += 1
        try:
            result = await self._fetch()
            status = self._status_of(result)
        except Exception as exc:
            _logger.warning("%s: poll tick %d failed: %s", self.session_id, self._ticks, exc)
            return

        self._last_status = status
        self.state.publish(Success(result))
        if self._terminal():
            _logger.info("%s: reached terminal status %s; stopping", self.session_id, status)
