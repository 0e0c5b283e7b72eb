"""Keyed single-resource cache with load orchestration.

This is the single source of truth for a fetchable resource: screens
call :meth:`CachedResourceStore.load` and observe
:meth:`CachedResourceStore.state`; only the store talks to the fetcher.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Generic, TypeVar

from pyweelo.exceptions import error_message
from pyweelo.state.flow import StateFlow
from pyweelo.state.resource import Error, Loading, ResourceState, Success

_logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[K, T]):
    key: K
    value: T
    fetched_at: datetime


class CachedResourceStore(Generic[K, T]):
    """Cache + Loading/Success/Error publication for one resource kind.

    Parameters
    ----------
    fetcher
        Coroutine function fetching the value for a key. Any exception it
        raises (other than cancellation) becomes an ``Error`` state.
    name
        Resource name used in log messages.
    ttl
        How long an entry stays valid. ``None`` keeps entries until
        :meth:`refresh` or :meth:`invalidate`.
    clock
        Returns the current aware datetime; injectable for tests.

    At most one fetch per key is in flight. Calls that arrive while a
    fetch is running wait for that fetch instead of starting another.
    A failed fetch drops any cached value for the key; the previous
    success is not kept as a fallback.
    """

    def __init__(
        self,
        fetcher: Callable[[K], Awaitable[T]],
        *,
        name: str = "resource",
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._name = name
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[K, CacheEntry[K, T]] = {}
        self._flows: dict[K, StateFlow[ResourceState[T]]] = {}
        self._inflight: dict[K, asyncio.Task[ResourceState[T]]] = {}

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def state(self, key: K) -> StateFlow[ResourceState[T]]:
        """Return the state flow for *key* (``Loading`` until first result)."""
        flow = self._flows.get(key)
        if flow is None:
            flow = StateFlow(Loading())
            self._flows[key] = flow
        return flow

    def cached(self, key: K) -> CacheEntry[K, T] | None:
        """Return the valid cache entry for *key*, if any."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._ttl is not None and self._clock() - entry.fetched_at >= self._ttl:
            return None
        return entry

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self, key: K, *, force_refresh: bool = False) -> ResourceState[T]:
        """Publish the cached value, or fetch it.

        A fetch already in flight for *key* is joined, whatever the cache
        holds. Otherwise a cache hit publishes ``Success`` before returning
        and never suspends, and a miss publishes ``Loading`` and then the
        fetch result (``Success`` or ``Error``).
        """
        flow = self.state(key)
        task = self._inflight.get(key)

        if task is None and not force_refresh:
            entry = self.cached(key)
            if entry is not None:
                _logger.debug("%s[%s]: cache hit", self._name, key)
                hit: ResourceState[T] = Success(entry.value)
                flow.publish(hit)
                return hit

        if task is None:
            flow.publish(Loading())
            task = asyncio.create_task(self._fetch(key), name=f"{self._name}-fetch-{key}")
            self._inflight[key] = task
        else:
            _logger.debug("%s[%s]: joining in-flight fetch", self._name, key)

        # Shielded so one cancelled caller does not cancel the shared fetch.
        return await asyncio.shield(task)

    async def refresh(self, key: K) -> ResourceState[T]:
        """Drop any cache entry for *key* and fetch it again."""
        self.invalidate(key)
        return await self.load(key, force_refresh=True)

    def invalidate(self, key: K) -> None:
        """Drop the cache entry for *key* without fetching."""
        self._entries.pop(key, None)

    async def close(self) -> None:
        """Cancel in-flight fetches (owner teardown).

        Cancelled fetches publish nothing; the state flows keep their
        last value.
        """
        tasks = list(self._inflight.values())
        # Loads issued while awaiting the cancellations start fresh fetches.
        self._inflight.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _fetch(self, key: K) -> ResourceState[T]:
        flow = self.state(key)
        try:
            value = await self._fetcher(key)
        except asyncio.CancelledError:
            _logger.debug("%s[%s]: fetch cancelled", self._name, key)
            raise
        except Exception as exc:
            self._entries.pop(key, None)
            _logger.warning("%s[%s]: load failed: %s", self._name, key, exc)
            failed: ResourceState[T] = Error(error_message(exc))
            flow.publish(failed)
            return failed
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]

        self._entries[key] = CacheEntry(key=key, value=value, fetched_at=self._clock())
        _logger.debug("%s[%s]: loaded", self._name, key)
        loaded: ResourceState[T] = Success(value)
        flow.publish(loaded)
        return loaded
