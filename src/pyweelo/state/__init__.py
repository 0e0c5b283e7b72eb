"""Remote-state synchronization primitives.

Caching with load orchestration, bounded polling, and a refresh
heartbeat. All coordination happens on a single event loop; each store
or session belongs to exactly one owner.
"""

from pyweelo.state.flow import StateFlow
from pyweelo.state.heartbeat import RefreshHeartbeat
from pyweelo.state.polling import PollHandle, PollingSession
from pyweelo.state.resource import Error, Loading, ResourceState, Success
from pyweelo.state.store import CacheEntry, CachedResourceStore

__all__ = [
    "CacheEntry",
    "CachedResourceStore",
    "Error",
    "Loading",
    "PollHandle",
    "PollingSession",
    "RefreshHeartbeat",
    "ResourceState",
    "StateFlow",
    "Success",
]
