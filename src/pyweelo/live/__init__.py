"""Screen-level compositions of the synchronization primitives."""

from pyweelo.live.assignments import AssignmentStatusMonitor
from pyweelo.live.dashboard import (
    PerformanceOverview,
    earnings_store,
    load_performance_overview,
    performance_store,
    search_trips,
    trip_history_store,
)
from pyweelo.live.tracking import LiveTripTracker

__all__ = [
    "AssignmentStatusMonitor",
    "LiveTripTracker",
    "PerformanceOverview",
    "earnings_store",
    "load_performance_overview",
    "performance_store",
    "search_trips",
    "trip_history_store",
]
