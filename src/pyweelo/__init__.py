"""pyweelo - Async remote-state synchronization for the Weelo logistics API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyweelo")
except PackageNotFoundError:
    __version__ = "0+local"
from pyweelo.aggregation import AssignmentAction, AssignmentSummary, aggregate_assignment_statuses, allowed_action
from pyweelo.client import WeeloClient
from pyweelo.config import WeeloConfig
from pyweelo.exceptions import (
    WeeloApiError,
    WeeloConfigError,
    WeeloError,
    WeeloNotFoundError,
    WeeloTransportError,
)
from pyweelo.gateway import RemoteDataGateway, require_data
from pyweelo.live import AssignmentStatusMonitor, LiveTripTracker
from pyweelo.models import (
    ActiveTrip,
    ApiResponse,
    DriverAssignment,
    DriverResponseStatus,
    Earnings,
    Performance,
    TrackingSample,
    TripAssignment,
    TripList,
    TripTracking,
)
from pyweelo.state import (
    CachedResourceStore,
    Error,
    Loading,
    PollHandle,
    PollingSession,
    RefreshHeartbeat,
    ResourceState,
    StateFlow,
    Success,
)
from pyweelo.timeago import format_relative

__all__ = [
    "__version__",
    "ActiveTrip",
    "ApiResponse",
    "AssignmentAction",
    "AssignmentStatusMonitor",
    "AssignmentSummary",
    "CachedResourceStore",
    "DriverAssignment",
    "DriverResponseStatus",
    "Earnings",
    "Error",
    "LiveTripTracker",
    "Loading",
    "Performance",
    "PollHandle",
    "PollingSession",
    "RefreshHeartbeat",
    "RemoteDataGateway",
    "ResourceState",
    "StateFlow",
    "Success",
    "TrackingSample",
    "TripAssignment",
    "TripList",
    "TripTracking",
    "WeeloApiError",
    "WeeloClient",
    "WeeloConfig",
    "WeeloConfigError",
    "WeeloError",
    "WeeloNotFoundError",
    "WeeloTransportError",
    "aggregate_assignment_statuses",
    "allowed_action",
    "format_relative",
    "require_data",
]
