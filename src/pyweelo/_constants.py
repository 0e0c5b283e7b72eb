"""Internal constants shared across the library."""

BASE_URL = "https://api.weelo.in"
API_PREFIX = "/api/v1"
USER_AGENT = "pyweelo"

#: Fixed cadence of live polling loops, in seconds.
DEFAULT_POLL_INTERVAL: float = 5.0
DEFAULT_REQUEST_TIMEOUT: float = 15.0

#: Trip statuses after which tracking must stop polling.
TRIP_TERMINAL_STATUSES: frozenset[str] = frozenset({"completed", "cancelled", "failed"})

# ------------------------------------------------------------------
# Endpoints (relative to ``base_url + api_prefix``)
# ------------------------------------------------------------------

PERFORMANCE_ENDPOINT = "/driver/performance"
EARNINGS_ENDPOINT = "/driver/earnings"
TRIPS_ENDPOINT = "/driver/trips"
ACTIVE_TRIP_ENDPOINT = "/driver/active-trip"
TRIP_TRACKING_ENDPOINT = "/tracking/trip/{trip_id}"
ASSIGNMENT_ENDPOINT = "/assignments/{assignment_id}"

EARNINGS_PERIODS: tuple[str, ...] = ("today", "week", "month")
