"""Driver dashboard endpoints.

Endpoints:
  - /driver/performance
  - /driver/earnings?period=today|week|month
  - /driver/trips?status=&limit=
  - /driver/active-trip
"""

from __future__ import annotations

from pyweelo._api._common import get_enveloped
from pyweelo._constants import (
    ACTIVE_TRIP_ENDPOINT,
    EARNINGS_ENDPOINT,
    EARNINGS_PERIODS,
    PERFORMANCE_ENDPOINT,
    TRIPS_ENDPOINT,
)
from pyweelo._transport import Transport
from pyweelo.models.driver import ActiveTrip, Earnings, Performance, TripList
from pyweelo.models.envelope import ApiResponse


async def fetch_performance(transport: Transport) -> ApiResponse[Performance]:
    return await get_enveloped(endpoint=PERFORMANCE_ENDPOINT, transport=transport, model=Performance)


async def fetch_earnings(transport: Transport, period: str) -> ApiResponse[Earnings]:
    """Fetch the earnings summary and breakdown for *period*.

    Raises :class:`ValueError` for a period other than ``today``,
    ``week`` or ``month``.
    """
    normalized = period.strip().lower()
    if normalized not in EARNINGS_PERIODS:
        raise ValueError(f"period must be one of {EARNINGS_PERIODS}, got {period!r}")
    return await get_enveloped(
        endpoint=EARNINGS_ENDPOINT,
        transport=transport,
        model=Earnings,
        params={"period": normalized},
    )


async def fetch_trips(transport: Transport, *, status: str | None = None, limit: int = 20) -> ApiResponse[TripList]:
    params: dict[str, str] = {"limit": str(limit)}
    if status:
        params["status"] = status
    return await get_enveloped(endpoint=TRIPS_ENDPOINT, transport=transport, model=TripList, params=params)


async def fetch_active_trip(transport: Transport) -> ApiResponse[ActiveTrip]:
    return await get_enveloped(endpoint=ACTIVE_TRIP_ENDPOINT, transport=transport, model=ActiveTrip)
