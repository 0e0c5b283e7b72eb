"""Cached driver dashboard resources: performance, earnings, trip history.

Each factory returns a :class:`CachedResourceStore`, so switching back
to a period or filter that was already loaded is instant.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from pyweelo._constants import EARNINGS_PERIODS
from pyweelo.gateway import RemoteDataGateway, require_data
from pyweelo.models.driver import Earnings, EarningsBreakdown, Performance, TripSummary
from pyweelo.models.envelope import ApiResponse
from pyweelo.state.store import CachedResourceStore
from pyweelo.timeago import format_month_label, format_relative

_logger = logging.getLogger(__name__)

TRIP_FILTERS: dict[str, str | None] = {
    "all": None,
    "completed": "completed",
    "cancelled": "cancelled",
}

_TREND_MONTHS = 6
_FEEDBACK_TRIPS = 5
_FEEDBACK_ADDRESS_CHARS = 25


@dataclass(frozen=True, slots=True)
class MonthTrips:
    month: str
    trips: int


@dataclass(frozen=True, slots=True)
class TripFeedback:
    comment: str
    customer: str
    date: str


@dataclass(frozen=True, slots=True)
class PerformanceOverview:
    """Everything the performance screen shows, derived from three calls."""

    rating: float
    total_ratings: int
    total_trips: int
    completed_trips: int
    cancelled_trips: int
    on_time_delivery_rate: float
    total_distance_km: float
    completion_rate: float
    acceptance_rate: float
    monthly_trend: tuple[MonthTrips, ...] = ()
    recent_feedback: tuple[TripFeedback, ...] = ()


def _optional_payload(result: ApiResponse[Any] | BaseException, resource: str) -> Any:
    if isinstance(result, BaseException):
        _logger.warning("Performance overview: %s unavailable: %s", resource, result)
        return None
    if not result.success or result.data is None:
        _logger.warning("Performance overview: %s unavailable (success=%s)", resource, result.success)
        return None
    return result.data


def _trend(breakdown: list[EarningsBreakdown]) -> tuple[MonthTrips, ...]:
    return tuple(MonthTrips(month=format_month_label(row.date), trips=row.trips) for row in breakdown[-_TREND_MONTHS:])


def _feedback(trips: list[TripSummary], now: datetime | None) -> tuple[TripFeedback, ...]:
    return tuple(
        TripFeedback(
            comment=(
                f"Trip from {trip.pickup.address[:_FEEDBACK_ADDRESS_CHARS]}"
                f" to {trip.drop.address[:_FEEDBACK_ADDRESS_CHARS]}"
            ),
            customer=trip.customer_name or "Customer",
            date=format_relative(trip.completed_at or trip.created_at, now),
        )
        for trip in trips[:_FEEDBACK_TRIPS]
    )


async def load_performance_overview(gateway: RemoteDataGateway, *, now: datetime | None = None) -> PerformanceOverview:
    """Fetch performance metrics, the monthly trend and recent trips.

    Only the performance call is required; a missing trend or trip list
    degrades to an empty tuple.
    """
    perf_result, earnings_result, trips_result = await asyncio.gather(
        gateway.get_performance(),
        gateway.get_earnings("month"),
        gateway.get_trips(status="completed", limit=10),
        return_exceptions=True,
    )
    if isinstance(perf_result, BaseException):
        raise perf_result
    performance: Performance = require_data(perf_result, "performance data")
    earnings: Earnings | None = _optional_payload(earnings_result, "earnings")
    trip_list = _optional_payload(trips_result, "recent trips")

    completion_fraction = min(max(performance.completion_rate / 100.0, 0.0), 1.0)
    completed = int(performance.total_trips * completion_fraction)

    overview = PerformanceOverview(
        rating=performance.rating,
        total_ratings=performance.total_ratings,
        total_trips=performance.total_trips,
        completed_trips=completed,
        cancelled_trips=max(performance.total_trips - completed, 0),
        on_time_delivery_rate=performance.on_time_delivery_rate,
        total_distance_km=performance.total_distance_km,
        completion_rate=performance.completion_rate,
        acceptance_rate=performance.acceptance_rate,
        monthly_trend=_trend(earnings.breakdown) if earnings is not None else (),
        recent_feedback=_feedback(trip_list.trips, now) if trip_list is not None else (),
    )
    _logger.debug(
        "Performance loaded: rating=%s trips=%s distance=%skm",
        overview.rating,
        overview.total_trips,
        overview.total_distance_km,
    )
    return overview


def performance_store(
    gateway: RemoteDataGateway,
    *,
    ttl: timedelta | None = None,
) -> CachedResourceStore[str, PerformanceOverview]:
    """Store keyed by driver id; the gateway call is scoped to the session's driver."""

    async def _fetch(_driver_id: str) -> PerformanceOverview:
        return await load_performance_overview(gateway)

    return CachedResourceStore(_fetch, name="performance", ttl=ttl)


def earnings_store(
    gateway: RemoteDataGateway,
    *,
    ttl: timedelta | None = None,
) -> CachedResourceStore[str, Earnings]:
    """Store keyed by period (``today``, ``week`` or ``month``)."""

    async def _fetch(period: str) -> Earnings:
        if period not in EARNINGS_PERIODS:
            raise ValueError(f"period must be one of {EARNINGS_PERIODS}, got {period!r}")
        return require_data(await gateway.get_earnings(period), "earnings")

    return CachedResourceStore(_fetch, name="earnings", ttl=ttl)


def trip_history_store(
    gateway: RemoteDataGateway,
    *,
    limit: int = 50,
    ttl: timedelta | None = None,
) -> CachedResourceStore[str, list[TripSummary]]:
    """Store keyed by filter (``all``, ``completed`` or ``cancelled``)."""

    async def _fetch(trip_filter: str) -> list[TripSummary]:
        if trip_filter not in TRIP_FILTERS:
            raise ValueError(f"filter must be one of {tuple(TRIP_FILTERS)}, got {trip_filter!r}")
        trip_list = require_data(await gateway.get_trips(status=TRIP_FILTERS[trip_filter], limit=limit), "trips")
        return list(trip_list.trips)

    return CachedResourceStore(_fetch, name="trip-history", ttl=ttl)


def search_trips(trips: list[TripSummary], query: str) -> list[TripSummary]:
    """Filter cached trips by customer name or address, case-insensitively."""
    needle = query.strip().lower()
    if not needle:
        return trips
    return [
        trip
        for trip in trips
        if needle in (trip.customer_name or "Customer").lower()
        or needle in trip.pickup.address.lower()
        or needle in trip.drop.address.lower()
    ]
