"""Driver dashboard models: performance, earnings and trip history."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyweelo.models._base import WeeloBaseModel


class Performance(WeeloBaseModel):
    """Aggregated driver performance metrics.

    Rates are percentages in ``0..100``.
    """

    rating: float = 0.0
    total_ratings: int = 0
    total_trips: int = 0
    completion_rate: float = 0.0
    on_time_delivery_rate: float = 0.0
    acceptance_rate: float = 0.0
    total_distance_km: float = Field(
        default=0.0,
        validation_alias=AliasChoices("totalDistanceKm", "totalDistance", "total_distance_km"),
    )


class EarningsBreakdown(WeeloBaseModel):
    """One row of an earnings breakdown (usually one day or month)."""

    date: str = ""
    trips: int = 0
    amount: float = 0.0


class Earnings(WeeloBaseModel):
    total_earnings: float = 0.0
    total_trips: int = 0
    average_per_trip: float = 0.0
    breakdown: list[EarningsBreakdown] = Field(default_factory=list)


class Address(WeeloBaseModel):
    address: str = ""
    latitude: float | None = None
    longitude: float | None = None


class TripSummary(WeeloBaseModel):
    """A trip as listed in history, earnings and active-trip payloads."""

    id: str = Field(default="", validation_alias=AliasChoices("id", "tripId", "trip_id"))
    pickup: Address = Field(default_factory=Address)
    drop: Address = Field(default_factory=Address)
    fare: float = 0.0
    distance_km: float = 0.0
    status: str = ""
    customer_name: str | None = None
    completed_at: str | None = None
    created_at: str | None = None


class TripList(WeeloBaseModel):
    trips: list[TripSummary] = Field(default_factory=list)


class ActiveTrip(WeeloBaseModel):
    """``{trip: {...}}``; ``trip`` is ``None`` when the driver has no active trip."""

    trip: TripSummary | None = None
