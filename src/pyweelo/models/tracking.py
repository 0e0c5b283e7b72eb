"""Live trip tracking models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pyweelo.models._base import WeeloBaseModel


class TripTracking(WeeloBaseModel):
    """Latest position report for a trip.

    Parameters
    ----------
    latitude, longitude : float or None
        Last reported position in degrees.
    speed_kmh : float or None
        Ground speed in km/h.
    status : str
        Trip status, lower-cased (``heading_to_pickup``, ``in_transit``,
        ``completed`` ...).
    """

    latitude: float | None = None
    longitude: float | None = None
    speed_kmh: float | None = Field(default=None, validation_alias=AliasChoices("speedKmh", "speed", "speed_kmh"))
    status: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        return str(value).strip().lower()


class TrackingSample(BaseModel):
    """One observation produced by a tracking poll tick.

    Each new sample supersedes the previous one; history is not kept.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float | None = None
    longitude: float | None = None
    speed_kmh: float | None = None
    trip_status: str
    observed_at: datetime

    @classmethod
    def from_tracking(cls, tracking: TripTracking, observed_at: datetime) -> TrackingSample:
        return cls(
            latitude=tracking.latitude,
            longitude=tracking.longitude,
            speed_kmh=tracking.speed_kmh,
            trip_status=tracking.status,
            observed_at=observed_at,
        )
