"""Pydantic models for Weelo API payloads."""

from pyweelo.models.assignment import DriverAssignment, DriverResponseStatus, TripAssignment
from pyweelo.models.driver import (
    ActiveTrip,
    Address,
    Earnings,
    EarningsBreakdown,
    Performance,
    TripList,
    TripSummary,
)
from pyweelo.models.envelope import ApiResponse
from pyweelo.models.tracking import TrackingSample, TripTracking

__all__ = [
    "ActiveTrip",
    "Address",
    "ApiResponse",
    "DriverAssignment",
    "DriverResponseStatus",
    "Earnings",
    "EarningsBreakdown",
    "Performance",
    "TrackingSample",
    "TripAssignment",
    "TripList",
    "TripSummary",
    "TripTracking",
]
