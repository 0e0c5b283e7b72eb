"""Trip assignment models (transporter view of driver responses)."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyweelo.models._base import WeeloBaseModel

# Backend spellings that map onto the three response states.
_STATUS_ALIASES: dict[str, str] = {
    "driver_accepted": "accepted",
    "driver_declined": "declined",
    # Timed-out and cancelled pairings are shown as replaceable.
    "expired": "declined",
    "timeout": "declined",
    "cancelled": "declined",
    "pending_driver_response": "pending",
}


class DriverResponseStatus(StrEnum):
    """A driver's response to an assignment.

    Unknown values resolve to ``PENDING`` instead of raising, so every
    sub-assignment always has exactly one status.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @classmethod
    def _missing_(cls, value: object) -> DriverResponseStatus:
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = _STATUS_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.PENDING


class DriverAssignment(WeeloBaseModel):
    """One driver/vehicle pairing within a trip assignment."""

    driver_id: str = ""
    vehicle_id: str = ""
    status: DriverResponseStatus = DriverResponseStatus.PENDING
    driver_name: str | None = None
    vehicle_number: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> DriverResponseStatus:
        return DriverResponseStatus(value)


class TripAssignment(WeeloBaseModel):
    assignment_id: str = Field(default="", validation_alias=AliasChoices("assignmentId", "id", "assignment_id"))
    broadcast_id: str = Field(default="", validation_alias=AliasChoices("broadcastId", "bookingId", "broadcast_id"))
    sub_assignments: list[DriverAssignment] = Field(
        default_factory=list,
        validation_alias=AliasChoices("subAssignments", "assignments", "sub_assignments"),
    )
