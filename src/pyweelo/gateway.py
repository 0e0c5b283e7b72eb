"""The network boundary consumed by the synchronization layer.

:class:`RemoteDataGateway` is structural so tests and alternative
backends can pass any object with matching coroutine methods.
:class:`pyweelo.client.WeeloClient` is the HTTP implementation.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from pyweelo.exceptions import WeeloApiError, WeeloNotFoundError
from pyweelo.models.assignment import TripAssignment
from pyweelo.models.driver import ActiveTrip, Earnings, Performance, TripList
from pyweelo.models.envelope import ApiResponse
from pyweelo.models.tracking import TripTracking

T = TypeVar("T")


class RemoteDataGateway(Protocol):
    """Resource fetch operations, each answering with an :class:`ApiResponse`.

    Implementations may also raise transport exceptions; callers treat
    those, ``success=False`` and a missing payload identically.
    """

    async def get_performance(self) -> ApiResponse[Performance]: ...

    async def get_earnings(self, period: str) -> ApiResponse[Earnings]: ...

    async def get_trips(self, status: str | None = None, limit: int = 20) -> ApiResponse[TripList]: ...

    async def get_active_trip(self) -> ApiResponse[ActiveTrip]: ...

    async def get_trip_tracking(self, trip_id: str) -> ApiResponse[TripTracking]: ...

    async def get_assignment_details(self, assignment_id: str) -> ApiResponse[TripAssignment]: ...


def require_data(response: ApiResponse[T], resource: str) -> T:
    """Return the payload of a successful envelope.

    Raises
    ------
    WeeloApiError
        ``success`` is false. The gateway message is kept when present.
    WeeloNotFoundError
        ``success`` is true but there is no payload.
    """
    if not response.success:
        raise WeeloApiError(
            response.message or f"Failed to load {resource}",
            code=response.error_code or "",
            http_status=response.http_status,
        )
    if response.data is None:
        raise WeeloNotFoundError(
            f"{resource[:1].upper()}{resource[1:]} not found",
            code=response.error_code or "not_found",
            http_status=response.http_status,
        )
    return response.data
