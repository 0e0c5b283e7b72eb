"""Live tracking endpoint: /tracking/trip/{tripId}."""

from __future__ import annotations

from urllib.parse import quote

from pyweelo._api._common import get_enveloped
from pyweelo._constants import TRIP_TRACKING_ENDPOINT
from pyweelo._transport import Transport
from pyweelo.models.envelope import ApiResponse
from pyweelo.models.tracking import TripTracking


async def fetch_trip_tracking(transport: Transport, trip_id: str) -> ApiResponse[TripTracking]:
    endpoint = TRIP_TRACKING_ENDPOINT.format(trip_id=quote(trip_id, safe=""))
    return await get_enveloped(endpoint=endpoint, transport=transport, model=TripTracking)
