"""Assignment endpoint: /assignments/{assignmentId}."""

from __future__ import annotations

from urllib.parse import quote

from pyweelo._api._common import get_enveloped
from pyweelo._constants import ASSIGNMENT_ENDPOINT
from pyweelo._transport import Transport
from pyweelo.models.assignment import TripAssignment
from pyweelo.models.envelope import ApiResponse


async def fetch_assignment_details(transport: Transport, assignment_id: str) -> ApiResponse[TripAssignment]:
    endpoint = ASSIGNMENT_ENDPOINT.format(assignment_id=quote(assignment_id, safe=""))
    response = await get_enveloped(endpoint=endpoint, transport=transport, model=TripAssignment)
    # The payload does not always echo the id it was requested by.
    if response.data is not None and not response.data.assignment_id:
        response = response.model_copy(
            update={"data": response.data.model_copy(update={"assignment_id": assignment_id})}
        )
    return response
