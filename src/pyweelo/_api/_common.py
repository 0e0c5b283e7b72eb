"""Shared helpers for Weelo API endpoint modules.

Every endpoint answers with the same ``{success, data, message}``
envelope. This module validates that envelope against the endpoint's
payload model and records the HTTP status on it.

It is internal to pyweelo and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pyweelo._transport import Transport
from pyweelo.exceptions import WeeloApiError
from pyweelo.models.envelope import ApiResponse

TModel = TypeVar("TModel", bound=BaseModel)


async def get_enveloped(
    *,
    endpoint: str,
    transport: Transport,
    model: type[TModel],
    params: Mapping[str, str] | None = None,
) -> ApiResponse[TModel]:
    """GET *endpoint* and parse its body as ``ApiResponse[model]``.

    Non-2xx statuses produce ``success=False`` regardless of the body.

    Raises
    ------
    WeeloApiError
        The body does not match the envelope or the payload model.
    WeeloTransportError
        Propagated from the transport (network, timeout, invalid JSON).
    """
    status, body = await transport.get_json(endpoint, params)
    try:
        envelope = ApiResponse[model].model_validate(body)  # type: ignore[valid-type]
    except ValidationError as exc:
        raise WeeloApiError(
            f"{endpoint} returned a malformed payload ({exc.error_count()} validation errors)",
            code="invalid_payload",
            http_status=status,
            endpoint=endpoint,
        ) from exc

    update: dict[str, object] = {"http_status": status}
    if not 200 <= status < 300:
        update["success"] = False
        if envelope.message is None:
            update["message"] = f"Request failed (HTTP {status})"
    return envelope.model_copy(update=update)
