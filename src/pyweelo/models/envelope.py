"""Uniform response envelope returned by every gateway call."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{success, data?, message?, errorCode?, httpStatus?}``.

    ``http_status`` is filled in by the transport layer, not by the
    backend body.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    success: bool = False
    data: T | None = None
    message: str | None = None
    error_code: str | None = None
    http_status: int | None = None
