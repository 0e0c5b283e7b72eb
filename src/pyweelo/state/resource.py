"""Loading / Success / Error state for a fetchable resource.

Exactly one variant holds at a time. Within one load cycle the only
transitions are ``Loading -> Success`` and ``Loading -> Error``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True, slots=True)
class Error:
    message: str


ResourceState: TypeAlias = Loading | Success[T] | Error
