"""Observable value with replay-on-subscribe semantics."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateFlow(Generic[T]):
    """Holds the latest value and pushes every change to subscribers.

    Subscribers receive the current value on subscribe and then each
    published value, in publication order. A failing subscriber is
    logged and does not prevent delivery to the others.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def publish(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            self._deliver(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register *callback* and return a function that unregisters it."""
        self._subscribers.append(callback)
        self._deliver(callback, self._value)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    @staticmethod
    def _deliver(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            _logger.debug("StateFlow subscriber failed", exc_info=True)
