"""Relative-time formatting for timestamps shown in lists and cards.

Formatting never raises: input that cannot be read as a timestamp falls
back to a truncated form of the raw value.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pyweelo.normalize import to_datetime

#: Display format for timestamps a week old or more, e.g. ``Jan 05, 2026``.
ABSOLUTE_DATE_FORMAT = "%b %d, %Y"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY

_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_relative(timestamp: Any, now: datetime | None = None) -> str:
    """Format *timestamp* relative to *now*.

    Parameters
    ----------
    timestamp
        Aware or naive (UTC assumed) datetime, epoch seconds or
        milliseconds, or an ISO 8601 string.
    now
        Reference time; defaults to the current UTC time.

    Returns
    -------
    str
        ``"just now"`` under a minute (and for future timestamps),
        ``"N min ago"`` under an hour, ``"N hour(s) ago"`` under a day,
        ``"N day(s) ago"`` under a week, otherwise the absolute date.
        ``None`` reads ``"Recently"``; unreadable input returns its first
        10 characters.
    """
    if timestamp is None:
        return "Recently"
    moment = to_datetime(timestamp)
    if moment is None:
        return str(timestamp)[:10]

    reference = now if now is not None else datetime.now(UTC)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)

    seconds = int((reference - moment).total_seconds())
    if seconds < _MINUTE:
        return "just now"
    if seconds < _HOUR:
        return f"{seconds // _MINUTE} min ago"
    if seconds < _DAY:
        return f"{_plural(seconds // _HOUR, 'hour')} ago"
    if seconds < _WEEK:
        return f"{_plural(seconds // _DAY, 'day')} ago"
    return moment.strftime(ABSOLUTE_DATE_FORMAT)


def format_month_label(date_str: str) -> str:
    """``"2026-01-15"`` -> ``"Jan"``.

    Input without a ``-`` separator yields its first 3 characters; a
    non-numeric month reads as January and an out-of-range one as ``"???"``.
    """
    parts = date_str.split("-")
    if len(parts) < 2:
        return date_str[:3]
    try:
        month = int(parts[1])
    except ValueError:
        month = 1
    if not 1 <= month <= 12:
        return "???"
    return _MONTH_NAMES[month - 1]
