"""Helpers for safe debug logging.

Gateway traffic carries bearer tokens, OTPs and the phone numbers of
customers and drivers. Request/response traces pass through
:func:`redact_for_log` before they are emitted at DEBUG level:

* credential fields are replaced with ``<redacted>``;
* phone fields keep only their last four digits, so a trace still tells
  two contacts apart;
* ``Bearer ...`` credentials embedded in free text are masked;
* long strings are truncated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

_CREDENTIAL_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "accesstoken",
        "refreshtoken",
        "token",
        "fcmtoken",
        "cookie",
        "otp",
    }
)

_CONTACT_KEYS: frozenset[str] = frozenset(
    {
        "phone",
        "phonenumber",
        "mobile",
        "mobilenumber",
        "customerphone",
        "driverphone",
    }
)

_BEARER_RE = re.compile(r"(?i)\bbearer\s+[\w.~+/=-]+")

_MAX_DEPTH = 20


def _field_key(key: Any) -> str:
    """``customer_phone``, ``customer-phone`` and ``customerPhone`` compare equal."""
    return re.sub(r"[_\-\s]", "", str(key)).lower()


def mask_phone(value: Any) -> str:
    """Keep the last four digits of a phone number: ``+919812345678`` -> ``********5678``."""
    digits = re.sub(r"\D", "", str(value))
    if len(digits) <= 4:
        return REDACTED
    return "*" * (len(digits) - 4) + digits[-4:]


def _redact_text(text: str, max_string: int) -> str:
    text = _BEARER_RE.sub(f"Bearer {REDACTED}", text)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def _redact_field(key: str, value: Any, max_string: int, depth: int) -> Any:
    normalized = _field_key(key)
    if normalized in _CREDENTIAL_KEYS:
        return REDACTED
    if normalized in _CONTACT_KEYS and value is not None:
        return mask_phone(value)
    return redact_for_log(value, max_string=max_string, _depth=depth + 1)


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    match value:
        case None | bool() | int() | float():
            return value
        case str():
            return _redact_text(value, max_string)
        case bytes() | bytearray():
            return f"<bytes:{len(value)}b>"
        case Mapping():
            return {str(k): _redact_field(str(k), v, max_string, _depth) for k, v in value.items()}
        case Sequence():
            return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
        case _:
            return repr(value)
