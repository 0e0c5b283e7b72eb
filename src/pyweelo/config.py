"""Client configuration for pyweelo."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyweelo._constants import API_PREFIX, BASE_URL, DEFAULT_POLL_INTERVAL, DEFAULT_REQUEST_TIMEOUT
from pyweelo.exceptions import WeeloConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise WeeloConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WeeloConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend host. Defaults to the production API.
    api_prefix : str
        Path prefix prepended to every endpoint.
    access_token : str or None
        Bearer token sent as ``Authorization``. Obtaining and refreshing
        it is the caller's concern.
    poll_interval : float
        Seconds between live polling ticks (trip tracking and assignment
        heartbeat). Defaults to 5 seconds.
    request_timeout : float
        Total seconds allowed for a single gateway call. A timed-out call
        is reported like any other transport failure.
    cache_ttl : float or None
        Seconds a cached resource stays valid. ``None`` keeps entries
        until they are refreshed or invalidated.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    api_prefix: str = API_PREFIX
    access_token: str | None = dataclasses.field(default=None, repr=False)
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    cache_ttl: float | None = None
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise WeeloConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise WeeloConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.cache_ttl is not None and self.cache_ttl < 0:
            raise WeeloConfigError(f"cache_ttl must not be negative, got {self.cache_ttl}")

    @property
    def api_root(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.api_prefix}"

    @classmethod
    def from_env(cls, **overrides: Any) -> WeeloConfig:
        """Create configuration from environment variables.

        Reads ``WEELO_BASE_URL``, ``WEELO_API_PREFIX``,
        ``WEELO_ACCESS_TOKEN``, ``WEELO_POLL_INTERVAL``,
        ``WEELO_REQUEST_TIMEOUT``, ``WEELO_CACHE_TTL`` and
        ``WEELO_API_TRACE_ENABLED``. Explicit keyword arguments override
        environment values.

        Raises
        ------
        WeeloConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "WEELO_BASE_URL": "base_url",
            "WEELO_API_PREFIX": "api_prefix",
            "WEELO_ACCESS_TOKEN": "access_token",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "WEELO_POLL_INTERVAL": "poll_interval",
            "WEELO_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        # An empty WEELO_CACHE_TTL means "never expire".
        ttl_env = env.get("WEELO_CACHE_TTL")
        if ttl_env is not None and "cache_ttl" not in overrides:
            config_kwargs["cache_ttl"] = _env_float("WEELO_CACHE_TTL", ttl_env) if ttl_env.strip() else None

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("WEELO_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
