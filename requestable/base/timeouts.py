"""Timeout configuration for the HTTP transport.

Timeouts belong to the transport, never to the policy decorators: a timed-out
call surfaces as a typed ``TIMEOUT`` error and the decorators treat it like
any other typed failure.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again whenever the relevant variables change. Supported
    environment variables (all optional):
        REQUESTABLE_HTTP_TIMEOUT_SECONDS
        REQUESTABLE_CONNECT_TIMEOUT_SECONDS

Values that are unset, not numeric, or not positive fall back to defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

from ..config.defaults import TRANSPORT_DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Per-request budget applied to read, write and
            pool acquisition.
        connect_timeout_seconds: Connection establishment budget; defaults to
            the request budget when unset.
    """

    http_timeout_seconds: float = TRANSPORT_DEFAULT_HTTP_TIMEOUT
    connect_timeout_seconds: float | None = None

    def as_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds or self.http_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("REQUESTABLE_HTTP_TIMEOUT_SECONDS", ""),
            os.getenv("REQUESTABLE_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    http = _parse_env_float("REQUESTABLE_HTTP_TIMEOUT_SECONDS", TRANSPORT_DEFAULT_HTTP_TIMEOUT)
    connect = _parse_env_float("REQUESTABLE_CONNECT_TIMEOUT_SECONDS", None)
    _CACHED = TimeoutConfig(http_timeout_seconds=float(http), connect_timeout_seconds=connect)
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
