"""
Error classification helpers.

Two concerns live here:

- ``is_policy_eligible`` decides whether a raised exception qualifies for
  retry or fallback under a configured set of kinds. Both decorators share it
  so their filtering rules cannot drift apart.
- ``classify_exception`` maps ``httpx`` failures onto the typed taxonomy for
  the transport boundary.
"""
from __future__ import annotations

import asyncio
from typing import AbstractSet, Optional

import httpx

from .error_kind import ErrorKind
from .network_error import NetworkError

# Client errors are never worth repeating against any endpoint.
SERVER_ERROR_THRESHOLD = 500


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def is_client_error(error: NetworkError) -> bool:
    """Return True for an ``HTTP_ERROR`` whose status is below 500."""
    return (
        error.kind is ErrorKind.HTTP_ERROR
        and error.status_code is not None
        and error.status_code < SERVER_ERROR_THRESHOLD
    )


def is_policy_eligible(exc: BaseException, kinds: AbstractSet[ErrorKind]) -> bool:
    """Return True when ``exc`` may be retried or re-routed under ``kinds``.

    Rules, in order:
        1. Foreign (non-``NetworkError``) exceptions are never eligible.
        2. The error kind must be a member of ``kinds``.
        3. ``HTTP_ERROR`` with a status below 500 is never eligible, even when
           ``HTTP_ERROR`` is in ``kinds``.
    """
    if not isinstance(exc, NetworkError):
        return False
    if exc.kind not in kinds:
        return False
    return not is_client_error(exc)


def error_for_status(status_code: int) -> NetworkError:
    """Build the typed error for a non-success HTTP status."""
    if status_code == 401:
        return NetworkError.unauthorized()
    return NetworkError.http_error(status_code)


def classify_exception(exc: BaseException) -> NetworkError:
    """Map an exception raised during a transport call to a :class:`NetworkError`.

    Precedence:
        1. NetworkError passthrough.
        2. Timeout exceptions (``httpx`` and asyncio).
        3. Malformed or unsupported URLs.
        4. Remaining ``httpx`` transport failures.
        5. ``HTTPStatusError`` (or anything exposing a status) by status.
        6. ``CUSTOM`` with the exception text.
    """
    if isinstance(exc, NetworkError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError)):
        return NetworkError.timeout()
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return NetworkError.invalid_url(str(exc))
    if isinstance(exc, httpx.TransportError):
        return NetworkError.network_failure(str(exc) or type(exc).__name__)
    status = _extract_status(exc)
    if status is not None:
        return error_for_status(status)
    return NetworkError.custom(str(exc))


__all__ = [
    "SERVER_ERROR_THRESHOLD",
    "classify_exception",
    "error_for_status",
    "is_client_error",
    "is_policy_eligible",
    "_extract_status",
]
