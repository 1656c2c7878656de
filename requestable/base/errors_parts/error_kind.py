"""
Typed network error kinds (taxonomy).

Defines the `ErrorKind` enumeration carried by every `NetworkError`. Values
are uppercase string tags and are considered a stable public contract for
logging, configuration (env var lists) and policy sets.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories raised by transports and decorators."""

    INVALID_URL = "INVALID_URL"
    NO_DATA = "NO_DATA"
    DECODING_ERROR = "DECODING_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    CUSTOM = "CUSTOM"
    TIMEOUT = "TIMEOUT"
    NETWORK_FAILURE = "NETWORK_FAILURE"


__all__ = ["ErrorKind"]
