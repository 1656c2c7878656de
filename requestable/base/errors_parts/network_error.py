"""
Structured network error exception type.

Every failure a layer raises on purpose is a `NetworkError` tagged with an
`ErrorKind`. Retry, fallback and authentication policy only ever inspect
this type; anything else is treated as a foreign error and passed through.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kind import ErrorKind


@dataclass(eq=False)
class NetworkError(Exception):
    """Represents a typed request failure.

    Attributes:
        kind: :class:`ErrorKind` classification for the failure.
        message: Human-readable error message suitable for logging.
        status_code: HTTP status for ``HTTP_ERROR`` and ``UNAUTHORIZED``
            (always 401 for the latter); ``None`` for the other kinds.
    """

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining kind, status and message."""
        if self.status_code is not None:
            return f"{self.kind.value}({self.status_code}): {self.message}"
        return f"{self.kind.value}: {self.message}"

    @classmethod
    def invalid_url(cls, url: str) -> "NetworkError":
        return cls(ErrorKind.INVALID_URL, f"Invalid URL: {url}")

    @classmethod
    def no_data(cls) -> "NetworkError":
        return cls(ErrorKind.NO_DATA, "No data received")

    @classmethod
    def decoding_error(cls, message: str) -> "NetworkError":
        return cls(ErrorKind.DECODING_ERROR, f"Decoding error: {message}")

    @classmethod
    def http_error(cls, status_code: int) -> "NetworkError":
        return cls(ErrorKind.HTTP_ERROR, f"HTTP error: {status_code}", status_code)

    @classmethod
    def unauthorized(cls) -> "NetworkError":
        return cls(ErrorKind.UNAUTHORIZED, "Unauthorized", 401)

    @classmethod
    def custom(cls, message: str) -> "NetworkError":
        return cls(ErrorKind.CUSTOM, message)

    @classmethod
    def timeout(cls) -> "NetworkError":
        return cls(ErrorKind.TIMEOUT, "Request timed out")

    @classmethod
    def network_failure(cls, message: str) -> "NetworkError":
        return cls(ErrorKind.NETWORK_FAILURE, f"Network failure: {message}")


__all__ = ["NetworkError"]
