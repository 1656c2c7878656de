"""Cache Protocol (single-class module).

Pluggable backend contract used by the cache decorator.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Cache(Protocol):
    """Key/value store with optional per-entry time-to-live.

    Implementations must tolerate concurrent use from independent requests.
    A get followed by a set is not required to be atomic.
    """

    def get(self, key: str) -> Any:  # pragma: no cover - interface
        """Return the stored value, or ``None`` when absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:  # pragma: no cover - interface
        """Store ``value`` under ``key``; ``ttl`` is in seconds, ``None`` never expires."""
        ...

    def remove(self, key: str) -> None:  # pragma: no cover - interface
        """Remove ``key`` if present."""
        ...

    def clear(self) -> None:  # pragma: no cover - interface
        """Remove every entry."""
        ...
