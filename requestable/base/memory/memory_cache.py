"""In-memory implementation of the ``Cache`` protocol.

Reference backend for the cache decorator. Entries expire lazily: an entry
past its deadline is dropped the next time it is read. There is no
background sweeper.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..logging import get_logger

_logger = get_logger("requestable.cache")


@dataclass(frozen=True)
class CacheEntry:
    """Stored value plus its absolute expiry on the cache clock (``None`` = never)."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now > self.expires_at


class MemoryCache:
    """Dictionary-backed cache with optional TTL and size bound.

    Parameters
    ----------
    clock:
        Zero-argument callable returning seconds; defaults to
        ``time.monotonic``. Tests inject a fake clock to simulate expiry.
    max_entries:
        Optional bound on stored entries. When exceeded, the oldest inserted
        entry is evicted first.

    Thread safety: every operation holds an internal re-entrant lock, so one
    instance can be shared by several request stacks. A ``get`` followed by a
    ``set`` is still two separate operations.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._clock = clock
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                _logger.debug("cache entry expired: %s", key)
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store ``value``; a falsy ``ttl`` (``None`` or ``0``) never expires."""
        expires_at = self._clock() + ttl if ttl else None
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Does not apply lazy expiry; use get() for a live lookup.
        with self._lock:
            return key in self._entries


__all__ = ["CacheEntry", "MemoryCache"]
