"""Deterministic test doubles for the request contract and the cache.

Purpose
-------
Exercise decorator stacks without network traffic. ``MockRequestable``
answers from registered responses, errors or sequences and records every call
it receives; ``MockCache`` is a plain dictionary cache that records every
operation so tests can assert on lookups (misses included) and stores.

Matching
--------
Registrations are keyed the same way as the cache: method, endpoint and the
canonical body. For one key, a pending sequence item wins over a registered
error, which wins over a registered response. Unmatched calls raise
``LookupError``, which the policy layers treat as a foreign error.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterable, List, Mapping, Optional

from ..base.cache_keys import generate_cache_key
from ..base.models import HTTPMethod, RequestDescriptor


class MockRequestable:
    """``NetworkRequestable`` returning canned outcomes and recording calls."""

    def __init__(self) -> None:
        self._responses: Dict[str, Any] = {}
        self._errors: Dict[str, BaseException] = {}
        self._sequences: Dict[str, Deque[Any]] = {}
        self._history: List[RequestDescriptor] = []

    def mock_response(
        self,
        endpoint: str,
        method: HTTPMethod,
        response: Any,
        body: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._responses[generate_cache_key(endpoint, method, body)] = response

    def mock_error(
        self,
        endpoint: str,
        method: HTTPMethod,
        error: BaseException,
        body: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._errors[generate_cache_key(endpoint, method, body)] = error

    def mock_response_sequence(
        self,
        endpoint: str,
        method: HTTPMethod,
        sequence: Iterable[Any],
        body: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Queue outcomes consumed one per call; exception items are raised.

        Once the sequence is drained, calls fall back to registered errors or
        responses for the same key.
        """
        self._sequences[generate_cache_key(endpoint, method, body)] = deque(sequence)

    def reset(self) -> None:
        self._responses.clear()
        self._errors.clear()
        self._sequences.clear()
        self._history.clear()

    @property
    def request_history(self) -> List[RequestDescriptor]:
        return list(self._history)

    @property
    def call_count(self) -> int:
        return len(self._history)

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        self._history.append(
            RequestDescriptor(
                endpoint=endpoint,
                method=HTTPMethod(method),
                body=body,
                headers=dict(headers or {}),
                response_hint=response_hint,
            )
        )
        key = generate_cache_key(endpoint, method, body)

        pending = self._sequences.get(key)
        if pending:
            item = pending.popleft()
            if isinstance(item, BaseException):
                raise item
            return item

        if key in self._errors:
            raise self._errors[key]
        if key in self._responses:
            return self._responses[key]
        raise LookupError(f"No mock found for {HTTPMethod(method).value} {endpoint}")


@dataclass(frozen=True)
class CacheSet:
    """One recorded ``MockCache.set`` call."""

    key: str
    value: Any
    ttl: Optional[float]


class MockCache:
    """Dictionary ``Cache`` recording gets, sets, removes and clears. No expiry."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self.get_history: List[str] = []
        self.set_history: List[CacheSet] = []
        self.remove_history: List[str] = []
        self.clear_count = 0

    def get(self, key: str) -> Any:
        self.get_history.append(key)
        return self._data.get(key)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._data[key] = value
        self.set_history.append(CacheSet(key=key, value=value, ttl=ttl))

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
        self.remove_history.append(key)

    def clear(self) -> None:
        self._data.clear()
        self.clear_count += 1

    def reset_history(self) -> None:
        self.get_history.clear()
        self.set_history.clear()
        self.remove_history.clear()
        self.clear_count = 0


__all__ = ["MockRequestable", "MockCache", "CacheSet"]
