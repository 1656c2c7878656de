from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ...config.defaults import CACHE_DEFAULT_METHODS
from ..cache_keys import generate_cache_key
from ..interfaces import Cache, NetworkRequestable
from ..logging import get_logger
from ..memory import MemoryCache
from ..models import HTTPMethod

_logger = get_logger("requestable.cache")

DEFAULT_CACHE_METHODS = frozenset(HTTPMethod(m) for m in CACHE_DEFAULT_METHODS)


class CacheDecorator:
    """Serve repeated requests for cacheable methods from a ``Cache``.

    A hit returns the stored value without calling the wrapped requestable.
    A miss calls through and stores a successful result under the configured
    TTL; failures are propagated and never stored. Concurrent misses for the
    same key are not coalesced: each calls through and the last store wins.
    """

    def __init__(
        self,
        wrapped: NetworkRequestable,
        cache: Optional[Cache] = None,
        ttl: Optional[float] = None,
        cache_methods: Iterable[HTTPMethod] = DEFAULT_CACHE_METHODS,
    ) -> None:
        self._wrapped = wrapped
        self._cache: Cache = cache if cache is not None else MemoryCache()
        self._ttl = ttl
        self._cache_methods = frozenset(HTTPMethod(m) for m in cache_methods)

    @property
    def cache(self) -> Cache:
        return self._cache

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        if HTTPMethod(method) not in self._cache_methods:
            return await self._wrapped.request(endpoint, method, body, response_hint, headers)

        key = generate_cache_key(endpoint, method, body)
        cached = self._cache.get(key)
        if cached is not None:
            _logger.debug("cache hit: %s", key)
            return cached
        _logger.debug("cache miss: %s", key)

        response = await self._wrapped.request(endpoint, method, body, response_hint, headers)
        self._cache.set(key, response, self._ttl)
        return response

    def clear_cache(self) -> None:
        """Drop every entry in the backing cache."""
        self._cache.clear()

    def invalidate(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Remove the single entry addressed by ``(endpoint, method, body)``."""
        self._cache.remove(generate_cache_key(endpoint, method, body))


def cached(
    requestable: NetworkRequestable,
    cache: Optional[Cache] = None,
    ttl: Optional[float] = None,
    cache_methods: Iterable[HTTPMethod] = DEFAULT_CACHE_METHODS,
) -> CacheDecorator:
    """Wrap ``requestable`` with response caching (GET only by default)."""
    return CacheDecorator(requestable, cache, ttl, cache_methods)


__all__ = ["CacheDecorator", "DEFAULT_CACHE_METHODS", "cached"]
