"""Request stack composition helper.

Purpose
-------
Assemble the canonical decorator order around a transport in one call:

    authenticated(cached(retrying(with_fallback(transport, fallback))))

Layers whose inputs are absent are skipped, so the helper covers anything
from a bare transport to the full stack. Callers who need a different order
compose the decorators directly; every layer accepts any
``NetworkRequestable``.

Semantics
---------
- fallback: included when ``fallback`` is given.
- retry: included when ``retry_config`` is given (pass ``DEFAULT_RETRY_CONFIG``
  or ``load_retry_config()`` for the configured defaults).
- cache: included when ``cache`` or ``cache_ttl`` is given.
- auth: included when ``token_provider`` is given; ``needs_auth`` defaults
  to requiring authentication for every endpoint.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..config.defaults import AUTH_DEFAULT_HEADER
from .auth.authenticated import AuthenticatedDecorator, TokenProvider
from .interfaces import Cache, NetworkRequestable
from .models import HTTPMethod
from .resilience.cache import DEFAULT_CACHE_METHODS, CacheDecorator
from .resilience.fallback import DEFAULT_FALLBACK_CONFIG, FallbackConfig, FallbackDecorator
from .resilience.retry import RetryConfig, RetryDecorator


def build_requestable(
    transport: NetworkRequestable,
    *,
    fallback: Optional[NetworkRequestable] = None,
    fallback_config: FallbackConfig = DEFAULT_FALLBACK_CONFIG,
    retry_config: Optional[RetryConfig] = None,
    cache: Optional[Cache] = None,
    cache_ttl: Optional[float] = None,
    cache_methods: Iterable[HTTPMethod] = DEFAULT_CACHE_METHODS,
    token_provider: Optional[TokenProvider] = None,
    needs_auth: Optional[Callable[[str], bool]] = None,
    auth_header: str = AUTH_DEFAULT_HEADER,
) -> NetworkRequestable:
    """Return ``transport`` wrapped in the requested policy layers.

    Parameters
    ----------
    transport:
        Innermost requestable (usually ``HttpxRequestable``).
    fallback:
        Secondary requestable used after qualifying primary failures.
    retry_config:
        Retry policy; the retry layer sits outside the fallback switch, so a
        call retries the whole primary-then-secondary sequence.
    cache, cache_ttl, cache_methods:
        Cache backend (a fresh ``MemoryCache`` when only a TTL is given), TTL
        in seconds, and the methods eligible for caching.
    token_provider, needs_auth, auth_header:
        Credential source, per-endpoint predicate and header name.
    """
    stack: NetworkRequestable = transport
    if fallback is not None:
        stack = FallbackDecorator(stack, fallback, fallback_config)
    if retry_config is not None:
        stack = RetryDecorator(stack, retry_config)
    if cache is not None or cache_ttl is not None:
        stack = CacheDecorator(stack, cache, cache_ttl, cache_methods)
    if token_provider is not None:
        if needs_auth is None:
            stack = AuthenticatedDecorator(stack, token_provider, header_name=auth_header)
        else:
            stack = AuthenticatedDecorator(stack, token_provider, needs_auth, auth_header)
    return stack


__all__ = ["build_requestable"]
