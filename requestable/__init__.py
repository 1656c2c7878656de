"""requestable package

Composable request-policy layer over an asynchronous HTTP transport.

Purpose:
    Give API clients one narrow contract (``NetworkRequestable``) and a set
    of decorators that add authentication, response caching, retry with
    exponential backoff and fallback to a secondary source. Every layer wraps
    any other layer, so stacks are assembled by nesting.

Public API (re-exported):
    - Version: ``__version__``
    - Contracts: :class:`NetworkRequestable`, :class:`Cache`
    - Errors: :class:`NetworkError`, :class:`ErrorKind`
    - Decorators: :class:`AuthenticatedDecorator`, :class:`CacheDecorator`,
      :class:`RetryDecorator`, :class:`FallbackDecorator`
    - Transport: :class:`HttpxRequestable`
    - Composition: :func:`build_requestable`
"""

from .base import (
    DEFAULT_FALLBACK_CONFIG,
    DEFAULT_RETRY_CONFIG,
    AuthenticatedDecorator,
    Cache,
    CacheDecorator,
    CacheEntry,
    ErrorKind,
    FallbackConfig,
    FallbackDecorator,
    HTTPMethod,
    HttpxRequestable,
    MemoryCache,
    NetworkError,
    NetworkRequestable,
    RequestDescriptor,
    RetryConfig,
    RetryDecorator,
    authenticated,
    build_requestable,
    cached,
    close_all_clients,
    generate_cache_key,
    retrying,
    with_fallback,
)
from .config import load_fallback_config, load_retry_config

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Contracts and models
    "NetworkRequestable",
    "Cache",
    "HTTPMethod",
    "RequestDescriptor",
    # Errors
    "NetworkError",
    "ErrorKind",
    # Cache
    "generate_cache_key",
    "CacheEntry",
    "MemoryCache",
    "CacheDecorator",
    "cached",
    # Resilience
    "RetryConfig",
    "RetryDecorator",
    "DEFAULT_RETRY_CONFIG",
    "retrying",
    "FallbackConfig",
    "FallbackDecorator",
    "DEFAULT_FALLBACK_CONFIG",
    "with_fallback",
    "load_retry_config",
    "load_fallback_config",
    # Auth
    "AuthenticatedDecorator",
    "authenticated",
    # Transport
    "HttpxRequestable",
    "close_all_clients",
    # Composition
    "build_requestable",
]
