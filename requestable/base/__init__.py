"""
Request Stack Base Package

Exports the layer-agnostic contracts, the typed error taxonomy, the policy
decorators, the cache backend, the ``httpx`` transport and the composition
helper.

Layout:
- Interfaces: the request contract and the cache backend contract
- Models: HTTP verbs and the per-call request descriptor
- Resilience: cache, retry and fallback decorators
- Auth: bearer credential injection
- HTTP: pooled async clients and the transport
"""

from .auth import AuthenticatedDecorator, authenticated
from .cache_keys import generate_cache_key
from .errors import ErrorKind, NetworkError, classify_exception, is_policy_eligible
from .factory import build_requestable
from .http import HttpxRequestable, close_all_clients, get_httpx_client
from .interfaces import Cache, NetworkRequestable
from .memory import CacheEntry, MemoryCache
from .models import HTTPMethod, RequestDescriptor
from .resilience import (
    DEFAULT_FALLBACK_CONFIG,
    DEFAULT_RETRY_CONFIG,
    CacheDecorator,
    FallbackConfig,
    FallbackDecorator,
    RetryConfig,
    RetryDecorator,
    cached,
    retrying,
    with_fallback,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Contracts
    "NetworkRequestable",
    "Cache",
    # Models
    "HTTPMethod",
    "RequestDescriptor",
    # Errors
    "ErrorKind",
    "NetworkError",
    "classify_exception",
    "is_policy_eligible",
    # Cache
    "generate_cache_key",
    "CacheEntry",
    "MemoryCache",
    "CacheDecorator",
    "cached",
    # Retry / fallback
    "RetryConfig",
    "RetryDecorator",
    "DEFAULT_RETRY_CONFIG",
    "retrying",
    "FallbackConfig",
    "FallbackDecorator",
    "DEFAULT_FALLBACK_CONFIG",
    "with_fallback",
    # Auth
    "AuthenticatedDecorator",
    "authenticated",
    # Transport
    "HttpxRequestable",
    "get_httpx_client",
    "close_all_clients",
    "TimeoutConfig",
    "get_timeout_config",
    # Composition
    "build_requestable",
]
