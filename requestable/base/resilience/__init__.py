"""Resilience decorators: caching, retry with backoff, primary/secondary fallback."""

from .cache import CacheDecorator, cached
from .fallback import DEFAULT_FALLBACK_CONFIG, FallbackConfig, FallbackDecorator, with_fallback
from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, RetryDecorator, retrying

__all__ = [
    "CacheDecorator",
    "cached",
    "FallbackConfig",
    "FallbackDecorator",
    "DEFAULT_FALLBACK_CONFIG",
    "with_fallback",
    "RetryConfig",
    "RetryDecorator",
    "DEFAULT_RETRY_CONFIG",
    "retrying",
]
