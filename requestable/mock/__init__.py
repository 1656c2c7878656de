"""Mock package exposing deterministic request and cache doubles for tests."""

from .client import CacheSet, MockCache, MockRequestable

__all__ = ["MockRequestable", "MockCache", "CacheSet"]
