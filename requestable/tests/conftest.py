"""Pytest configuration for the request stack test suite.

Provides deterministic time (a settable clock for cache expiry and a
recording sleep for retry backoff), the recording mock doubles, and a
session finalizer that closes pooled ``httpx`` clients.
"""

from __future__ import annotations

import asyncio
from typing import Iterator, List

import pytest

from requestable.mock import MockCache, MockRequestable


class FakeClock:
    """Monotonic stand-in whose current time is advanced by tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records requested delays without waiting."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def mock_requestable() -> Iterator[MockRequestable]:
    requestable = MockRequestable()
    yield requestable
    requestable.reset()


@pytest.fixture()
def secondary_requestable() -> Iterator[MockRequestable]:
    requestable = MockRequestable()
    yield requestable
    requestable.reset()


@pytest.fixture()
def mock_cache() -> MockCache:
    return MockCache()


@pytest.fixture(autouse=True)
def clean_policy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment overrides from leaking into policy defaults."""

    for name in (
        "REQUESTABLE_CONFIG_FILE",
        "REQUESTABLE_RETRY_MAX_ATTEMPTS",
        "REQUESTABLE_RETRY_INITIAL_DELAY",
        "REQUESTABLE_RETRY_BACKOFF_FACTOR",
        "REQUESTABLE_RETRY_MAX_DELAY",
        "REQUESTABLE_RETRY_KINDS",
        "REQUESTABLE_FALLBACK_KINDS",
        "REQUESTABLE_CACHE_TTL",
        "REQUESTABLE_HTTP_TIMEOUT_SECONDS",
        "REQUESTABLE_CONNECT_TIMEOUT_SECONDS",
        "REQUESTABLE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    """Close any pooled clients a test left behind."""

    from requestable.base.http import close_all_clients

    yield
    asyncio.run(close_all_clients())
