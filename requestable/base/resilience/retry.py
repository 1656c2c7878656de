from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Protocol

from ...config.defaults import (
    RETRY_DEFAULT_BACKOFF_FACTOR,
    RETRY_DEFAULT_INITIAL_DELAY,
    RETRY_DEFAULT_KINDS,
    RETRY_DEFAULT_MAX_ATTEMPTS,
    RETRY_DEFAULT_MAX_DELAY,
)
from ..errors import ErrorKind, NetworkError, is_policy_eligible
from ..interfaces import NetworkRequestable
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import HTTPMethod

_logger = get_logger("requestable.retry")

Sleep = Callable[[float], Awaitable[Any]]


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: NetworkError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = RETRY_DEFAULT_MAX_ATTEMPTS
    initial_delay: float = RETRY_DEFAULT_INITIAL_DELAY  # seconds
    backoff_factor: float = RETRY_DEFAULT_BACKOFF_FACTOR
    max_delay: float = RETRY_DEFAULT_MAX_DELAY  # seconds
    retryable_kinds: frozenset[ErrorKind] = frozenset(ErrorKind(k) for k in RETRY_DEFAULT_KINDS)
    attempt_logger: AttemptLogger | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must be >= initial_delay")
        # Accept any iterable of kinds while keeping the field hashable.
        object.__setattr__(self, "retryable_kinds", frozenset(self.retryable_kinds))

    def delays(self) -> Iterable[float]:
        """Yield the wait before each retry: initial, then multiplied and capped."""
        delay = self.initial_delay
        for _ in range(self.max_attempts - 1):
            yield delay
            delay = min(delay * self.backoff_factor, self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()


class RetryDecorator:
    """Re-invoke the wrapped requestable on retryable typed failures.

    - Retries only errors accepted by ``is_policy_eligible`` for the
      configured kinds (never foreign errors, never HTTP 4xx)
    - Waits ``initial_delay`` then multiplies by ``backoff_factor`` up to
      ``max_delay`` between attempts
    - Makes at most ``max_attempts`` calls in total and re-raises the last error
    """

    def __init__(
        self,
        wrapped: NetworkRequestable,
        config: RetryConfig = DEFAULT_RETRY_CONFIG,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._wrapped = wrapped
        self._config = config
        self._sleep = sleep

    @property
    def config(self) -> RetryConfig:
        return self._config

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        config = self._config
        # final attempt has delay None
        for attempt, delay in enumerate(list(config.delays()) + [None]):
            try:
                return await self._wrapped.request(endpoint, method, body, response_hint, headers)
            except NetworkError as e:
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=delay,
                        error=e,
                    )
                if not is_policy_eligible(e, config.retryable_kinds):
                    raise
                ctx = LogContext.for_request(endpoint, method, layer="retry")
                if delay is None:
                    normalized_log_event(
                        _logger,
                        "retry.exhausted",
                        ctx,
                        phase="exhausted",
                        attempt=attempt,
                        error_code=e.kind.value,
                        status_code=e.status_code,
                    )
                    raise
                normalized_log_event(
                    _logger,
                    "retry.attempt",
                    ctx,
                    phase="backoff",
                    attempt=attempt,
                    error_code=e.kind.value,
                    status_code=e.status_code,
                    delay=delay,
                )
                await self._sleep(delay)
        # Unreachable: the final attempt either returns or raises.
        raise RuntimeError("retry: reached terminal state without outcome")  # pragma: no cover


def retrying(
    requestable: NetworkRequestable,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    sleep: Sleep = asyncio.sleep,
) -> RetryDecorator:
    """Wrap ``requestable`` with the standardized retry policy."""
    return RetryDecorator(requestable, config, sleep=sleep)


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "RetryDecorator",
    "retrying",
]
