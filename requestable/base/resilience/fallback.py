"""Primary/secondary switching for the request contract.

Purpose
-------
``FallbackDecorator`` sends every call to a primary requestable and, when the
primary fails with a qualifying typed error, re-issues the identical call
against a secondary requestable exactly once.

Fallback semantics
------------------
- The primary is invoked exactly once per call; the secondary at most once.
- Qualifying errors are decided by ``is_policy_eligible`` against
  ``FallbackConfig.fallback_kinds``: foreign exceptions, kinds outside the
  set, and HTTP errors below 500 surface the primary's error unchanged.
- The secondary's outcome is final. Its errors are propagated verbatim and
  are neither retried nor escalated here; stack a ``RetryDecorator`` around
  either side for that.

Timeout strategy
----------------
No waits are introduced. Timeouts surface from the transports as typed
``TIMEOUT`` errors and are treated like any other kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ...config.defaults import FALLBACK_DEFAULT_KINDS
from ..errors import ErrorKind, NetworkError, is_policy_eligible
from ..interfaces import NetworkRequestable
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import HTTPMethod

_logger = get_logger("requestable.fallback")


@dataclass(frozen=True)
class FallbackConfig:
    """Error kinds that trigger the switch to the secondary requestable."""

    fallback_kinds: frozenset[ErrorKind] = frozenset(ErrorKind(k) for k in FALLBACK_DEFAULT_KINDS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fallback_kinds", frozenset(self.fallback_kinds))


DEFAULT_FALLBACK_CONFIG = FallbackConfig()


class FallbackDecorator:
    """Route a call to ``secondary`` after a qualifying failure of ``primary``."""

    def __init__(
        self,
        primary: NetworkRequestable,
        secondary: NetworkRequestable,
        config: FallbackConfig = DEFAULT_FALLBACK_CONFIG,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._config = config

    @property
    def config(self) -> FallbackConfig:
        return self._config

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        try:
            return await self._primary.request(endpoint, method, body, response_hint, headers)
        except NetworkError as e:
            if not is_policy_eligible(e, self._config.fallback_kinds):
                raise
            normalized_log_event(
                _logger,
                "fallback.switch",
                LogContext.for_request(endpoint, method, layer="fallback"),
                phase="switch",
                error_code=e.kind.value,
                status_code=e.status_code,
            )
        return await self._secondary.request(endpoint, method, body, response_hint, headers)


def with_fallback(
    primary: NetworkRequestable,
    fallback_provider: Callable[[], NetworkRequestable],
    config: FallbackConfig = DEFAULT_FALLBACK_CONFIG,
) -> FallbackDecorator:
    """Wrap ``primary`` with a secondary obtained once from ``fallback_provider``."""
    return FallbackDecorator(primary, fallback_provider(), config)


__all__ = [
    "FallbackConfig",
    "DEFAULT_FALLBACK_CONFIG",
    "FallbackDecorator",
    "with_fallback",
]
