"""Bearer credential injection for the request contract.

Purpose
-------
``AuthenticatedDecorator`` adds an ``Authorization: Bearer <token>`` header
(or a custom header name) to calls whose endpoint requires authentication,
and rejects them locally with ``UNAUTHORIZED`` when no token is available.

Semantics
---------
- ``needs_auth(endpoint)`` is evaluated first. When it returns ``False`` the
  token provider is not consulted and headers pass through untouched.
- The token provider may be a plain callable or return an awaitable, so
  tokens can come from an async refresh routine.
- A token already starting with ``"Bearer "`` is used verbatim; otherwise the
  prefix is added.
- The auth header replaces any caller header with the same name compared
  case-insensitively, so the outgoing mapping never carries two variants.
- A missing token fails before the wrapped requestable is called. This layer
  never retries; an outer ``RetryDecorator`` sees the ``UNAUTHORIZED`` error
  and decides according to its own kinds.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from ...config.defaults import AUTH_BEARER_PREFIX, AUTH_DEFAULT_HEADER
from ..errors import NetworkError
from ..interfaces import NetworkRequestable
from ..logging import LogContext, get_logger, log_event
from ..models import HTTPMethod

_logger = get_logger("requestable.auth")

TokenProvider = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


def _always(_endpoint: str) -> bool:
    return True


def bearer_value(token: str) -> str:
    """Return ``token`` with the bearer scheme prefix applied exactly once."""
    return token if token.startswith(AUTH_BEARER_PREFIX) else f"{AUTH_BEARER_PREFIX}{token}"


def merge_header(headers: Optional[Mapping[str, str]], name: str, value: str) -> Dict[str, str]:
    """Copy ``headers`` and set ``name`` to ``value``, dropping case variants."""
    lowered = name.lower()
    merged = {k: v for k, v in (headers or {}).items() if k.lower() != lowered}
    merged[name] = value
    return merged


class AuthenticatedDecorator:
    """Inject a bearer credential into requests that need one."""

    def __init__(
        self,
        wrapped: NetworkRequestable,
        token_provider: TokenProvider,
        needs_auth: Callable[[str], bool] = _always,
        header_name: str = AUTH_DEFAULT_HEADER,
    ) -> None:
        self._wrapped = wrapped
        self._token_provider = token_provider
        self._needs_auth = needs_auth
        self._header_name = header_name

    async def _resolve_token(self) -> Optional[str]:
        token = self._token_provider()
        if inspect.isawaitable(token):
            token = await token
        return token

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        if not self._needs_auth(endpoint):
            return await self._wrapped.request(endpoint, method, body, response_hint, headers)

        token = await self._resolve_token()
        if not token:
            log_event(
                _logger,
                "auth.missing_token",
                LogContext.for_request(endpoint, method, layer="auth"),
                header=self._header_name,
            )
            raise NetworkError.unauthorized()

        auth_headers = merge_header(headers, self._header_name, bearer_value(token))
        return await self._wrapped.request(endpoint, method, body, response_hint, auth_headers)


def authenticated(
    requestable: NetworkRequestable,
    token_provider: TokenProvider,
    needs_auth: Callable[[str], bool] = _always,
    header_name: str = AUTH_DEFAULT_HEADER,
) -> AuthenticatedDecorator:
    """Wrap ``requestable`` with bearer credential injection."""
    return AuthenticatedDecorator(requestable, token_provider, needs_auth, header_name)


__all__ = ["AuthenticatedDecorator", "authenticated", "bearer_value", "merge_header", "TokenProvider"]
