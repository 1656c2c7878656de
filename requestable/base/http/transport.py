"""``httpx`` implementation of the request contract.

Purpose:
    ``HttpxRequestable`` is the innermost layer of a stack: it turns a call to
    ``request`` into one HTTP exchange and maps every failure onto the typed
    ``NetworkError`` taxonomy the policy decorators understand.

Mapping:
    - 401 -> ``UNAUTHORIZED``; any other non-2xx -> ``HTTP_ERROR(status)``
    - timeouts -> ``TIMEOUT``; malformed/unsupported URLs -> ``INVALID_URL``
    - other transport failures (DNS, refused, reset) -> ``NETWORK_FAILURE``
    - empty non-JSON body -> ``NO_DATA``; undecodable JSON or a payload that
      does not match ``response_hint`` -> ``DECODING_ERROR``
    - anything unexpected -> ``CUSTOM`` (chained to the original exception)

Timeout strategy:
    Each call passes the transport's ``TimeoutConfig.as_httpx()``. The
    configuration comes from :func:`get_timeout_config`; a ``timeout_seconds``
    override replaces the request budget only, so a configured connect budget
    still applies (and otherwise falls back to the override).
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ...config.defaults import TRANSPORT_DEFAULT_HEADERS
from ..errors import NetworkError, classify_exception, error_for_status
from ..logging import LogContext, get_logger, log_event
from ..models import HTTPMethod
from ..timeouts import TimeoutConfig, get_timeout_config
from .client import get_httpx_client

_logger = get_logger("requestable.transport")

TRANSPORT_POOL_PURPOSE = "transport"


def _decode_payload(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError.decoding_error(str(exc)) from exc
    text = response.text
    if not text:
        raise NetworkError.no_data()
    try:
        return json.loads(text)
    except ValueError:
        return text


def _apply_hint(payload: Any, response_hint: Any) -> Any:
    if response_hint is None:
        return payload
    try:
        return TypeAdapter(response_hint).validate_python(payload)
    except ValidationError as exc:
        raise NetworkError.decoding_error(str(exc)) from exc


class HttpxRequestable:
    """Fundamental ``NetworkRequestable`` backed by an ``httpx.AsyncClient``.

    Parameters
    ----------
    base_url:
        Prefix for every endpoint; a trailing ``/`` is dropped.
    default_headers:
        Headers sent with every request, layered over JSON content
        negotiation defaults. Per-call headers win over both.
    timeout_seconds:
        Read, write and pool budget; defaults to the configured HTTP timeout.
        The connect budget comes from ``REQUESTABLE_CONNECT_TIMEOUT_SECONDS``
        when set, else it equals the request budget.
    client:
        Explicit client (tests pass one built on ``httpx.MockTransport``).
        When omitted a pooled client for the running event loop is used, so a
        transport can be reused across separate ``asyncio.run`` calls.
    """

    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self._default_headers: Dict[str, str] = {**TRANSPORT_DEFAULT_HEADERS, **(default_headers or {})}
        configured = get_timeout_config()
        self._timeouts = (
            TimeoutConfig(
                http_timeout_seconds=timeout_seconds,
                connect_timeout_seconds=configured.connect_timeout_seconds,
            )
            if timeout_seconds is not None
            else configured
        )
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeouts(self) -> TimeoutConfig:
        return self._timeouts

    def url_for(self, endpoint: str) -> str:
        normalized = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        return f"{self._base_url}{normalized}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, purpose=TRANSPORT_POOL_PURPOSE)

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        method = HTTPMethod(method)
        url = self.url_for(endpoint)
        ctx = LogContext.for_request(endpoint, method, layer="transport")
        send_body = body is not None and method.sends_body
        started = time.perf_counter()
        try:
            response = await self._get_client().request(
                method.value,
                url,
                headers={**self._default_headers, **(headers or {})},
                json=dict(body) if send_body else None,
                timeout=self._timeouts.as_httpx(),
            )
            log_event(
                _logger,
                "transport.request",
                ctx,
                level=logging.DEBUG,
                status_code=response.status_code,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            if not response.is_success:
                raise error_for_status(response.status_code)
            return _apply_hint(_decode_payload(response), response_hint)
        except NetworkError as e:
            log_event(_logger, "transport.error", ctx, level=logging.WARNING, error_code=e.kind.value, status_code=e.status_code)
            raise
        except Exception as e:  # noqa: BLE001 - mapped onto the typed taxonomy
            typed = classify_exception(e)
            log_event(_logger, "transport.error", ctx, level=logging.WARNING, error_code=typed.kind.value, detail=str(e))
            raise typed from e


__all__ = ["HttpxRequestable", "TRANSPORT_POOL_PURPOSE"]
