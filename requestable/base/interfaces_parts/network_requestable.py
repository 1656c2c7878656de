"""NetworkRequestable Protocol (single-class module).

Defines the one-operation contract shared by transports and every decorator.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from ..models_parts.http_method import HTTPMethod


@runtime_checkable
class NetworkRequestable(Protocol):
    """Uniform outgoing-request capability.

    Transports perform the I/O; decorators hold another ``NetworkRequestable``
    and forward to it, intercepting selectively. Because both sides share this
    shape, layers stack in any order.
    """

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod,
        body: Optional[Mapping[str, Any]] = None,
        response_hint: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:  # pragma: no cover - interface
        """Execute a request and return the decoded result.

        Failure handling: raise ``NetworkError`` for typed failures. Any other
        exception is treated as foreign and is never retried or re-routed.
        """
        ...
