"""
RequestDescriptor DTO describing one outgoing call.

Constructed per call and never persisted. The recording mock stores these in
its history and logging helpers derive their context from them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .http_method import HTTPMethod


@dataclass(frozen=True)
class RequestDescriptor:
    """Normalized view of the arguments passed to ``request``.

    Attributes:
        endpoint: Path (or absolute URL) the call is addressed to.
        method: HTTP verb.
        body: Optional structured body.
        headers: Header mapping as received by the layer that recorded it.
        response_hint: Optional type the caller expects back.
    """

    endpoint: str
    method: HTTPMethod
    body: Optional[Mapping[str, Any]] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    response_hint: Any = None

    def cache_key(self) -> str:
        """Return the cache key addressing this request."""
        from ..cache_keys import generate_cache_key

        return generate_cache_key(self.endpoint, self.method, self.body)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dictionary (headers copied, hint omitted)."""
        return {
            "endpoint": self.endpoint,
            "method": self.method.value,
            "body": dict(self.body) if self.body is not None else None,
            "headers": dict(self.headers),
        }


__all__ = ["RequestDescriptor"]
