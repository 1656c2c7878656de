"""Structured logging context object for request layers.

This module defines :class:`LogContext`, a dataclass carrying the fields every
request-level event shares (endpoint, method, request id, extra metadata). Its
``to_dict`` helper merges ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for request logging events."""

    endpoint: Optional[str] = None
    method: Optional[str] = None
    request_id: Optional[str] = None
    layer: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_request(cls, endpoint: str, method: Any, layer: Optional[str] = None) -> "LogContext":
        """Build a context from raw ``request`` arguments."""
        return cls(endpoint=endpoint, method=getattr(method, "value", method), layer=layer)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
