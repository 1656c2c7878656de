"""
HTTP verbs accepted by the request contract.
"""
from __future__ import annotations

from enum import Enum


class HTTPMethod(str, Enum):
    """Fixed HTTP verb enumeration shared by every layer."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @property
    def sends_body(self) -> bool:
        """Whether a request body is serialized for this verb."""
        return self not in (HTTPMethod.GET, HTTPMethod.HEAD)


__all__ = ["HTTPMethod"]
