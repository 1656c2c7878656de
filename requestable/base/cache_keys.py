"""Cache key builder. Single place for key format.

Keys have the shape ``METHOD:endpoint:body`` where ``body`` is the canonical
JSON rendering of the request body (sorted keys, compact separators) or the
empty string when no body is sent. Canonical rendering means two bodies that
differ only in field order address the same entry.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .models_parts.http_method import HTTPMethod

CACHE_KEY_SEP = ":"


def canonical_body(body: Optional[Mapping[str, Any]]) -> str:
    """Return the canonical serialization of ``body`` ("" for ``None``).

    Values that are not JSON-native (datetimes, UUIDs, decimals) are rendered
    through ``str`` so they still contribute to the key.
    """
    if body is None:
        return ""
    return json.dumps(
        body,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def generate_cache_key(
    endpoint: str,
    method: HTTPMethod | str,
    body: Optional[Mapping[str, Any]] = None,
) -> str:
    """Cache key for a request addressed by endpoint, method and body."""
    verb = HTTPMethod(method).value
    return f"{verb}{CACHE_KEY_SEP}{endpoint}{CACHE_KEY_SEP}{canonical_body(body)}"


__all__ = ["CACHE_KEY_SEP", "canonical_body", "generate_cache_key"]
