"""requestable.config.env
======================

Environment helpers for credentials and policy overrides.

Purpose
-------
- Resolve bearer tokens from the process environment for the authentication
  decorator (``env_token_provider``).
- Parse the small typed values (numbers, kind lists) used by the policy
  override variables in ``requestable.config``.

Failure Modes
-------------
- Token lookups return ``None`` when nothing usable is set; the
  authentication layer turns that into an ``UNAUTHORIZED`` error.
- Numeric parsers raise ``ValueError`` naming the offending variable so a
  misconfigured deployment fails loudly instead of silently using defaults.
"""

from __future__ import annotations

import os
from typing import Callable, Iterable, Optional, Tuple


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_token(names: Iterable[str]) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first usable variable in ``names``.

    Empty and placeholder values are skipped. ``(None, None)`` when nothing is set.
    """
    for name in names:
        val = os.environ.get(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip(), name
    return None, None


def env_token_provider(name: str, *aliases: str) -> Callable[[], Optional[str]]:
    """Build a token provider reading ``name`` (then ``aliases``) on every call.

    The environment is consulted lazily so rotated credentials are picked up
    without rebuilding the request stack.
    """
    candidates = (name, *aliases)

    def provide() -> Optional[str]:
        value, _ = resolve_token(candidates)
        return value

    return provide


def parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def parse_list(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated value into trimmed, uppercased, non-empty items."""
    return tuple(part.strip().upper() for part in raw.split(",") if part.strip())


__all__ = [
    "is_placeholder",
    "resolve_token",
    "env_token_provider",
    "parse_float",
    "parse_int",
    "parse_list",
]
