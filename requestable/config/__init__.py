"""Unified configuration layer for the request policies.

Goals
-----
* Centralize policy defaults (retry, fallback, cache).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``requestable.config.defaults``)
    2. Optional JSON file pointed to by ``REQUESTABLE_CONFIG_FILE``
    3. Environment variables
    4. In-code overrides passed to the helper
* Provide single call sites: ``get_policy_config()``, ``load_retry_config()``,
  ``load_fallback_config()``.

Environment Variables
---------------------
REQUESTABLE_RETRY_MAX_ATTEMPTS, REQUESTABLE_RETRY_INITIAL_DELAY,
REQUESTABLE_RETRY_BACKOFF_FACTOR, REQUESTABLE_RETRY_MAX_DELAY,
REQUESTABLE_RETRY_KINDS (comma-separated ErrorKind names),
REQUESTABLE_FALLBACK_KINDS, REQUESTABLE_CACHE_TTL (seconds).

External Config File
--------------------
```
{
  "retry": {"max_attempts": 5, "initial_delay": 0.1, "retryable_kinds": ["TIMEOUT"]},
  "fallback": {"fallback_kinds": ["NETWORK_FAILURE"]},
  "cache": {"ttl": 60}
}
```
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import json
import os

from .defaults import (
    CACHE_DEFAULT_TTL,
    FALLBACK_DEFAULT_KINDS,
    RETRY_DEFAULT_BACKOFF_FACTOR,
    RETRY_DEFAULT_INITIAL_DELAY,
    RETRY_DEFAULT_KINDS,
    RETRY_DEFAULT_MAX_ATTEMPTS,
    RETRY_DEFAULT_MAX_DELAY,
)
from .env import env_token_provider, parse_float, parse_int, parse_list

CONFIG_FILE_ENV = "REQUESTABLE_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "retry": {
        "max_attempts": RETRY_DEFAULT_MAX_ATTEMPTS,
        "initial_delay": RETRY_DEFAULT_INITIAL_DELAY,
        "backoff_factor": RETRY_DEFAULT_BACKOFF_FACTOR,
        "max_delay": RETRY_DEFAULT_MAX_DELAY,
        "retryable_kinds": RETRY_DEFAULT_KINDS,
    },
    "fallback": {"fallback_kinds": FALLBACK_DEFAULT_KINDS},
    "cache": {"ttl": CACHE_DEFAULT_TTL},
}

# (section, field) -> (env var, parser)
ENV_FIELD_MAP: Dict[Tuple[str, str], Tuple[str, Callable[[str, str], Any]]] = {
    ("retry", "max_attempts"): ("REQUESTABLE_RETRY_MAX_ATTEMPTS", parse_int),
    ("retry", "initial_delay"): ("REQUESTABLE_RETRY_INITIAL_DELAY", parse_float),
    ("retry", "backoff_factor"): ("REQUESTABLE_RETRY_BACKOFF_FACTOR", parse_float),
    ("retry", "max_delay"): ("REQUESTABLE_RETRY_MAX_DELAY", parse_float),
    ("retry", "retryable_kinds"): ("REQUESTABLE_RETRY_KINDS", lambda _n, raw: parse_list(raw)),
    ("fallback", "fallback_kinds"): ("REQUESTABLE_FALLBACK_KINDS", lambda _n, raw: parse_list(raw)),
    ("cache", "ttl"): ("REQUESTABLE_CACHE_TTL", parse_float),
}


def _load_external_config() -> Dict[str, Any]:
    """Read the JSON config file named by ``REQUESTABLE_CONFIG_FILE``.

    A missing variable or file yields ``{}``. A file that exists but is not a
    JSON object raises ``ValueError``.
    """
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{CONFIG_FILE_ENV} at {p} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{CONFIG_FILE_ENV} at {p} must contain a JSON object")
    return data


def _env_overrides() -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for (section, field), (name, parser) in ENV_FIELD_MAP.items():
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            continue
        out.setdefault(section, {})[field] = parser(name, raw.strip())
    return out


def get_policy_config(overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, Dict[str, Any]]:
    """Return merged policy configuration keyed by section.

    Merge order (later wins): defaults -> external file -> env vars -> overrides
    """
    cfg: Dict[str, Dict[str, Any]] = {section: dict(values) for section, values in DEFAULTS.items()}
    for layer in (_load_external_config(), _env_overrides(), overrides or {}):
        for section, values in layer.items():
            if section in cfg and isinstance(values, dict):
                cfg[section] |= {k: v for k, v in values.items() if v is not None}
    return cfg


def load_retry_config(overrides: Optional[Dict[str, Any]] = None):
    """Build a validated ``RetryConfig`` from the merged configuration."""
    # Local import: the resilience layer imports config.defaults.
    from ..base.errors import ErrorKind
    from ..base.resilience.retry import RetryConfig

    section = get_policy_config({"retry": overrides or {}})["retry"]
    return RetryConfig(
        max_attempts=int(section["max_attempts"]),
        initial_delay=float(section["initial_delay"]),
        backoff_factor=float(section["backoff_factor"]),
        max_delay=float(section["max_delay"]),
        retryable_kinds=frozenset(ErrorKind(str(k).upper()) for k in section["retryable_kinds"]),
    )


def load_fallback_config(overrides: Optional[Dict[str, Any]] = None):
    """Build a ``FallbackConfig`` from the merged configuration."""
    from ..base.errors import ErrorKind
    from ..base.resilience.fallback import FallbackConfig

    section = get_policy_config({"fallback": overrides or {}})["fallback"]
    return FallbackConfig(fallback_kinds=frozenset(ErrorKind(str(k).upper()) for k in section["fallback_kinds"]))


def get_cache_ttl() -> Optional[float]:
    ttl = get_policy_config()["cache"]["ttl"]
    return float(ttl) if ttl is not None else None


__all__ = [
    "DEFAULTS",
    "get_policy_config",
    "load_retry_config",
    "load_fallback_config",
    "get_cache_ttl",
    "env_token_provider",
]
