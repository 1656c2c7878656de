"""Shared async HTTP client pool for transports.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.AsyncClient``
    instances so transports do not allocate a client (and its connection
    pool) per call. Timeouts derive exclusively from
    :func:`get_timeout_config`.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached per running event loop, then by a composite key of
      ``base_url`` and ``purpose``. Purposes allow distinct pools (e.g.,
      "transport" vs "fallback"). Kept-alive connections belong to the loop
      that opened them, so a later ``asyncio.run`` gets fresh clients instead
      of reusing ones bound to a closed loop.
    - Pools of discarded loops are dropped with the loop (weak references).
      Lookups outside a running loop share one loop-less pool.
    - Async clients cannot be closed from ``atexit``; applications and tests
      call :func:`close_all_clients` from their event loop at shutdown.
"""

from __future__ import annotations

import asyncio
import threading
import weakref
from typing import Dict, List, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_PoolKey = Tuple[Optional[str], str]

# Internal caches: one pool per running loop, plus one for callers without a loop.
_LOOP_CLIENTS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[_PoolKey, httpx.AsyncClient]]" = (
    weakref.WeakKeyDictionary()
)
_UNBOUND_CLIENTS: Dict[_PoolKey, httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _pool_for(loop: Optional[asyncio.AbstractEventLoop]) -> Dict[_PoolKey, httpx.AsyncClient]:
    if loop is None:
        return _UNBOUND_CLIENTS
    pool = _LOOP_CLIENTS.get(loop)
    if pool is None:
        pool = {}
        _LOOP_CLIENTS[loop] = pool
    return pool


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    The first request for a key on the current event loop creates a client
    configured with timeouts from :func:`get_timeout_config`. Subsequent
    requests on the same loop reuse the same instance until it is closed.

    Parameters:
        base_url: Optional base URL set on the client so relative requests
            resolve against it. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.
    """
    key = (base_url, purpose)
    with _LOCK:
        pool = _pool_for(_running_loop())
        client = pool.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().as_httpx()
        client = (
            httpx.AsyncClient(base_url=base_url, timeout=timeout)
            if base_url
            else httpx.AsyncClient(timeout=timeout)
        )
        pool[key] = client
        return client


async def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients across every loop."""
    with _LOCK:
        clients: List[httpx.AsyncClient] = list(_UNBOUND_CLIENTS.values())
        _UNBOUND_CLIENTS.clear()
        for pool in list(_LOOP_CLIENTS.values()):
            clients.extend(pool.values())
            pool.clear()
        _LOOP_CLIENTS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_httpx_client", "close_all_clients"]
