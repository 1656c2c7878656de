"""
Layer-agnostic interfaces (Protocols) for the request stack.

Re-exports Protocols split into single-class modules under
``requestable.base.interfaces_parts`` while keeping imports stable.
"""

from __future__ import annotations

from .interfaces_parts import Cache, NetworkRequestable

__all__ = ["NetworkRequestable", "Cache"]
