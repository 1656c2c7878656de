"""Interfaces (Protocols) split into single-class modules.

This package provides one Protocol per file while allowing
``requestable.base.interfaces`` to re-export a stable API.
"""

from .network_requestable import NetworkRequestable
from .cache import Cache

__all__ = ["NetworkRequestable", "Cache"]
