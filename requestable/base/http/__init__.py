"""HTTP package: pooled ``httpx`` async clients and the transport layer."""

from .client import get_httpx_client, close_all_clients
from .transport import HttpxRequestable

__all__ = ["get_httpx_client", "close_all_clients", "HttpxRequestable"]
