"""Request models public surface.

Re-exports the one-class-per-file implementations under
``requestable.base.models_parts``.
"""

from .models_parts.http_method import HTTPMethod
from .models_parts.request_descriptor import RequestDescriptor

__all__ = ["HTTPMethod", "RequestDescriptor"]
