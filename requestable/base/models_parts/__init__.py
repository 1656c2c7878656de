"""Models parts package: HTTP verb enum and request descriptor DTO."""

from .http_method import HTTPMethod
from .request_descriptor import RequestDescriptor

__all__ = ["HTTPMethod", "RequestDescriptor"]
