"""Typed network error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``requestable.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.network_error import NetworkError
from .errors_parts.classification import (
    classify_exception,
    error_for_status,
    is_client_error,
    is_policy_eligible,
)

__all__ = [
    "ErrorKind",
    "NetworkError",
    "classify_exception",
    "error_for_status",
    "is_client_error",
    "is_policy_eligible",
]
