"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `requestable.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .network_error import NetworkError
from .classification import classify_exception, is_policy_eligible

__all__ = ["ErrorKind", "NetworkError", "classify_exception", "is_policy_eligible"]
