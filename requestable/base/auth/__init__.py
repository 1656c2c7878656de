"""Authentication decorator."""

from .authenticated import AuthenticatedDecorator, authenticated

__all__ = ["AuthenticatedDecorator", "authenticated"]
