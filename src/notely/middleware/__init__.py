"""Middleware for authentication and other cross-cutting concerns."""

from .auth import BearerToken, bearer_token, get_current_user

__all__ = ["BearerToken", "bearer_token", "get_current_user"]
