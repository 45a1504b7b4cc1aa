"""Middleware for authentication and other cross-cutting concerns."""

from .auth import JWTBearer, get_current_user, get_optional_user

__all__ = ["JWTBearer", "get_current_user", "get_optional_user"]
