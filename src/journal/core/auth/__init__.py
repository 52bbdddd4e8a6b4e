"""Authentication module for JWT and password handling."""

from journal.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from journal.core.auth.dependencies import (
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_optional_user,
)
from journal.core.auth.middleware import RequestIdMiddleware, UserContextMiddleware
from journal.core.auth.schemas import TokenData


__all__ = [
    # Dependencies
    "CurrentUser",
    "OptionalUser",
    # Middleware
    "RequestIdMiddleware",
    # Schemas
    "TokenData",
    "UserContextMiddleware",
    # Token utilities
    "create_access_token",
    "decode_token",
    "get_current_user",
    "get_optional_user",
    # Password utilities
    "hash_password",
    "verify_password",
]
