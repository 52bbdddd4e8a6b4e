"""FastAPI dependencies for authentication.

This module provides FastAPI dependency injection functions for:
- Extracting and validating JWT tokens
- Getting the current authenticated user

Admin routes take ``OptionalUser`` and leave the "Authentication required"
decision to the permission checker, so an anonymous request is answered
the same way whether it hits a guarded read or a gateway mutation.
"""

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from journal.api.dependencies import DBSession
from journal.core.auth.backend import decode_token
from journal.core.auth.schemas import TokenData
from journal.core.errors import ForbiddenError, UnauthorizedError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Args:
        credentials: Bearer token credentials from the request

    Returns:
        Decoded token data

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )

    return token_data


async def get_current_user(
    token_data: Annotated[TokenData, Depends(get_token_data)],
    db: DBSession,
) -> Any:  # Returns User, but use Any to avoid circular import
    """Get the currently authenticated user.

    Args:
        token_data: Validated token data
        db: Database session

    Returns:
        The authenticated user

    Raises:
        UnauthorizedError: If user not found
        ForbiddenError: If user is deactivated
    """
    from journal.modules.users.repos import UserRepository  # noqa: PLC0415

    repo = UserRepository(db)
    user = await repo.get_by_id(token_data.user_id)

    if not user:
        raise UnauthorizedError(
            "User not found",
            error_code="user_not_found",
        )

    if not user.is_active:
        raise ForbiddenError(
            "User account is deactivated",
            error_code="user_inactive",
        )

    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: DBSession,
) -> Any | None:
    """Get the current user if authenticated, None otherwise.

    Args:
        credentials: Optional bearer token credentials
        db: Database session

    Returns:
        User if authenticated and active, None otherwise
    """
    if not credentials:
        return None

    token_data = decode_token(credentials.credentials)
    if not token_data or token_data.type != "access":
        return None

    from journal.modules.users.repos import UserRepository  # noqa: PLC0415

    repo = UserRepository(db)
    user = await repo.get_by_id(token_data.user_id)

    if not user or not user.is_active:
        return None

    return user


# Type aliases for cleaner dependency injection
# Use Any for User type to avoid circular imports at runtime
CurrentUser = Annotated[Any, Depends(get_current_user)]
OptionalUser = Annotated[Any | None, Depends(get_optional_user)]
