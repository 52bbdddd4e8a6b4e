"""Authentication service for email/password login."""

from typing import Annotated

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.config import settings
from journal.core.auth.backend import create_access_token, verify_password
from journal.core.auth.schemas import TokenResponse
from journal.core.errors import UnauthorizedError
from journal.modules.users.models import User
from journal.modules.users.repos import UserRepository


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)

    async def login(self, email: str, password: str) -> tuple[User, TokenResponse]:
        """Authenticate a user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, token)

        Raises:
            UnauthorizedError: If credentials are invalid or the account is deactivated
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed", email=email)
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        if not user.is_active:
            raise UnauthorizedError(
                "Account is deactivated",
                error_code="account_inactive",
            )

        logger.info("login_succeeded", user_id=str(user.id))
        return user, TokenResponse(
            access_token=create_access_token(user.id),
            expires_in=settings.access_token_expire_minutes * 60,
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
