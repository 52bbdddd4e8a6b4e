"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.core.utils.text import normalize_email
from journal.modules.users.models import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's UUID

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address, ignoring case.

        Args:
            email: The user's email

        Returns:
            User if found, None otherwise
        """
        normalized = normalize_email(email)
        if normalized is None:
            return None
        stmt = select(User).where(func.lower(User.email) == normalized)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        """List every user, newest first."""
        stmt = select(User).order_by(User.created_at.desc(), User.email)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        """Update a user.

        Args:
            user: User instance with updated fields

        Returns:
            The updated user
        """
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete a user.

        Args:
            user: User instance to delete
        """
        await self.session.delete(user)
        await self.session.flush()
