"""Role repository for database operations."""

from uuid import UUID

from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.core.permissions.models import Role
from journal.modules.users.models import User


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        """Create a new role.

        Args:
            role: Role instance to create

        Returns:
            The created role with ID populated
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: UUID) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.id == role_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        result = await self.session.execute(select(Role).order_by(Role.name))
        return list(result.scalars().all())

    async def user_counts(self) -> dict[UUID, int]:
        """Map role id to the number of users holding it."""
        stmt = select(User.role_id, func.count()).group_by(User.role_id)
        result = await self.session.execute(stmt)
        return dict(result.tuples().all())

    async def count_users(self, role_id: UUID) -> int:
        """Number of users holding the role."""
        stmt = select(func.count()).select_from(User).where(User.role_id == role_id)
        return (await self.session.scalar(stmt)) or 0

    async def update(self, role: Role) -> Role:
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        await self.session.delete(role)
        await self.session.flush()
