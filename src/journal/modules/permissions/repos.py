"""Permission repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.core.permissions.models import Permission, role_permissions, user_permissions


class PermissionRepository:
    """Repository for Permission catalog entries."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, permission: Permission) -> Permission:
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        result = await self.session.execute(
            select(Permission).where(Permission.id == permission_id)
        )
        return result.scalar_one_or_none()

    async def get_by_key(self, key: str) -> Permission | None:
        result = await self.session.execute(
            select(Permission).where(Permission.key == key)
        )
        return result.scalar_one_or_none()

    async def get_by_keys(self, keys: Iterable[str]) -> list[Permission]:
        """Fetch the permissions whose keys are in ``keys``, ordered by key."""
        wanted = set(keys)
        if not wanted:
            return []
        result = await self.session.execute(
            select(Permission).where(Permission.key.in_(wanted)).order_by(Permission.key)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[Permission]:
        result = await self.session.execute(select(Permission).order_by(Permission.key))
        return list(result.scalars().all())

    async def assignment_counts(self) -> dict[UUID, tuple[int, int]]:
        """Map permission id to (role count, user count) for every assigned permission."""
        role_stmt = select(
            role_permissions.c.permission_id, func.count()
        ).group_by(role_permissions.c.permission_id)
        user_stmt = select(
            user_permissions.c.permission_id, func.count()
        ).group_by(user_permissions.c.permission_id)

        role_counts = dict((await self.session.execute(role_stmt)).tuples().all())
        user_counts = dict((await self.session.execute(user_stmt)).tuples().all())

        return {
            permission_id: (role_counts.get(permission_id, 0), user_counts.get(permission_id, 0))
            for permission_id in role_counts.keys() | user_counts.keys()
        }

    async def count_assignments(self, permission_id: UUID) -> tuple[int, int]:
        """Return (role count, user count) for one permission."""
        role_count = await self.session.scalar(
            select(func.count())
            .select_from(role_permissions)
            .where(role_permissions.c.permission_id == permission_id)
        )
        user_count = await self.session.scalar(
            select(func.count())
            .select_from(user_permissions)
            .where(user_permissions.c.permission_id == permission_id)
        )
        return role_count or 0, user_count or 0

    async def update(self, permission: Permission) -> Permission:
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def delete(self, permission: Permission) -> None:
        await self.session.delete(permission)
        await self.session.flush()
