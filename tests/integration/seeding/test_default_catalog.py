"""Integration tests for the default permission sync and role seeding."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from journal.core.permissions.catalog import DEFAULT_PERMISSIONS, DEFAULT_ROLE_GRANTS, catalog_cache
from journal.core.permissions.models import Permission, Role
from journal.modules.permissions.repos import PermissionRepository
from journal.modules.permissions.services import sync_default_permissions
from journal.modules.roles.repos import RoleRepository
from journal.modules.roles.services import seed_default_roles


pytestmark = pytest.mark.integration


class TestSyncDefaultPermissions:
    """Tests for sync_default_permissions."""

    async def test_fresh_database(self, db: AsyncSession):
        created = await sync_default_permissions(db)

        assert sorted(created) == sorted(d.key for d in DEFAULT_PERMISSIONS)
        assert len(await PermissionRepository(db).list_all()) == len(DEFAULT_PERMISSIONS)

    async def test_second_run_creates_nothing(self, db: AsyncSession):
        await sync_default_permissions(db)

        assert await sync_default_permissions(db) == []

    async def test_existing_description_untouched(self, db: AsyncSession):
        repo = PermissionRepository(db)
        await repo.create(Permission(key="article.READ", description="Read the archive"))

        created = await sync_default_permissions(db)

        assert "article.READ" not in created
        permission = await repo.get_by_key("article.READ")
        assert permission is not None
        assert permission.description == "Read the archive"

    async def test_invalidates_catalog_cache_on_commit(self, db: AsyncSession):
        stale = await catalog_cache.get(db)
        assert "article.READ" not in stale

        await sync_default_permissions(db)

        assert "article.READ" not in await catalog_cache.get(db)
        await db.commit()
        assert "article.READ" in await catalog_cache.get(db)

    async def test_rolled_back_sync_keeps_cache(self, db: AsyncSession):
        stale = await catalog_cache.get(db)

        await sync_default_permissions(db)
        await db.rollback()

        assert catalog_cache.is_loaded is True
        assert await catalog_cache.get(db) is stale

        await db.commit()
        assert await catalog_cache.get(db) is stale


class TestSeedDefaultRoles:
    """Tests for seed_default_roles."""

    async def test_creates_default_roles(self, db: AsyncSession):
        await sync_default_permissions(db)

        created = await seed_default_roles(db)

        assert set(created) == {"Super Admin", *DEFAULT_ROLE_GRANTS}
        role = await RoleRepository(db).get_by_name("Editor")
        assert role is not None
        assert role.permission_keys == DEFAULT_ROLE_GRANTS["Editor"]

    async def test_super_admin_is_system_role_without_grants(self, db: AsyncSession):
        await sync_default_permissions(db)
        await seed_default_roles(db)

        role = await RoleRepository(db).get_by_name("Super Admin")

        assert isinstance(role, Role)
        assert role.is_system is True
        assert role.permissions == []

    async def test_existing_roles_left_alone(self, db: AsyncSession):
        await sync_default_permissions(db)
        await RoleRepository(db).create(Role(name="Viewer", description="Custom viewer"))

        created = await seed_default_roles(db)

        assert "Viewer" not in created
        viewer = await RoleRepository(db).get_by_name("Viewer")
        assert viewer is not None
        assert viewer.description == "Custom viewer"
        assert viewer.permissions == []

    async def test_without_catalog_skips_grants(self, db: AsyncSession):
        await seed_default_roles(db)

        admin = await RoleRepository(db).get_by_name("Admin")

        assert admin is not None
        assert admin.permissions == []
