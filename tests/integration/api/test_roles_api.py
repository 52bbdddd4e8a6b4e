"""Integration tests for role management endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from journal.modules.roles.repos import RoleRepository


pytestmark = pytest.mark.integration


class TestListRoles:
    async def test_lists_roles_with_user_counts(
        self, client: AsyncClient, admin, editor, auth_headers
    ):
        response = await client.get("/api/v1/roles", headers=auth_headers(admin))

        assert response.status_code == 200
        roles = {role["name"]: role for role in response.json()["items"]}
        assert roles["Editor"]["user_count"] == 1
        assert roles["Viewer"]["user_count"] == 0
        assert "article.UPDATE" in roles["Editor"]["permissions"]
        assert roles["Super Admin"]["is_system"] is True

    async def test_viewer_cannot_list(self, client: AsyncClient, viewer, auth_headers):
        response = await client.get("/api/v1/roles", headers=auth_headers(viewer))

        assert response.status_code == 403


class TestCreateRole:
    async def test_create_custom_role(self, client: AsyncClient, admin, auth_headers):
        response = await client.post(
            "/api/v1/roles",
            json={
                "name": "Reviewer",
                "description": "Reads submissions",
                "permissions": ["article.READ", "author.READ"],
            },
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Reviewer"
        assert data["permissions"] == ["article.READ", "author.READ"]
        assert data["is_system"] is False

    async def test_duplicate_name(self, client: AsyncClient, admin, auth_headers):
        response = await client.post(
            "/api/v1/roles",
            json={"name": "Editor"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "role_exists"

    async def test_unknown_permission(
        self, client: AsyncClient, db: AsyncSession, admin, auth_headers
    ):
        response = await client.post(
            "/api/v1/roles",
            json={"name": "Publisher", "permissions": ["article.READ", "blog.PUBLISH"]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 422
        assert await RoleRepository(db).get_by_name("Publisher") is None

    async def test_editor_cannot_create(self, client: AsyncClient, editor, auth_headers):
        response = await client.post(
            "/api/v1/roles",
            json={"name": "Reviewer"},
            headers=auth_headers(editor),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You don't have permission to create roles"


class TestUpdateRole:
    async def test_replace_grants(self, client: AsyncClient, admin, roles, auth_headers):
        response = await client.patch(
            f"/api/v1/roles/{roles['Viewer'].id}",
            json={"permissions": ["article.READ"]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["data"]["permissions"] == ["article.READ"]

    async def test_grant_change_applies_to_holders(
        self, client: AsyncClient, admin, viewer, roles, auth_headers
    ):
        await client.patch(
            f"/api/v1/roles/{roles['Viewer'].id}",
            json={"permissions": ["article.READ", "notification.CREATE"]},
            headers=auth_headers(admin),
        )

        response = await client.get("/api/v1/permissions/me", headers=auth_headers(viewer))

        assert "notification.CREATE" in response.json()["role"]

    async def test_system_role_cannot_be_renamed(
        self, client: AsyncClient, super_admin, roles, auth_headers
    ):
        response = await client.patch(
            f"/api/v1/roles/{roles['Super Admin'].id}",
            json={"name": "Root"},
            headers=auth_headers(super_admin),
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "system_role"


class TestDeleteRole:
    async def test_delete_unused_role(
        self, client: AsyncClient, db: AsyncSession, admin, auth_headers
    ):
        created = await client.post(
            "/api/v1/roles",
            json={"name": "Temporary", "permissions": ["article.READ"]},
            headers=auth_headers(admin),
        )
        role_id = created.json()["data"]["id"]

        response = await client.delete(f"/api/v1/roles/{role_id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert await RoleRepository(db).get_by_name("Temporary") is None

    async def test_role_in_use(self, client: AsyncClient, admin, editor, roles, auth_headers):
        response = await client.delete(
            f"/api/v1/roles/{roles['Editor'].id}", headers=auth_headers(admin)
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "role_in_use"
        assert "1 user(s)" in body["error"]

    async def test_system_role(self, client: AsyncClient, super_admin, roles, auth_headers):
        response = await client.delete(
            f"/api/v1/roles/{roles['Super Admin'].id}", headers=auth_headers(super_admin)
        )

        assert response.status_code == 409
        assert response.json()["error"] == "System roles cannot be deleted"

    async def test_missing_role(self, client: AsyncClient, admin, auth_headers):
        response = await client.delete(
            "/api/v1/roles/0d6c1f5e-8f2a-4e43-9b7e-3f6a2c1d9e00", headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Role not found"
