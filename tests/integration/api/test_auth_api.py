"""Integration tests for auth endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.factories.user import TEST_PASSWORD


pytestmark = pytest.mark.integration


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    async def test_login_success(self, client: AsyncClient, editor):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "Editor@Example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["expires_in"] > 0

    async def test_login_wrong_password(self, client: AsyncClient, editor):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "editor@example.com", "password": "Wrong-pass1"},
        )

        assert response.status_code == 401
        assert response.json()["type"].endswith("invalid_credentials")

    async def test_login_unknown_email(self, client: AsyncClient, seeded):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401

    async def test_login_inactive_account(self, client: AsyncClient, make_user):
        await make_user("Editor", email="retired@example.com", is_active=False)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "retired@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["type"].endswith("account_inactive")


class TestMe:
    """Tests for GET /api/v1/auth/me."""

    async def test_me_returns_role_and_direct_permissions(
        self, client: AsyncClient, make_user, auth_headers
    ):
        user = await make_user("Viewer", permissions=["notification.CREATE"])

        response = await client.get("/api/v1/auth/me", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == user.email
        assert data["role"]["name"] == "Viewer"
        assert data["permissions"] == ["notification.CREATE"]

    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    async def test_me_with_token_for_missing_user(
        self, client: AsyncClient, seeded, auth_headers
    ):
        response = await client.get("/api/v1/auth/me", headers=auth_headers(uuid4()))

        assert response.status_code == 401
