"""Integration tests for authors, notifications and calls for papers."""

from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from journal.modules.notifications.repos import NotificationRepository
from tests.factories.content import AuthorCreateFactory, CallForPapersCreateFactory


pytestmark = pytest.mark.integration


class TestAuthors:
    """Tests for /api/v1/authors."""

    async def test_create_normalizes_email(self, client: AsyncClient, editor, auth_headers):
        payload = AuthorCreateFactory.build(name="Mary Somerville", email="Mary@Example.com")

        response = await client.post(
            "/api/v1/authors",
            json=payload.model_dump(mode="json"),
            headers=auth_headers(editor),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "mary-somerville"
        assert data["email"] == "mary@example.com"

    async def test_duplicate_email(self, client: AsyncClient, editor, auth_headers):
        payload = AuthorCreateFactory.build(email="shared@example.com").model_dump(mode="json")
        await client.post("/api/v1/authors", json=payload, headers=auth_headers(editor))
        payload["name"] = "Someone Else"

        response = await client.post("/api/v1/authors", json=payload, headers=auth_headers(editor))

        assert response.status_code == 409
        assert response.json()["error_code"] == "author_email_exists"

    async def test_rename_regenerates_slug(self, client: AsyncClient, editor, auth_headers):
        created = await client.post(
            "/api/v1/authors",
            json=AuthorCreateFactory.build(name="Emmy Noether").model_dump(mode="json"),
            headers=auth_headers(editor),
        )
        author_id = created.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/authors/{author_id}",
            json={"name": "Amalie Emmy Noether"},
            headers=auth_headers(editor),
        )

        assert response.json()["data"]["slug"] == "amalie-emmy-noether"

    async def test_editor_cannot_delete(self, client: AsyncClient, editor, auth_headers):
        created = await client.post(
            "/api/v1/authors",
            json=AuthorCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(editor),
        )

        response = await client.delete(
            f"/api/v1/authors/{created.json()['data']['id']}", headers=auth_headers(editor)
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You don't have permission to delete authors"

    async def test_admin_deletes_unused_author(
        self, client: AsyncClient, editor, admin, auth_headers
    ):
        created = await client.post(
            "/api/v1/authors",
            json=AuthorCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(editor),
        )

        response = await client.delete(
            f"/api/v1/authors/{created.json()['data']['id']}", headers=auth_headers(admin)
        )

        assert response.status_code == 200

    async def test_viewer_lists(self, client: AsyncClient, viewer, auth_headers):
        response = await client.get("/api/v1/authors", headers=auth_headers(viewer))

        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}


class TestNotifications:
    """Tests for /api/v1/notifications."""

    async def test_create_and_clear_link(self, client: AsyncClient, editor, auth_headers):
        created = await client.post(
            "/api/v1/notifications",
            json={
                "title": "Editorial vacancy",
                "content": "We are hiring a managing editor.",
                "type": "editorial_vacancy",
                "link": "/about/vacancies",
            },
            headers=auth_headers(editor),
        )
        assert created.status_code == 201
        data = created.json()["data"]
        assert data["priority"] == "medium"
        assert data["is_active"] is True

        response = await client.patch(
            f"/api/v1/notifications/{data['id']}",
            json={"link": None, "priority": "high", "title": None},
            headers=auth_headers(editor),
        )

        updated = response.json()["data"]
        assert updated["link"] is None
        assert updated["priority"] == "high"
        assert updated["title"] == "Editorial vacancy"

    async def test_unknown_type_rejected(self, client: AsyncClient, editor, auth_headers):
        response = await client.post(
            "/api/v1/notifications",
            json={"title": "x", "content": "y", "type": "gossip"},
            headers=auth_headers(editor),
        )

        assert response.status_code == 422

    async def test_author_role_cannot_publish(self, client: AsyncClient, author_user, auth_headers):
        response = await client.post(
            "/api/v1/notifications",
            json={"title": "x", "content": "y"},
            headers=auth_headers(author_user),
        )

        assert response.status_code == 403


class TestCallsForPapers:
    """Tests for /api/v1/call-for-papers."""

    async def test_create_announces_call(
        self, client: AsyncClient, db: AsyncSession, editor, auth_headers
    ):
        payload = CallForPapersCreateFactory.build(title="Special Issue on Archives")

        response = await client.post(
            "/api/v1/call-for-papers",
            json=payload.model_dump(mode="json"),
            headers=auth_headers(editor),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        notification = await NotificationRepository(db).get_by_id(UUID(data["notification_id"]))
        assert notification is not None
        assert notification.title == "Call for Papers: Special Issue on Archives"
        assert notification.type == "call_for_papers"
        assert notification.priority == "high"
        assert notification.link == "/journals/call-for-papers"

    async def test_denied_call_creates_no_notification(
        self, client: AsyncClient, db: AsyncSession, viewer, auth_headers
    ):
        response = await client.post(
            "/api/v1/call-for-papers",
            json=CallForPapersCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(viewer),
        )

        assert response.status_code == 403
        assert await NotificationRepository(db).list_all() == []

    async def test_delete_keeps_announcement(
        self, client: AsyncClient, db: AsyncSession, editor, auth_headers
    ):
        created = await client.post(
            "/api/v1/call-for-papers",
            json=CallForPapersCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(editor),
        )
        data = created.json()["data"]

        response = await client.delete(
            f"/api/v1/call-for-papers/{data['id']}", headers=auth_headers(editor)
        )

        assert response.status_code == 200
        assert await NotificationRepository(db).get_by_id(UUID(data["notification_id"])) is not None

    async def test_viewer_lists(self, client: AsyncClient, editor, viewer, auth_headers):
        await client.post(
            "/api/v1/call-for-papers",
            json=CallForPapersCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(editor),
        )

        response = await client.get("/api/v1/call-for-papers", headers=auth_headers(viewer))

        assert response.status_code == 200
        assert response.json()["total"] == 1
