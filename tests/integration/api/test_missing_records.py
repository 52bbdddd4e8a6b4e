"""A caller without the permission gets 403 for a missing record, never 404."""

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration

MISSING_ID = "5f1e9a2c-7b3d-4c8e-a6f0-2d4b8c1e3a57"


@pytest.mark.parametrize(
    ("method", "path", "body", "error"),
    [
        ("PATCH", "/api/v1/roles/{id}", {"description": "x"}, "update roles"),
        ("DELETE", "/api/v1/roles/{id}", None, "delete roles"),
        ("PATCH", "/api/v1/permissions/{id}", {"description": "x"}, "update permissions"),
        ("DELETE", "/api/v1/permissions/{id}", None, "delete permissions"),
        ("PATCH", "/api/v1/users/{id}", {"full_name": "Ghost"}, "update users"),
        ("PUT", "/api/v1/users/{id}/permissions", {"permissions": []}, "update users"),
        ("DELETE", "/api/v1/users/{id}", None, "delete users"),
        ("PATCH", "/api/v1/authors/{id}", {"bio": "x"}, "update authors"),
        ("DELETE", "/api/v1/authors/{id}", None, "delete authors"),
        ("PATCH", "/api/v1/notifications/{id}", {"title": "x"}, "update notifications"),
        ("DELETE", "/api/v1/notifications/{id}", None, "delete notifications"),
        ("PATCH", "/api/v1/call-for-papers/{id}", {"title": "x"}, "update calls for papers"),
        ("DELETE", "/api/v1/call-for-papers/{id}", None, "delete calls for papers"),
    ],
)
async def test_viewer_gets_forbidden(
    client: AsyncClient, viewer, auth_headers, method, path, body, error
):
    response = await client.request(
        method, path.format(id=MISSING_ID), json=body, headers=auth_headers(viewer)
    )

    assert response.status_code == 403
    assert response.json()["error"] == f"You don't have permission to {error}"


@pytest.mark.parametrize(
    ("path", "error"),
    [
        ("/api/v1/roles/{id}", "Role not found"),
        ("/api/v1/permissions/{id}", "Permission not found"),
        ("/api/v1/authors/{id}", "Author not found"),
        ("/api/v1/notifications/{id}", "Notification not found"),
    ],
)
async def test_admin_gets_not_found(client: AsyncClient, admin, auth_headers, path, error):
    response = await client.delete(path.format(id=MISSING_ID), headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json()["error"] == error
