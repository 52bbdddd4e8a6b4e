"""Unit tests for permission decorators on read endpoints."""

import pytest

from journal.core.errors import ForbiddenError, UnauthorizedError
from journal.core.permissions.catalog import PermissionCatalog
from journal.core.permissions.checker import PermissionChecker
from journal.core.permissions.decorators import require_any_permission, require_permission
from tests.factories.user import build_user


pytestmark = pytest.mark.unit


@require_permission("role.READ")
async def list_roles(current_user=None, checker=None):
    return {"status": "ok"}


@require_any_permission(["user.CREATE", "user.UPDATE"])
async def assignable_roles(current_user=None, checker=None):
    return {"status": "ok"}


@pytest.fixture
def checker() -> PermissionChecker:
    return PermissionChecker(PermissionCatalog.defaults())


class TestRequirePermission:
    async def test_allowed(self, checker: PermissionChecker):
        admin = build_user("Admin", role_permissions=["role.READ"])

        assert await list_roles(current_user=admin, checker=checker) == {"status": "ok"}

    async def test_unauthenticated(self, checker: PermissionChecker):
        with pytest.raises(UnauthorizedError):
            await list_roles(current_user=None, checker=checker)

    async def test_denied(self, checker: PermissionChecker):
        with pytest.raises(ForbiddenError) as exc_info:
            await list_roles(current_user=build_user("Editor"), checker=checker)

        assert exc_info.value.message == "You don't have permission to view roles"
        assert exc_info.value.details == {"required_permissions": ["role.READ"]}

    async def test_missing_checker_fails_closed(self):
        with pytest.raises(ForbiddenError) as exc_info:
            await list_roles(current_user=build_user("Super Admin"))

        assert exc_info.value.error_code == "permission_check_failed"

    def test_keeps_function_metadata(self):
        assert list_roles.__name__ == "list_roles"


class TestRequireAnyPermission:
    async def test_one_grant_is_enough(self, checker: PermissionChecker):
        admin = build_user("Admin", role_permissions=["user.UPDATE"])

        assert await assignable_roles(current_user=admin, checker=checker) == {"status": "ok"}

    async def test_none_held(self, checker: PermissionChecker):
        with pytest.raises(ForbiddenError) as exc_info:
            await assignable_roles(current_user=build_user(), checker=checker)

        assert "user.CREATE, user.UPDATE" in exc_info.value.message

    async def test_unauthenticated(self, checker: PermissionChecker):
        with pytest.raises(UnauthorizedError):
            await assignable_roles(current_user=None, checker=checker)
