"""Unit tests for the action gateway and its result envelope."""

import json

import pytest
from fastapi import status

from journal.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from journal.core.permissions.catalog import PermissionCatalog
from journal.core.permissions.checker import PermissionChecker
from journal.core.permissions.gateway import (
    UNEXPECTED_ERROR,
    ActionGateway,
    ActionResult,
    action_response,
)
from journal.core.permissions.hierarchy import can_manage_user
from journal.core.permissions.schemas import PERMISSION_DENIED, ResourceOwnershipContext
from tests.factories.user import build_user


pytestmark = pytest.mark.unit


@pytest.fixture
def gateway() -> ActionGateway:
    return ActionGateway(PermissionChecker(PermissionCatalog.defaults()))


class TestRun:
    """Tests for ActionGateway.run."""

    async def test_success_wraps_data(self, gateway: ActionGateway):
        async def handler() -> dict[str, str]:
            return {"id": "1"}

        result = await gateway.run("article.create", handler)

        assert result.success is True
        assert result.data == {"id": "1"}
        assert result.error is None

    async def test_app_exception_keeps_message(self, gateway: ActionGateway):
        async def handler() -> None:
            raise ConflictError("Role is in use", error_code="role_in_use")

        result = await gateway.run("role.delete", handler)

        assert result.success is False
        assert result.error == "Role is in use"
        assert result.error_code == "role_in_use"
        assert result.status_code == status.HTTP_409_CONFLICT

    async def test_unexpected_exception_is_masked(self, gateway: ActionGateway):
        async def handler() -> None:
            raise RuntimeError("connection string postgres://secret@db")

        result = await gateway.run("article.update", handler)

        assert result.success is False
        assert result.error == UNEXPECTED_ERROR
        assert result.error_code == "internal_error"
        assert "secret" not in result.model_dump_json()

    async def test_malformed_key_is_an_unexpected_error(self, gateway: ActionGateway):
        async def handler() -> None:
            await gateway.authorize(build_user("Admin"), "article-update")

        result = await gateway.run("article.update", handler)

        assert result.error == UNEXPECTED_ERROR
        assert result.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    async def test_denial_stops_handler(self, gateway: ActionGateway):
        touched: list[str] = []
        viewer = build_user("Viewer", role_permissions=["article.READ"])

        async def handler() -> None:
            await gateway.authorize(viewer, "article.DELETE")
            touched.append("deleted")

        result = await gateway.run("article.delete", handler)

        assert result.success is False
        assert result.error == "You don't have permission to delete articles"
        assert result.error_code == "permission_denied"
        assert touched == []


class TestAuthorize:
    """Tests for ActionGateway.authorize."""

    async def test_allowed_returns_decision(self, gateway: ActionGateway):
        editor = build_user("Editor", role_permissions=["article.UPDATE"])

        decision = await gateway.authorize(editor, "article.UPDATE")

        assert decision.allowed is True

    async def test_no_user(self, gateway: ActionGateway):
        with pytest.raises(UnauthorizedError):
            await gateway.authorize(None, "article.UPDATE")

    async def test_denial_names_action(self, gateway: ActionGateway):
        with pytest.raises(ForbiddenError) as exc_info:
            await gateway.authorize(build_user(), "callforpapers.CREATE")

        assert exc_info.value.message == "You don't have permission to create calls for papers"
        assert exc_info.value.details == {"required_permission": "callforpapers.CREATE"}

    async def test_unknown_key_message_is_generic(self, gateway: ActionGateway):
        with pytest.raises(ForbiddenError) as exc_info:
            await gateway.authorize(build_user("Admin"), "blog.PUBLISH")

        assert exc_info.value.message == PERMISSION_DENIED
        assert exc_info.value.error_code == "unknown_permission"

    async def test_context_without_ownership_resolver(self, gateway: ActionGateway):
        context = ResourceOwnershipContext(resource_type="article", resource_id="x")

        with pytest.raises(ForbiddenError):
            await gateway.authorize(build_user("Author"), "article.UPDATE", context)

    def test_require_user(self, gateway: ActionGateway):
        user = build_user()

        assert gateway.require_user(user) is user
        with pytest.raises(UnauthorizedError):
            gateway.require_user(None)

    def test_ensure_raises_rule_reason(self, gateway: ActionGateway):
        admin = build_user("Admin")

        with pytest.raises(ForbiddenError) as exc_info:
            gateway.ensure(can_manage_user(admin, admin))

        assert "your own account" in exc_info.value.message


class TestActionResponse:
    """Tests for action_response status codes."""

    def test_success_uses_given_status(self):
        response = action_response(ActionResult.ok({"id": "1"}), status.HTTP_201_CREATED)

        assert response.status_code == 201
        assert json.loads(response.body) == {
            "success": True,
            "error": None,
            "error_code": None,
            "data": {"id": "1"},
        }

    def test_failure_status_from_exception(self):
        exc = NotFoundError("Article not found")
        result = ActionResult.fail(exc.message, exc.error_code, exc.status_code)

        assert action_response(result).status_code == 404

    @pytest.mark.parametrize(
        ("error_code", "expected"),
        [
            ("auth_required", 401),
            ("permission_denied", 403),
            ("unknown_permission", 403),
            ("conflict", 409),
            ("validation_error", 422),
            ("internal_error", 500),
            ("something_else", 400),
        ],
    )
    def test_failure_status_from_error_code(self, error_code: str, expected: int):
        result = ActionResult.fail("nope", error_code)

        assert action_response(result).status_code == expected
