"""Action gateway wrapping every admin mutation.

Every admin mutation runs through ``ActionGateway.run``. The handler
authorizes with ``ActionGateway.authorize`` before it touches the store,
and any failure comes back as ``ActionResult(success=False, error=...)``
instead of an exception. Expected failures (``AppException`` subclasses)
keep their message; anything else is logged and replaced with a generic
message so internals never reach the caller.

The handler runs inside a SAVEPOINT when the gateway has a session, so a
failure halfway through a mutation leaves nothing behind.

Usage:
    async def update_article(self, actor, article_id, data):
        async def handler() -> ArticleResponse:
            self.gateway.require_user(actor)
            article = await self._get_article(article_id)
            await self.gateway.authorize(
                actor,
                "article.UPDATE",
                ResourceOwnershipContext(resource_type="article", resource_id=str(article.id)),
            )
            ...

        return await self.gateway.run("article.update", handler)
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated, Any, Generic, TypeVar

import structlog
from fastapi import Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, PrivateAttr
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import DBSession
from journal.core.errors import AppException, ForbiddenError, UnauthorizedError
from journal.core.permissions.catalog import describe_action
from journal.core.permissions.checker import Checker, PermissionChecker
from journal.core.permissions.schemas import (
    AUTHENTICATION_REQUIRED,
    PERMISSION_DENIED,
    Decision,
    DenialCode,
    ResourceOwnershipContext,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()

T = TypeVar("T")

UNEXPECTED_ERROR = "An unexpected error occurred"

ERROR_STATUS_CODES: dict[str, int] = {
    "auth_required": status.HTTP_401_UNAUTHORIZED,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "permission_denied": status.HTTP_403_FORBIDDEN,
    "unknown_permission": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "validation_error": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "bad_request": status.HTTP_400_BAD_REQUEST,
    "internal_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ActionResult(BaseModel, Generic[T]):
    """Uniform envelope returned by every admin mutation.

    Attributes:
        success: Whether the action was performed
        error: User-facing reason when ``success`` is False
        error_code: Machine-readable code when ``success`` is False
        data: The action's payload when ``success`` is True
    """

    success: bool
    error: str | None = None
    error_code: str | None = None
    data: T | None = None

    _status_code: int | None = PrivateAttr(default=None)

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult[Any]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: str = "bad_request",
        status_code: int | None = None,
    ) -> "ActionResult[Any]":
        result = cls(success=False, error=error, error_code=error_code)
        result._status_code = status_code
        return result

    @property
    def status_code(self) -> int:
        """HTTP status for a failed result; falls back to the error code table."""
        if self._status_code is not None:
            return self._status_code
        return ERROR_STATUS_CODES.get(self.error_code or "", status.HTTP_400_BAD_REQUEST)


def denial_message(permission_key: str, decision: Decision) -> str:
    """User-facing message for a denied decision.

    Plain denials name the action ("You don't have permission to update
    articles"). Unknown keys get the generic message so the key itself is
    only visible in the logs.
    """
    if decision.code == DenialCode.PERMISSION_DENIED and decision.reason == PERMISSION_DENIED:
        return f"You don't have permission to {describe_action(permission_key)}"
    if decision.code == DenialCode.UNKNOWN_PERMISSION:
        return PERMISSION_DENIED
    return decision.reason or PERMISSION_DENIED


class ActionGateway:
    """Authorizes and executes admin mutations, returning ``ActionResult``."""

    def __init__(
        self,
        checker: PermissionChecker,
        session: AsyncSession | None = None,
    ) -> None:
        self.checker = checker
        self.session = session

    def require_user(self, user: "User | None") -> "User":
        """Return the user or raise ``UnauthorizedError`` if there is none."""
        if user is None:
            raise UnauthorizedError(AUTHENTICATION_REQUIRED)
        return user

    async def authorize(
        self,
        user: "User | None",
        permission_key: str,
        context: ResourceOwnershipContext | None = None,
    ) -> Decision:
        """Check a permission and raise on denial.

        Raises:
            UnauthorizedError: If there is no user
            ForbiddenError: If the checker denies the action
        """
        decision = await self.checker.check(user, permission_key, context)
        if decision.allowed:
            return decision

        logger.info(
            "action_denied",
            permission=permission_key,
            user_id=str(user.id) if user is not None else None,
            code=decision.code.value if decision.code else None,
            resource_id=context.resource_id if context else None,
        )

        if decision.code == DenialCode.AUTH_REQUIRED:
            raise UnauthorizedError(decision.reason)

        raise ForbiddenError(
            denial_message(permission_key, decision),
            error_code=decision.code.value if decision.code else None,
            details={"required_permission": permission_key},
        )

    def ensure(self, decision: Decision) -> None:
        """Raise ``ForbiddenError`` for a denied rule decision (e.g. ``can_manage_user``)."""
        if decision.allowed:
            return
        if decision.code == DenialCode.AUTH_REQUIRED:
            raise UnauthorizedError(decision.reason)
        raise ForbiddenError(decision.reason)

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[None]:
        if self.session is None:
            yield
            return
        async with self.session.begin_nested():
            yield

    async def run(
        self,
        action: str,
        handler: Callable[[], Awaitable[T]],
    ) -> ActionResult[T]:
        """Execute ``handler`` and wrap the outcome.

        Args:
            action: Action name for logs, e.g. "article.update"
            handler: Coroutine function that authorizes and performs the mutation

        Returns:
            A successful result carrying the handler's return value, or a
            failed result carrying a user-facing error
        """
        try:
            async with self._transaction():
                data = await handler()
        except AppException as exc:
            logger.info(
                "action_failed",
                action=action,
                error_code=exc.error_code,
                message=exc.message,
            )
            return ActionResult.fail(exc.message, exc.error_code, exc.status_code)
        except Exception as exc:
            logger.exception(
                "action_error",
                action=action,
                error_type=type(exc).__name__,
            )
            return ActionResult.fail(UNEXPECTED_ERROR, "internal_error")

        logger.info("action_succeeded", action=action)
        return ActionResult.ok(data)


def action_response(
    result: ActionResult[Any],
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render an ``ActionResult`` with a status code matching its outcome."""
    status_code = success_status if result.success else result.status_code
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json"),
    )


async def get_action_gateway(checker: Checker, db: DBSession) -> ActionGateway:
    """FastAPI dependency providing a request-scoped gateway."""
    return ActionGateway(checker, db)


Gateway = Annotated[ActionGateway, Depends(get_action_gateway)]
