"""Notification service."""

from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.errors import NotFoundError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.modules.notifications.models import Notification
from journal.modules.notifications.repos import NotificationRepository
from journal.modules.notifications.schemas import (
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()

_NULLABLE_FIELDS = frozenset({"link", "expires_at"})


class NotificationService:
    """Service for site notifications."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = NotificationRepository(db)

    async def list_notifications(self) -> list[Notification]:
        return await self.repo.list_all()

    async def _get_notification(self, notification_id: UUID) -> Notification:
        notification = await self.repo.get_by_id(notification_id)
        if not notification:
            raise NotFoundError(
                "Notification not found",
                resource="notification",
                resource_id=str(notification_id),
            )
        return notification

    async def create_notification(
        self, actor: "User | None", data: NotificationCreate
    ) -> ActionResult[Any]:
        """Publish a notification."""

        async def handler() -> NotificationResponse:
            await self.gateway.authorize(actor, "notification.CREATE")
            notification = await self.repo.create(
                Notification(
                    title=data.title,
                    content=data.content,
                    type=data.type.value,
                    link=data.link,
                    priority=data.priority.value,
                    expires_at=data.expires_at,
                    is_active=data.is_active,
                )
            )
            logger.info("notification_created", notification_id=str(notification.id))
            return NotificationResponse.model_validate(notification)

        return await self.gateway.run("notification.create", handler)

    async def update_notification(
        self, actor: "User | None", notification_id: UUID, data: NotificationUpdate
    ) -> ActionResult[Any]:
        """Edit a notification."""

        async def handler() -> NotificationResponse:
            await self.gateway.authorize(actor, "notification.UPDATE")
            notification = await self._get_notification(notification_id)

            for field, value in data.model_dump(exclude_unset=True).items():
                if value is None and field not in _NULLABLE_FIELDS:
                    continue
                if isinstance(value, Enum):
                    value = value.value
                setattr(notification, field, value)

            notification = await self.repo.update(notification)
            logger.info("notification_updated", notification_id=str(notification.id))
            return NotificationResponse.model_validate(notification)

        return await self.gateway.run("notification.update", handler)

    async def delete_notification(
        self, actor: "User | None", notification_id: UUID
    ) -> ActionResult[Any]:
        """Remove a notification."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "notification.DELETE")
            notification = await self._get_notification(notification_id)

            await self.repo.delete(notification)
            logger.info("notification_deleted", notification_id=str(notification_id))

        return await self.gateway.run("notification.delete", handler)


# Type alias for dependency injection
NotificationSvc = Annotated[NotificationService, Depends(NotificationService)]
