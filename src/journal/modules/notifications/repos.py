"""Notification repository for database operations."""

from uuid import UUID

from sqlalchemy import select

from journal.api.dependencies import DBSession
from journal.modules.notifications.models import Notification


class NotificationRepository:
    """Repository for Notification database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        result = await self.session.execute(
            select(Notification).where(Notification.id == notification_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Notification]:
        result = await self.session.execute(
            select(Notification).order_by(Notification.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, notification: Notification) -> Notification:
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def delete(self, notification: Notification) -> None:
        await self.session.delete(notification)
        await self.session.flush()
