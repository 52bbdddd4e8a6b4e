"""Call-for-papers service.

Opening a call also publishes a notification announcing it. Both rows are
written in the same transaction, so a failure leaves neither behind.
"""

from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.errors import NotFoundError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.modules.call_for_papers.models import CallForPapers
from journal.modules.call_for_papers.repos import CallForPapersRepository
from journal.modules.call_for_papers.schemas import (
    CallForPapersCreate,
    CallForPapersCreated,
    CallForPapersResponse,
    CallForPapersUpdate,
)
from journal.modules.notifications.models import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from journal.modules.notifications.repos import NotificationRepository


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()

CALL_FOR_PAPERS_LINK = "/journals/call-for-papers"


def announcement_for(call: CallForPapers) -> Notification:
    """The notification published when ``call`` is opened."""
    return Notification(
        title=f"Call for Papers: {call.title}",
        content=call.description,
        type=NotificationType.CALL_FOR_PAPERS.value,
        link=CALL_FOR_PAPERS_LINK,
        priority=NotificationPriority.HIGH.value,
        expires_at=call.deadline,
        is_active=call.is_active,
    )


class CallForPapersService:
    """Service for calls for papers."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = CallForPapersRepository(db)
        self.notification_repo = NotificationRepository(db)

    async def list_calls(self) -> list[CallForPapers]:
        return await self.repo.list_all()

    async def _get_call(self, call_id: UUID) -> CallForPapers:
        call = await self.repo.get_by_id(call_id)
        if not call:
            raise NotFoundError(
                "Call for papers not found",
                resource="callforpapers",
                resource_id=str(call_id),
            )
        return call

    async def create_call(
        self, actor: "User | None", data: CallForPapersCreate
    ) -> ActionResult[Any]:
        """Open a call for papers and announce it."""

        async def handler() -> CallForPapersCreated:
            await self.gateway.authorize(actor, "callforpapers.CREATE")
            call = await self.repo.create(
                CallForPapers(
                    title=data.title,
                    description=data.description,
                    deadline=data.deadline,
                    is_active=data.is_active,
                )
            )
            notification = await self.notification_repo.create(announcement_for(call))
            logger.info(
                "call_for_papers_created",
                call_id=str(call.id),
                notification_id=str(notification.id),
            )
            response = CallForPapersResponse.model_validate(call)
            return CallForPapersCreated(
                **response.model_dump(),
                notification_id=notification.id,
            )

        return await self.gateway.run("callforpapers.create", handler)

    async def update_call(
        self, actor: "User | None", call_id: UUID, data: CallForPapersUpdate
    ) -> ActionResult[Any]:
        """Edit a call for papers."""

        async def handler() -> CallForPapersResponse:
            await self.gateway.authorize(actor, "callforpapers.UPDATE")
            call = await self._get_call(call_id)

            for field, value in data.model_dump(exclude_none=True).items():
                setattr(call, field, value)

            call = await self.repo.update(call)
            logger.info("call_for_papers_updated", call_id=str(call.id))
            return CallForPapersResponse.model_validate(call)

        return await self.gateway.run("callforpapers.update", handler)

    async def delete_call(self, actor: "User | None", call_id: UUID) -> ActionResult[Any]:
        """Delete a call for papers. Its announcement is left in place."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "callforpapers.DELETE")
            call = await self._get_call(call_id)

            await self.repo.delete(call)
            logger.info("call_for_papers_deleted", call_id=str(call_id))

        return await self.gateway.run("callforpapers.delete", handler)


# Type alias for dependency injection
CallForPapersSvc = Annotated[CallForPapersService, Depends(CallForPapersService)]
