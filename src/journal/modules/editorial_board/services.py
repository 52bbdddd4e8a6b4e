"""Editorial board service.

Board members are shown in ``position`` order. New members go to the end
unless a position is given; ``reorder_members`` renumbers the listed
members from 1 in the order supplied.
"""

from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.errors import NotFoundError, ValidationError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.utils.text import normalize_email
from journal.modules.editorial_board.models import EditorialBoardMember
from journal.modules.editorial_board.repos import EditorialBoardRepository
from journal.modules.editorial_board.schemas import (
    BoardMemberCreate,
    BoardMemberResponse,
    BoardMemberUpdate,
    BoardOrderUpdate,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()

_NULLABLE_FIELDS = frozenset({"image", "email", "linkedin", "orcid"})


class EditorialBoardService:
    """Service for the editorial board."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = EditorialBoardRepository(db)

    async def list_members(self, include_archived: bool = True) -> list[EditorialBoardMember]:
        return await self.repo.list_all(include_archived=include_archived)

    async def _get_member(self, member_id: UUID) -> EditorialBoardMember:
        member = await self.repo.get_by_id(member_id)
        if not member:
            raise NotFoundError(
                "Board member not found",
                resource="editorialboard",
                resource_id=str(member_id),
            )
        return member

    async def create_member(
        self, actor: "User | None", data: BoardMemberCreate
    ) -> ActionResult[Any]:
        """Add a member to the board."""

        async def handler() -> BoardMemberResponse:
            await self.gateway.authorize(actor, "editorialboard.CREATE")
            position = data.position or await self.repo.max_position() + 1
            member = await self.repo.create(
                EditorialBoardMember(
                    name=data.name,
                    designation=data.designation,
                    member_type=data.member_type.value,
                    bio=data.bio,
                    image=data.image,
                    email=normalize_email(data.email),
                    linkedin=data.linkedin,
                    orcid=data.orcid,
                    expertise=list(data.expertise),
                    position=position,
                    archived=data.archived,
                )
            )
            logger.info(
                "board_member_created",
                member_id=str(member.id),
                position=member.position,
            )
            return BoardMemberResponse.model_validate(member)

        return await self.gateway.run("editorialboard.create", handler)

    async def update_member(
        self, actor: "User | None", member_id: UUID, data: BoardMemberUpdate
    ) -> ActionResult[Any]:
        """Edit a board member."""

        async def handler() -> BoardMemberResponse:
            await self.gateway.authorize(actor, "editorialboard.UPDATE")
            member = await self._get_member(member_id)

            for field, value in data.model_dump(exclude_unset=True).items():
                if value is None and field not in _NULLABLE_FIELDS:
                    continue
                if isinstance(value, Enum):
                    value = value.value
                if field == "email":
                    value = normalize_email(value)
                setattr(member, field, value)

            member = await self.repo.update(member)
            logger.info("board_member_updated", member_id=str(member.id))
            return BoardMemberResponse.model_validate(member)

        return await self.gateway.run("editorialboard.update", handler)

    async def reorder_members(
        self, actor: "User | None", data: BoardOrderUpdate
    ) -> ActionResult[Any]:
        """Renumber the listed members in the order given."""

        async def handler() -> list[BoardMemberResponse]:
            await self.gateway.authorize(actor, "editorialboard.UPDATE")
            members = {m.id: m for m in await self.repo.get_by_ids(data.member_ids)}
            missing = [str(member_id) for member_id in data.member_ids if member_id not in members]
            if missing:
                raise ValidationError(
                    "Unknown board members",
                    errors=[
                        {"field": "member_ids", "message": f"No board member with id {member_id}"}
                        for member_id in missing
                    ],
                )

            for position, member_id in enumerate(data.member_ids, start=1):
                members[member_id].position = position
            await self.db.flush()

            logger.info("board_reordered", members=len(data.member_ids))
            return [
                BoardMemberResponse.model_validate(m)
                for m in await self.repo.list_all()
            ]

        return await self.gateway.run("editorialboard.reorder", handler)

    async def delete_member(self, actor: "User | None", member_id: UUID) -> ActionResult[Any]:
        """Remove a member from the board."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "editorialboard.DELETE")
            member = await self._get_member(member_id)

            await self.repo.delete(member)
            logger.info("board_member_deleted", member_id=str(member_id))

        return await self.gateway.run("editorialboard.delete", handler)


# Type alias for dependency injection
EditorialBoardSvc = Annotated[EditorialBoardService, Depends(EditorialBoardService)]
