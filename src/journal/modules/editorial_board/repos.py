"""Editorial board repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.modules.editorial_board.models import EditorialBoardMember


class EditorialBoardRepository:
    """Repository for EditorialBoardMember database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, member: EditorialBoardMember) -> EditorialBoardMember:
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def get_by_id(self, member_id: UUID) -> EditorialBoardMember | None:
        result = await self.session.execute(
            select(EditorialBoardMember).where(EditorialBoardMember.id == member_id)
        )
        return result.scalar_one_or_none()

    async def get_by_ids(self, member_ids: Iterable[UUID]) -> list[EditorialBoardMember]:
        wanted = set(member_ids)
        if not wanted:
            return []
        result = await self.session.execute(
            select(EditorialBoardMember).where(EditorialBoardMember.id.in_(wanted))
        )
        return list(result.scalars().all())

    async def list_all(self, include_archived: bool = True) -> list[EditorialBoardMember]:
        """List members in board order."""
        stmt = select(EditorialBoardMember).order_by(
            EditorialBoardMember.position, EditorialBoardMember.name
        )
        if not include_archived:
            stmt = stmt.where(EditorialBoardMember.archived.is_(False))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def max_position(self) -> int:
        """Highest position in use, or 0 for an empty board."""
        return (await self.session.scalar(select(func.max(EditorialBoardMember.position)))) or 0

    async def update(self, member: EditorialBoardMember) -> EditorialBoardMember:
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def delete(self, member: EditorialBoardMember) -> None:
        await self.session.delete(member)
        await self.session.flush()
