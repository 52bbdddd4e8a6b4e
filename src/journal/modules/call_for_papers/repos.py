"""Call-for-papers repository for database operations."""

from uuid import UUID

from sqlalchemy import select

from journal.api.dependencies import DBSession
from journal.modules.call_for_papers.models import CallForPapers


class CallForPapersRepository:
    """Repository for CallForPapers database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, call: CallForPapers) -> CallForPapers:
        self.session.add(call)
        await self.session.flush()
        await self.session.refresh(call)
        return call

    async def get_by_id(self, call_id: UUID) -> CallForPapers | None:
        result = await self.session.execute(
            select(CallForPapers).where(CallForPapers.id == call_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[CallForPapers]:
        """List calls, nearest deadline first."""
        result = await self.session.execute(
            select(CallForPapers).order_by(CallForPapers.deadline.asc())
        )
        return list(result.scalars().all())

    async def update(self, call: CallForPapers) -> CallForPapers:
        await self.session.flush()
        await self.session.refresh(call)
        return call

    async def delete(self, call: CallForPapers) -> None:
        await self.session.delete(call)
        await self.session.flush()
