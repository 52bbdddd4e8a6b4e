"""Factories for journal content schemas."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from journal.modules.authors.schemas import AuthorCreate
from journal.modules.call_for_papers.schemas import CallForPapersCreate
from journal.modules.editorial_board.schemas import BoardMemberCreate


class AuthorCreateFactory(ModelFactory):
    """Factory for creating AuthorCreate schemas."""

    __model__ = AuthorCreate

    @classmethod
    def name(cls) -> str:
        """Generate an author name."""
        return f"Author {uuid4().hex[:6]}"

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"author-{uuid4().hex[:8]}@example.com"

    @classmethod
    def bio(cls) -> str | None:
        return None


class CallForPapersCreateFactory(ModelFactory):
    """Factory for creating CallForPapersCreate schemas."""

    __model__ = CallForPapersCreate

    @classmethod
    def title(cls) -> str:
        return f"Volume {uuid4().hex[:4]}"

    @classmethod
    def description(cls) -> str:
        return "Submissions on any topic in the journal's scope."

    @classmethod
    def deadline(cls) -> datetime:
        """Thirty days from now."""
        return datetime.now(UTC) + timedelta(days=30)

    @classmethod
    def is_active(cls) -> bool:
        return True


class BoardMemberCreateFactory(ModelFactory):
    """Factory for creating BoardMemberCreate schemas."""

    __model__ = BoardMemberCreate

    @classmethod
    def name(cls) -> str:
        return f"Board Member {uuid4().hex[:6]}"

    @classmethod
    def designation(cls) -> str:
        return "Associate Editor"

    @classmethod
    def email(cls) -> str:
        return f"board-{uuid4().hex[:8]}@example.com"

    @classmethod
    def position(cls) -> int | None:
        """Append to the end of the board."""
        return None

    @classmethod
    def archived(cls) -> bool:
        return False
