"""Unit tests for text utilities."""

import pytest

from journal.core.utils.text import generate_slug, normalize_email, unique_slug


pytestmark = pytest.mark.unit


class TestGenerateSlug:
    def test_basic(self):
        assert generate_slug("Call for Papers: Volume 3") == "call-for-papers-volume-3"

    def test_collapses_whitespace_and_dashes(self):
        assert generate_slug("  Open -- Access   Week ") == "open-access-week"

    def test_max_length(self):
        assert generate_slug("a" * 50 + " b", max_length=10) == "a" * 10


class TestNormalizeEmail:
    def test_lowercases_and_strips(self):
        assert normalize_email("  Ada@Example.COM ") == "ada@example.com"

    def test_none_and_blank(self):
        assert normalize_email(None) is None
        assert normalize_email("   ") is None


class TestUniqueSlug:
    async def test_free_slug(self):
        async def is_taken(slug: str) -> bool:
            return False

        assert await unique_slug("Open Access", is_taken) == "open-access"

    async def test_adds_counter(self):
        taken = {"open-access", "open-access-2"}

        async def is_taken(slug: str) -> bool:
            return slug in taken

        assert await unique_slug("Open Access", is_taken) == "open-access-3"

    async def test_untitled_fallback(self):
        async def is_taken(slug: str) -> bool:
            return False

        assert await unique_slug("!!!", is_taken) == "untitled"
