"""Text processing utilities."""

import re
from collections.abc import Awaitable, Callable

from journal.core.constants import MAX_SLUG_LENGTH


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a title or name.

    Examples:
        >>> generate_slug("Call for Papers: Volume 3")
        'call-for-papers-volume-3'
        >>> generate_slug("  Émile   Durkheim ")
        'émile-durkheim'
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug[:max_length].strip("-")


def normalize_email(email: str | None) -> str | None:
    """Lowercase and strip an email address, keeping None as None."""
    if email is None:
        return None
    cleaned = email.strip().lower()
    return cleaned or None


async def unique_slug(
    name: str,
    is_taken: Callable[[str], Awaitable[bool]],
    max_length: int = MAX_SLUG_LENGTH,
) -> str:
    """Generate a slug and add a numeric suffix until ``is_taken`` rejects none.

    Examples:
        "Open Access" -> "open-access", then "open-access-2", "open-access-3"
    """
    base = generate_slug(name, max_length) or "untitled"
    slug = base
    counter = 2
    while await is_taken(slug):
        suffix = f"-{counter}"
        slug = f"{base[: max_length - len(suffix)]}{suffix}"
        counter += 1
    return slug
