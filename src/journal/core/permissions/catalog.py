"""Permission keys, the default catalog, and the process-wide catalog cache.

A permission key names one action on one resource type, written
``<resource>.<ACTION>`` (for example ``article.UPDATE``). The canonical set
of valid keys lives in the ``permissions`` table; ``DEFAULT_PERMISSIONS``
is what ``sync-permissions`` writes there on a fresh install.

The checker validates every key against the catalog and denies unknown
ones. Loading the catalog per check would cost a query each time, so it is
held in a ``CatalogCache`` that permission mutations invalidate explicitly,
once their transaction has committed.
"""

import re
from collections.abc import Iterable, Iterator

import structlog
from pydantic import BaseModel, ConfigDict
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, SessionTransaction


logger = structlog.get_logger()

_INVALIDATE_ON_COMMIT = "invalidate_permission_catalog"

PERMISSION_KEY_PATTERN = re.compile(r"^(?P<resource>[a-z][a-z0-9_]*)\.(?P<action>[A-Z][A-Z_]*)$")

CRUD_ACTIONS: tuple[str, ...] = ("CREATE", "READ", "UPDATE", "DELETE")

# resource -> (plural label used in messages, catalog category)
RESOURCES: dict[str, tuple[str, str]] = {
    "article": ("articles", "Content"),
    "author": ("authors", "Content"),
    "callforpapers": ("calls for papers", "Content"),
    "notification": ("notifications", "Content"),
    "editorialboard": ("editorial board members", "Content"),
    "journalissue": ("journal issues", "Content"),
    "media": ("media", "Content"),
    "category": ("categories", "Content"),
    "user": ("users", "Administration"),
    "role": ("roles", "Administration"),
    "permission": ("permissions", "Administration"),
}

_ACTION_VERBS: dict[str, str] = {
    "CREATE": "create",
    "READ": "view",
    "UPDATE": "update",
    "DELETE": "delete",
}


class InvalidPermissionKeyError(ValueError):
    """Raised for a permission key that does not follow ``<resource>.<ACTION>``.

    This signals a bug at the call site, not a denial.
    """

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Malformed permission key: {key!r}")


class PermissionKey(BaseModel):
    """A parsed permission key."""

    model_config = ConfigDict(frozen=True)

    resource: str
    action: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.action}"


class PermissionDefinition(BaseModel):
    """A catalog entry: a key plus the description shown to administrators."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str
    category: str = "Custom"


def is_valid_permission_key(key: object) -> bool:
    """Return True if ``key`` is a well-formed permission key string."""
    return isinstance(key, str) and PERMISSION_KEY_PATTERN.match(key) is not None


def parse_permission_key(key: object) -> PermissionKey:
    """Split a permission key into resource and action.

    Raises:
        InvalidPermissionKeyError: If the key is not a well-formed string
    """
    if not isinstance(key, str):
        raise InvalidPermissionKeyError(key)
    match = PERMISSION_KEY_PATTERN.match(key)
    if match is None:
        raise InvalidPermissionKeyError(key)
    return PermissionKey(resource=match["resource"], action=match["action"])


def make_permission_key(resource: str, action: str) -> str:
    """Build a permission key and validate the result."""
    key = f"{resource}.{action}"
    parse_permission_key(key)
    return key


def describe_action(key: str) -> str:
    """Human-readable phrase for a key, e.g. ``"update articles"``.

    Used to specialize denial messages; unknown resources and custom
    actions fall back to the raw key components.
    """
    parsed = parse_permission_key(key)
    label = RESOURCES.get(parsed.resource, (parsed.resource, ""))[0]
    verb = _ACTION_VERBS.get(parsed.action, parsed.action.lower().replace("_", " "))
    return f"{verb} {label}"


def _default_definitions() -> list[PermissionDefinition]:
    definitions: list[PermissionDefinition] = []
    for resource, (label, category) in RESOURCES.items():
        for action in CRUD_ACTIONS:
            definitions.append(
                PermissionDefinition(
                    key=make_permission_key(resource, action),
                    description=f"{_ACTION_VERBS[action].capitalize()} {label}",
                    category=category,
                )
            )
    return definitions


DEFAULT_PERMISSIONS: tuple[PermissionDefinition, ...] = tuple(_default_definitions())


def _keys(resource: str, *actions: str) -> set[str]:
    return {make_permission_key(resource, action) for action in actions}


# Super Admin needs no grants: it passes every check by name.
DEFAULT_ROLE_GRANTS: dict[str, frozenset[str]] = {
    "Admin": frozenset(definition.key for definition in DEFAULT_PERMISSIONS),
    "Editor": frozenset(
        _keys("article", *CRUD_ACTIONS)
        | _keys("callforpapers", *CRUD_ACTIONS)
        | _keys("author", "CREATE", "READ", "UPDATE")
        | _keys("notification", "CREATE", "READ", "UPDATE")
        | _keys("media", *CRUD_ACTIONS)
        | _keys("editorialboard", "READ")
        | _keys("journalissue", "READ")
        | _keys("category", "READ")
    ),
    "Author": frozenset(
        _keys("article", "CREATE", "READ")
        | _keys("author", "READ")
        | _keys("media", "CREATE", "READ")
    ),
    "Viewer": frozenset(
        _keys("article", "READ")
        | _keys("author", "READ")
        | _keys("callforpapers", "READ")
        | _keys("notification", "READ")
        | _keys("editorialboard", "READ")
        | _keys("journalissue", "READ")
    ),
}

DEFAULT_ROLE_DESCRIPTIONS: dict[str, str] = {
    "Super Admin": "Unrestricted access, including role and permission management",
    "Admin": "Manages content, users and roles",
    "Editor": "Manages articles, calls for papers, notifications and media",
    "Author": "Writes articles and edits their own work",
    "Viewer": "Read-only access to the admin area",
}


class PermissionCatalog:
    """Immutable set of valid permission keys."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = frozenset(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def unknown(self, keys: Iterable[str]) -> list[str]:
        """Return the keys from ``keys`` that are not in the catalog, sorted."""
        return sorted(set(keys) - self._keys)

    @classmethod
    def defaults(cls) -> "PermissionCatalog":
        """Catalog built from ``DEFAULT_PERMISSIONS`` without touching the store."""
        return cls(definition.key for definition in DEFAULT_PERMISSIONS)


class CatalogCache:
    """Process-wide cache of the permission catalog.

    The first ``get`` loads every key from the ``permissions`` table.
    Later calls return the cached catalog until ``invalidate`` is called.
    Permission mutations use ``invalidate_on_commit`` so a reload can
    never pick up the catalog from before their commit.
    """

    def __init__(self) -> None:
        self._catalog: PermissionCatalog | None = None

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    async def get(self, session: AsyncSession) -> PermissionCatalog:
        """Return the cached catalog, loading it from the store if needed."""
        if self._catalog is None:
            self._catalog = await self.load(session)
        return self._catalog

    async def load(self, session: AsyncSession) -> PermissionCatalog:
        """Read all permission keys from the store."""
        from journal.core.permissions.models import Permission  # noqa: PLC0415

        result = await session.execute(select(Permission.key))
        catalog = PermissionCatalog(result.scalars().all())
        logger.debug("permission_catalog_loaded", size=len(catalog))
        return catalog

    def invalidate(self) -> None:
        """Drop the cached catalog so the next ``get`` reloads it."""
        if self._catalog is not None:
            logger.info("permission_catalog_invalidated")
        self._catalog = None

    def invalidate_on_commit(self, session: AsyncSession) -> None:
        """Invalidate once ``session``'s current transaction commits.

        Releasing a SAVEPOINT does not count; a rollback never invalidates.
        """
        session.info[_INVALIDATE_ON_COMMIT] = True

    def prime(self, catalog: PermissionCatalog) -> None:
        """Install a catalog directly, bypassing the store."""
        self._catalog = catalog


catalog_cache = CatalogCache()


@event.listens_for(Session, "after_commit")
def _invalidate_after_commit(session: Session) -> None:
    if session.in_nested_transaction():
        return
    if session.info.pop(_INVALIDATE_ON_COMMIT, False):
        catalog_cache.invalidate()


@event.listens_for(Session, "after_soft_rollback")
def _forget_invalidation(session: Session, previous_transaction: SessionTransaction) -> None:
    if previous_transaction.parent is None:
        session.info.pop(_INVALIDATE_ON_COMMIT, None)
