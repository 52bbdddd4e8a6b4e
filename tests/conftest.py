"""Pytest configuration and shared fixtures.

Database-backed tests run against an in-memory SQLite database. Each test
gets a fresh schema, the default permission catalog and the default roles.
"""

import os


os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SYNC_PERMISSIONS_ON_STARTUP", "false")

from collections.abc import AsyncGenerator, Awaitable, Callable, Iterable  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from journal.core.auth.backend import create_access_token, hash_password  # noqa: E402
from journal.core.database import Base, get_db  # noqa: E402
from journal.core.permissions.catalog import catalog_cache  # noqa: E402
from journal.core.permissions.models import Role  # noqa: E402
from journal.main import create_app  # noqa: E402
from journal.modules import load_models  # noqa: E402
from journal.modules.permissions.repos import PermissionRepository  # noqa: E402
from journal.modules.permissions.services import sync_default_permissions  # noqa: E402
from journal.modules.roles.repos import RoleRepository  # noqa: E402
from journal.modules.roles.services import seed_default_roles  # noqa: E402
from journal.modules.users.models import User  # noqa: E402
from journal.modules.users.repos import UserRepository  # noqa: E402
from tests.factories.user import TEST_PASSWORD  # noqa: E402


load_models()

MakeUser = Callable[..., Awaitable[User]]


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let pysqlite emit BEGIN itself so SAVEPOINT works inside transactions."""

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):  # noqa: ARG001
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(autouse=True)
def reset_catalog_cache():
    """The catalog cache is process-wide; start and end every test cold."""
    catalog_cache.invalidate()
    yield
    catalog_cache.invalidate()


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Bcrypt hash of TEST_PASSWORD, computed once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    _enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Database session shared by the test and the app under test."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded(db: AsyncSession) -> None:
    """Default permission catalog and default roles."""
    await sync_default_permissions(db)
    await seed_default_roles(db)
    await db.flush()


@pytest.fixture
async def roles(db: AsyncSession, seeded: None) -> dict[str, Role]:  # noqa: ARG001
    """Default roles by name."""
    return {role.name: role for role in await RoleRepository(db).list_all()}


@pytest.fixture
def make_user(db: AsyncSession, roles: dict[str, Role], password_hash: str) -> MakeUser:
    """Create a user with a default role and optional direct permissions."""

    async def _make(
        role_name: str = "Viewer",
        email: str | None = None,
        permissions: Iterable[str] = (),
        is_active: bool = True,
    ) -> User:
        direct = await PermissionRepository(db).get_by_keys(permissions)
        return await UserRepository(db).create(
            User(
                email=email or f"user-{uuid4().hex[:8]}@example.com",
                full_name=f"Test {role_name}",
                password_hash=password_hash,
                is_active=is_active,
                role=roles[role_name],
                direct_permissions=direct,
            )
        )

    return _make


@pytest.fixture
async def super_admin(make_user: MakeUser) -> User:
    return await make_user("Super Admin", email="root@example.com")


@pytest.fixture
async def admin(make_user: MakeUser) -> User:
    return await make_user("Admin", email="admin@example.com")


@pytest.fixture
async def editor(make_user: MakeUser) -> User:
    return await make_user("Editor", email="editor@example.com")


@pytest.fixture
async def author_user(make_user: MakeUser) -> User:
    return await make_user("Author", email="ada@example.com")


@pytest.fixture
async def viewer(make_user: MakeUser) -> User:
    return await make_user("Viewer", email="viewer@example.com")


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build a bearer header for a user."""

    def _headers(user: User | UUID) -> dict[str, str]:
        user_id = user if isinstance(user, UUID) else user.id
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
async def app(db: AsyncSession) -> FastAPI:
    """Application wired to the test session."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app under test."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
