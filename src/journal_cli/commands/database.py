"""Command: journal-admin init-db - Create tables and seed the defaults."""

import asyncio

import typer
from rich.console import Console


console = Console()


async def _init_db(seed: bool) -> tuple[list[str], list[str]]:
    from journal.core.database import Base, async_engine, async_session_factory
    from journal.modules import load_models
    from journal.modules.permissions.services import sync_default_permissions
    from journal.modules.roles.services import seed_default_roles

    load_models()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed:
        return [], []

    async with async_session_factory() as session:
        created_permissions = await sync_default_permissions(session)
        created_roles = await seed_default_roles(session)
        await session.commit()
    return created_permissions, created_roles


def init_db(
    seed: bool = typer.Option(
        True, "--seed/--no-seed", help="Also sync default permissions and roles"
    ),
) -> None:
    """Create all tables that do not exist yet.

    Existing tables are left as they are; this is not a migration tool.
    """
    permissions, roles = asyncio.run(_init_db(seed))

    console.print("[green]✓[/green] Database tables are in place")
    if seed:
        console.print(f"[green]✓[/green] Permissions created: {len(permissions)}")
        console.print(f"[green]✓[/green] Roles created: {', '.join(roles) or 'none'}")
