"""Commands: journal-admin sync-permissions / list-permissions."""

import asyncio

from rich.console import Console
from rich.table import Table


console = Console()


async def _sync() -> list[str]:
    from journal.core.database import async_session_factory
    from journal.modules import load_models
    from journal.modules.permissions.services import sync_default_permissions

    load_models()
    async with async_session_factory() as session:
        created = await sync_default_permissions(session)
        await session.commit()
    return created


async def _list() -> list[tuple[str, str, int, int]]:
    from journal.core.database import async_session_factory
    from journal.modules import load_models
    from journal.modules.permissions.repos import PermissionRepository

    load_models()
    async with async_session_factory() as session:
        repo = PermissionRepository(session)
        counts = await repo.assignment_counts()
        return [
            (p.key, p.description or "", *counts.get(p.id, (0, 0)))
            for p in await repo.list_all()
        ]


def sync_permissions() -> None:
    """Insert default permissions that are missing from the catalog.

    Existing permissions, including their descriptions, are not changed.
    """
    created = asyncio.run(_sync())

    if not created:
        console.print("[green]✓[/green] Permission catalog already up to date")
        return

    for key in created:
        console.print(f"  [green]+[/green] {key}")
    console.print(f"\n[green]✓[/green] Added {len(created)} permission(s)")


def list_permissions() -> None:
    """Show the permission catalog with assignment counts."""
    rows = asyncio.run(_list())

    if not rows:
        console.print("[yellow]The permission catalog is empty.[/yellow]")
        return

    table = Table(title="Permission Catalog", show_header=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Roles", style="green", justify="right")
    table.add_column("Users", style="green", justify="right")

    for key, description, role_count, user_count in rows:
        table.add_row(key, description, str(role_count), str(user_count))

    console.print()
    console.print(table)
    console.print()
