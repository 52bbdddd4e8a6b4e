"""Command: journal-admin seed-roles - Create the default roles."""

import asyncio

from rich.console import Console


console = Console()


async def _seed() -> list[str]:
    from journal.core.database import async_session_factory
    from journal.modules import load_models
    from journal.modules.roles.services import seed_default_roles

    load_models()
    async with async_session_factory() as session:
        created = await seed_default_roles(session)
        await session.commit()
    return created


def seed_roles() -> None:
    """Create Super Admin, Admin, Editor, Author and Viewer if they are missing.

    Run sync-permissions first so the default grants can be attached.
    Existing roles are not modified.
    """
    created = asyncio.run(_seed())

    if not created:
        console.print("[green]✓[/green] Default roles already exist")
        return

    for name in created:
        console.print(f"  [green]+[/green] {name}")
    console.print(f"\n[green]✓[/green] Created {len(created)} role(s)")
