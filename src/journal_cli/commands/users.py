"""Command: journal-admin create-admin - Create an admin-area account."""

import asyncio

import typer
from rich.console import Console


console = Console()


class CreateAdminError(Exception):
    """Raised when the account cannot be created."""


async def _create(email: str, password: str, full_name: str, role_name: str) -> str:
    from journal.core.auth.backend import hash_password
    from journal.core.database import async_session_factory
    from journal.core.utils.text import normalize_email
    from journal.modules import load_models
    from journal.modules.roles.repos import RoleRepository
    from journal.modules.users.models import User
    from journal.modules.users.repos import UserRepository

    load_models()
    async with async_session_factory() as session:
        role = await RoleRepository(session).get_by_name(role_name)
        if role is None:
            raise CreateAdminError(
                f"Role '{role_name}' does not exist. Run 'journal-admin seed-roles' first."
            )

        user_repo = UserRepository(session)
        if await user_repo.get_by_email(email):
            raise CreateAdminError(f"A user with email {email} already exists.")

        user = await user_repo.create(
            User(
                email=normalize_email(email) or email,
                full_name=full_name,
                password_hash=hash_password(password),
                role=role,
            )
        )
        await session.commit()
        return str(user.id)


def create_admin(
    email: str = typer.Argument(..., help="Email address to log in with"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True
    ),
    full_name: str = typer.Option("Administrator", "--full-name", "-n"),
    role: str = typer.Option("Super Admin", "--role", "-r", help="Role to assign"),
) -> None:
    """Create an account, by default with the Super Admin role.

    This bypasses the admin API and its role-assignment rules, so it is the
    way to create the first account.
    """
    try:
        user_id = asyncio.run(_create(email, password, full_name, role))
    except CreateAdminError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[green]✓[/green] Created {email} with role {role} ({user_id})")
