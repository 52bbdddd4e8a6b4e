"""Main journal-admin CLI application."""

import typer
from rich.console import Console

from journal_cli import __version__
from journal_cli.commands import database, permissions, roles, users


console = Console()

app = typer.Typer(
    name="journal-admin",
    help="Set up the database and manage roles, permissions and admin accounts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="init-db")(database.init_db)
app.command(name="sync-permissions")(permissions.sync_permissions)
app.command(name="list-permissions")(permissions.list_permissions)
app.command(name="seed-roles")(roles.seed_roles)
app.command(name="create-admin")(users.create_admin)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """journal-admin - manage the journal admin backend."""
    if version:
        console.print(f"[bold cyan]journal-admin[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
