"""Sesame CLI application using Typer.

This module provides command-line utilities for the Sesame service,
including secret generation and store initialization.
"""

import asyncio
import logging
import secrets

import typer
from rich.console import Console

from sesame.presentation.logging_config import configure_logging
from sesame_auth import ConfigError, StoreError
from sesame_auth.persistence.sqlalchemy import AccountStore
from sesame_config.settings import load_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sesame",
    help="Sesame - signed session token service CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

# Create store subcommand group
store_app = typer.Typer(
    name="store",
    help="Account store utilities",
    no_args_is_help=True,
)
app.add_typer(store_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a signing secret for Sesame configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Sesame Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes of entropy for HMAC signing
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}", soft_wrap=True)

    console.print("=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


async def _init_store(store: AccountStore) -> None:
    try:
        await store.connect()
    finally:
        await store.dispose()


@store_app.command("init")
def init_store() -> None:
    """Connect to the configured store and create the accounts table.

    Existing tables are left untouched.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(code=2) from e

    configure_logging(settings.log_level)

    store = AccountStore.from_url(
        settings.database_url,
        collection=settings.store_collection,
        operation_timeout=settings.store_timeout_seconds,
        connect_timeout=settings.store_connect_timeout_seconds,
    )
    try:
        asyncio.run(_init_store(store))
    except StoreError as e:
        console.print(f"[red]Store error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]Account store ready[/green] "
        f"(collection: [bold]{settings.store_collection}[/bold])"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
