"""Warden CLI application using Typer.

Operational utilities for a Warden deployment: serving the API, secret
generation, schema creation and expired token cleanup.
"""

import asyncio
import secrets
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from warden_config.settings import get_settings
from warden_identity.application.factory import build_auth_engine
from warden_identity.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_session_maker,
    create_tables,
)

app = typer.Typer(
    name="warden",
    help="Warden - account and credential lifecycle CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

tokens_app = typer.Typer(
    name="tokens",
    help="Verification and reset token maintenance",
    no_args_is_help=True,
)
app.add_typer(tokens_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Warden configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing session tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Warden Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@db_app.command("init")
def init_db() -> None:
    """Create any missing database tables."""

    async def _run() -> None:
        engine = create_engine(get_settings().database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date.[/green]")


@tokens_app.command("cleanup")
def cleanup_tokens() -> None:
    """Delete expired verification and password reset tokens.

    Also drops password reset rate-limit windows that have closed.
    Safe to run from cron.
    """

    async def _run() -> int:
        settings = get_settings()
        engine = create_engine(settings.database_url)
        try:
            async with create_session_maker(engine)() as session:
                auth_engine = build_auth_engine(session, settings)
                return await auth_engine.cleanup_expired_tokens()
        finally:
            await engine.dispose()

    deleted = asyncio.run(_run())
    console.print(f"[green]Deleted {deleted} expired token(s).[/green]")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Restart on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "warden.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
