#!/usr/bin/env python3
"""
Main CLI entry point for the projectdesk backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from projectdesk import __version__
from projectdesk.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="projectdesk")
def cli() -> None:
    """projectdesk CLI - manage the server, database and administrators."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the projectdesk API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting projectdesk API server", host=host, port=port, reload=reload)

    if log_level == "debug":
        os.environ["PROJECTDESK_DEBUG"] = "true"
    else:
        os.environ.setdefault("PROJECTDESK_DEBUG", "false")

    try:
        uvicorn.run(
            "projectdesk.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


@cli.command("init-db")
def init_db() -> None:
    """Create all tables (development bootstrap; production uses migrations)."""
    from projectdesk.database.connection import create_all

    configure_logging()
    asyncio.run(create_all())
    click.echo("✓ Database tables created")


@cli.command("create-admin")
@click.option("--user-name", required=True, help="Login name of the administrator")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (prompted when omitted)",
)
@click.option("--email", default=None, help="E-mail address")
def create_admin(user_name: str, password: str, email: str | None) -> None:
    """Create a host-level user holding the administrator role."""
    from projectdesk.config import settings
    from projectdesk.database.connection import get_async_session
    from projectdesk.dbmodels import Users
    from projectdesk.errors import IdentityError
    from projectdesk.identity import UserManager

    configure_logging()

    async def do_create() -> int:
        async with get_async_session() as session:
            manager = UserManager(session)
            user = Users(user_name=user_name, email=email, roles=[])
            (await manager.create(user, password)).raise_on_error()
            (await manager.add_to_role(user, settings.administrator_role)).raise_on_error()
            await session.flush()
            return user.id

    try:
        user_id = asyncio.run(do_create())
    except IdentityError as e:
        logger.error("Failed to create administrator", error=str(e))
        click.echo(f"✗ Error creating administrator: {e}", err=True)
        sys.exit(1)

    logger.info("Administrator created", created_user_id=user_id, user_name=user_name)
    click.echo(f"✓ Administrator created: {user_id}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
