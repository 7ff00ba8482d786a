#!/usr/bin/env python3
"""
Guestbook entry script.

Usage:
    python run.py --action server --reload
    python run.py --action health
    python run.py --action config
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
sys.path.insert(0, str(Path(__file__).parent))

from guestbook.core.config import validate_project_root
from guestbook.core.logging import get_logger, setup_logging

COMMENTS_TABLE = "comments"


def _masked_database_url() -> str:
    from sqlalchemy.engine import make_url

    from guestbook.core.config import get_database_url

    return make_url(get_database_url()).render_as_string(hide_password=True)


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "health", "config"]),
    default="server",
    help="Action to perform.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO level.")
@click.option("--debug", "-d", is_flag=True, help="Log at DEBUG level.")
@click.option("--host", default=None, help="Listen host (server action).")
@click.option("--port", default=None, type=int, help="Listen port (server action).")
@click.option("--reload", is_flag=True, help="Reload on code changes (server action).")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    Guestbook comment service.

    Serve the API, check that the database behind DSN is usable,
    or print the resolved configuration.
    """
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "health":
        check_health(logger)
    elif action == "config":
        show_config()


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn on the configured address, with CLI overrides."""
    from guestbook.core.config import get_server_address

    configured_host, configured_port = get_server_address()
    server_host = host or configured_host
    server_port = port or configured_port

    cmd = [
        sys.executable, "-m", "uvicorn",
        "guestbook.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": server_host, "port": server_port})
    click.echo(f"Guestbook listening on http://{server_host}:{server_port}")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


async def probe_database(url: str) -> list[str]:
    """
    Connect to the database and list its tables.

    Raises whatever the driver raises when the database is unreachable.
    """
    from sqlalchemy import inspect, text

    from guestbook.core.database import build_engine

    engine = build_engine(url)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    finally:
        await engine.dispose()


def check_health(logger) -> None:
    """Check DSN, connectivity and the comments table. Exits 1 on failure."""
    from guestbook.core.config import get_app_config, get_database_url

    checks: list[tuple[str, bool, str]] = []

    try:
        url = get_database_url()
        checks.append(("Database DSN", True, _masked_database_url()))
    except Exception as e:
        url = None
        checks.append(("Database DSN", False, str(e).splitlines()[0]))

    if url is not None:
        try:
            tables = asyncio.run(probe_database(url))
            checks.append(("Database connection", True, "SELECT 1 ok"))
            if COMMENTS_TABLE in tables:
                checks.append(("Comments table", True, COMMENTS_TABLE))
            elif get_app_config().database.create_tables_on_startup:
                checks.append(("Comments table", True, "created on server start"))
            else:
                checks.append(("Comments table", False, "missing"))
        except Exception as e:
            logger.warning("Database probe failed", extra={"error": str(e)})
            checks.append(("Database connection", False, str(e) or type(e).__name__))

    failed = False
    for name, passed, detail in checks:
        status = click.style("PASS", fg="green") if passed else click.style("FAIL", fg="red")
        click.echo(f"  {status}  {name} ({detail})")
        failed = failed or not passed

    if failed:
        sys.exit(1)


def show_config() -> None:
    """Print the YAML sections and the values derived from them."""
    from guestbook.core.config import get_app_config, get_server_address

    app_config = get_app_config()
    host, port = get_server_address()

    click.echo(f"server:   http://{host}:{port}")
    try:
        click.echo(f"database: {_masked_database_url()}")
    except Exception as e:
        click.echo(f"database: <DSN not set: {str(e).splitlines()[0]}>")

    sections = {
        "application": app_config.application,
        "database": app_config.database,
        "logging": app_config.logging,
        "features": app_config.features,
    }
    for title, section in sections.items():
        click.echo(f"\n[{title}]")
        for key, value in section.model_dump().items():
            click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    main()
