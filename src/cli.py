"""CLI entry point for the storefront test suite."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from src.auth.auth_manager import (
    DEFAULT_AUTH_STATE_FILE,
    auth_state_path,
    capture_auth_state,
    remove_auth_state,
)
from src.models.config import (
    DEFAULT_BASE_URL,
    REQUIRED_ENV_VARS,
    ConfigurationError,
    Settings,
    load_environment,
)

console = Console()

_ENV_TEMPLATE = f"""\
BASE_URL={DEFAULT_BASE_URL}
USER_NAME=standard_user
USER_PASSWORD=
# Optional
# BROWSER=chromium
# HEADLESS=true
# SLOW_MO=0
# RECORD_VIDEO=false
# TRACE=false
# AUTH_STATE_DIR=fixtures/auth
# RESULTS_DIR=test-results
"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_settings(env_file: str) -> Settings:
    load_environment(env_file)
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print(f"Check the environment or {env_file}.")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """End-to-end browser tests for the storefront demo app"""
    setup_logging(verbose)


@cli.command("check-env")
@click.option("--env-file", default=".env", help="Optional .env file to load")
def check_env(env_file: str) -> None:
    """Validate the environment before a test run."""
    settings = _load_settings(env_file)

    table = Table(title="Environment")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Base URL", settings.base_url)
    table.add_row("User", settings.credentials.username)
    table.add_row("Password", "***")
    table.add_row("Browser", f"{settings.browser.browser_name} (headless={settings.browser.headless})")
    table.add_row("Auth state dir", settings.auth_dir)
    table.add_row("Results dir", settings.results_dir)
    console.print(table)
    console.print(f"[green]Environment validated - {settings.base_url}[/green]")


@cli.command("init-env")
@click.option("--env-file", default=".env", help="Path of the .env file to create")
def init_env(env_file: str) -> None:
    """Create a .env template with the required variables."""
    path = Path(env_file)
    if path.exists():
        if not click.confirm(f"{env_file} already exists. Overwrite?"):
            return
    path.write_text(_ENV_TEMPLATE)
    console.print(f"[green]Created {path}[/green]")
    console.print(f"Required: {', '.join(REQUIRED_ENV_VARS)}")


@cli.group()
def auth() -> None:
    """Manage the cached authentication state."""
    pass


@auth.command("save")
@click.option("--filename", "-f", default=DEFAULT_AUTH_STATE_FILE, help="Auth state file name")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--env-file", default=".env", help="Optional .env file to load")
def auth_save(filename: str, headed: bool, env_file: str) -> None:
    """Log in once and write the session state for later runs."""
    settings = _load_settings(env_file)
    if headed:
        settings = settings.model_copy(
            update={"browser": settings.browser.model_copy(update={"headless": False})}
        )
    path = asyncio.run(capture_auth_state(settings, filename))
    console.print(f"[green]User authentication completed:[/green] [blue]{path}[/blue]")


@auth.command("path")
@click.option("--filename", "-f", default=DEFAULT_AUTH_STATE_FILE, help="Auth state file name")
@click.option("--env-file", default=".env", help="Optional .env file to load")
def auth_path(filename: str, env_file: str) -> None:
    """Show where the auth state lives and whether it exists."""
    settings = _load_settings(env_file)
    path = auth_state_path(settings.auth_dir, filename)
    status = "[green]exists[/green]" if path.exists() else "[yellow]missing[/yellow]"
    console.print(f"{path} ({status})")


@auth.command("remove")
@click.option("--filename", "-f", default=DEFAULT_AUTH_STATE_FILE, help="Auth state file name")
@click.option("--env-file", default=".env", help="Optional .env file to load")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def auth_remove(filename: str, env_file: str, yes: bool) -> None:
    """Delete the cached auth state file."""
    settings = _load_settings(env_file)
    path = auth_state_path(settings.auth_dir, filename)
    if not yes and not click.confirm(f"Delete {path}?"):
        return
    if remove_auth_state(path):
        console.print(f"[green]Removed {path}[/green]")
    else:
        console.print(f"[yellow]No auth state at {path}[/yellow]")


if __name__ == "__main__":
    cli()
