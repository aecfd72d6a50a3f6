"""Authentication commands for the framekit CLI."""

from __future__ import annotations

from rich.console import Console

from framekit.auth.flow import AuthEffects
from framekit.auth.flow import login as run_login
from framekit.auth.flow import logout as run_logout
from framekit.auth.flow import whoami as run_whoami
from framekit.ui import RichInteraction

from . import exit_on_error

console = Console()


def _effects() -> AuthEffects:
    return AuthEffects(ui=RichInteraction(console))


def login() -> None:
    """Log in via the browser with a confirmation code.

    Saves an API key for later commands.
    """
    with exit_on_error():
        run_login(_effects())


def logout() -> None:
    """Remove the stored API key."""
    with exit_on_error():
        run_logout(_effects())
    console.print("[green]Successfully logged out.[/green]")


def whoami() -> None:
    """Show the user and workspaces for the active API key."""
    with exit_on_error():
        run_whoami(_effects())
