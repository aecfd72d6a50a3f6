"""Main entry point for the framekit CLI."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from .commands import auth, create

app = typer.Typer(
    name="framekit",
    help="framekit CLI - Log in to the API and scaffold new projects",
    no_args_is_help=True,
)

app.command()(auth.login)
app.command()(auth.logout)
app.command()(auth.whoami)
app.command()(create.create)


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from framekit import __version__

        typer.echo(f"framekit {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
        logging.getLogger("httpx").setLevel(logging.INFO)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """framekit CLI root callback."""
    _ = version
    _configure_logging(verbose)


@app.command()
def version() -> None:
    """Show the CLI version."""
    from framekit import __version__

    typer.echo(f"framekit {__version__}")


if __name__ == "__main__":
    app()
