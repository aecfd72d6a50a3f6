"""CLI command modules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.markup import escape

from framekit.exceptions import FramekitError

_console = Console(stderr=True)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print a framekit error in red and exit non-zero."""
    try:
        yield
    except FramekitError as e:
        _console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        raise typer.Exit(1) from e
