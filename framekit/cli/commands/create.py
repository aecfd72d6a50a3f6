"""Project scaffolding command for the framekit CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from framekit.create import CreateEffects
from framekit.create import create as run_create
from framekit.exceptions import PromptCancelled
from framekit.ui import RichInteraction

from . import exit_on_error

console = Console()


def create() -> None:
    """Create a new project from a template."""
    ui = RichInteraction(console)
    with exit_on_error():
        try:
            run_create(CreateEffects(ui=ui))
        except PromptCancelled:
            ui.cancel("create cancelled")
            raise typer.Exit(0)
