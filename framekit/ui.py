"""Interactive terminal surface used by the login and create flows.

Flows only talk to the :class:`Interaction` protocol so tests can swap in a
scripted fake. :class:`RichInteraction` is the real terminal implementation.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.status import Status
from rich.table import Table

from .exceptions import PromptCancelled

Validator = Callable[[str], "str | None"]


class Spinner(Protocol):
    def start(self, message: str) -> None: ...

    def message(self, message: str) -> None: ...

    def stop(self, message: str, *, failed: bool = False) -> None: ...


class Interaction(Protocol):
    def intro(self, title: str) -> None: ...

    def outro(self, message: str) -> None: ...

    def cancel(self, message: str) -> None: ...

    def log(self, message: str = "") -> None: ...

    def step(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def note(self, message: str, title: str | None = None) -> None: ...

    def text(
        self,
        message: str,
        *,
        default: str = "",
        placeholder: str | None = None,
        validate: Validator | None = None,
    ) -> str: ...

    def select(
        self,
        message: str,
        options: Sequence[tuple[Any, str, str | None]],
        *,
        initial_value: Any = None,
    ) -> Any: ...

    def confirm(self, message: str, *, default: bool = True) -> bool: ...

    def spinner(self) -> Spinner: ...


class RichSpinner:
    """Spinner backed by ``Console.status``."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._status: Status | None = None

    def start(self, message: str) -> None:
        self._status = self._console.status(message)
        self._status.start()

    def message(self, message: str) -> None:
        if self._status is not None:
            self._status.update(message)

    def stop(self, message: str, *, failed: bool = False) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        if failed:
            self._console.print(f"[red]✖[/red] {message}")
        else:
            self._console.print(f"[green]✔[/green] {message}")


def _read_key() -> str:
    key = readchar.readkey()
    if key == readchar.key.UP:
        return "up"
    if key == readchar.key.DOWN:
        return "down"
    if key in (readchar.key.ENTER, "\r", "\n"):
        return "enter"
    if key == readchar.key.ESC:
        return "escape"
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt
    return key


class RichInteraction:
    """Prompts and log output rendered with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def intro(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[reverse green] {title} [/reverse green]")
        self.console.print()

    def outro(self, message: str) -> None:
        self.console.print()
        self.console.print(message)
        self.console.print()

    def cancel(self, message: str) -> None:
        self.console.print(f"\n[yellow]{message}[/yellow]")

    def log(self, message: str = "") -> None:
        self.console.print(message, highlight=False)

    def step(self, message: str) -> None:
        self.console.print(f"[green]◇[/green] {message}", highlight=False)

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]▲ Warning:[/yellow] {message}", highlight=False)

    def note(self, message: str, title: str | None = None) -> None:
        self.console.print(Panel(message, title=title, title_align="left", border_style="dim", expand=False))

    def text(
        self,
        message: str,
        *,
        default: str = "",
        placeholder: str | None = None,
        validate: Validator | None = None,
    ) -> str:
        """Ask for a line of text.

        Empty input is validated as ``""`` and then replaced by ``default``.
        The prompt repeats until ``validate`` returns None.
        """
        prompt = message if not placeholder else f"{message} [dim]({placeholder})[/dim]"
        while True:
            try:
                value = Prompt.ask(prompt, console=self.console, default="", show_default=False)
            except (KeyboardInterrupt, EOFError):
                raise PromptCancelled(message) from None
            error = validate(value) if validate else None
            if error:
                self.console.print(f"[red]{error}[/red]")
                continue
            return value or default

    def select(
        self,
        message: str,
        options: Sequence[tuple[Any, str, str | None]],
        *,
        initial_value: Any = None,
    ) -> Any:
        """Arrow-key selection over ``(value, label, hint)`` options."""
        values = [value for value, _, _ in options]
        selected = values.index(initial_value) if initial_value in values else 0

        def render() -> Panel:
            table = Table.grid(padding=(0, 2))
            table.add_column(style="cyan", width=2)
            table.add_column()
            for i, (_, label, hint) in enumerate(options):
                line = f"[cyan]{label}[/cyan]" if i == selected else label
                if hint:
                    line += f" [dim]({hint})[/dim]"
                table.add_row("▶" if i == selected else " ", line)
            table.add_row("", "")
            table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")
            return Panel(table, title=f"[bold]{message}[/bold]", border_style="cyan", padding=(1, 2))

        with Live(render(), console=self.console, transient=True, auto_refresh=False) as live:
            while True:
                try:
                    key = _read_key()
                except KeyboardInterrupt:
                    raise PromptCancelled(message) from None
                if key == "up":
                    selected = (selected - 1) % len(options)
                elif key == "down":
                    selected = (selected + 1) % len(options)
                elif key == "enter":
                    break
                elif key == "escape":
                    raise PromptCancelled(message)
                live.update(render(), refresh=True)

        self.console.print(f"[green]◇[/green] {message} [dim]{options[selected][1]}[/dim]")
        return values[selected]

    def confirm(self, message: str, *, default: bool = True) -> bool:
        try:
            return Confirm.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError):
            raise PromptCancelled(message) from None

    def spinner(self) -> RichSpinner:
        return RichSpinner(self.console)
