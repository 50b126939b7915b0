"""
Interactive prompts for cargo-sample.

The sampling pipeline only depends on the Prompter protocol, so tests and
non-interactive callers can swap in canned answers.
"""

from typing import Dict, List, Optional, Protocol, Sequence

import click
from rich.console import Console
from rich.table import Table

from .exit_codes import SelectionCancelled


class Prompter(Protocol):
    """Asks the operator to pick an option or answer yes/no."""

    def select(self, message: str, options: Sequence[str]) -> str:
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        ...


class ClickPrompter:
    """Terminal prompts: a numbered rich table plus click input."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select(self, message: str, options: Sequence[str]) -> str:
        if not options:
            raise SelectionCancelled("Nothing to select from")

        table = Table(title=message, show_header=True)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Example", style="green")
        for index, option in enumerate(options, start=1):
            table.add_row(str(index), option)
        self.console.print(table)

        try:
            choice = click.prompt(
                "Which example to use?",
                type=click.IntRange(1, len(options)),
            )
        except (click.Abort, KeyboardInterrupt, EOFError):
            raise SelectionCancelled("Failed to select example")
        return options[choice - 1]

    def confirm(self, message: str, default: bool = False) -> bool:
        try:
            return click.confirm(message, default=default)
        except (click.Abort, KeyboardInterrupt, EOFError):
            raise SelectionCancelled("Confirmation cancelled")


class ScriptedPrompter:
    """
    Non-interactive prompter answering from fixed values.

    Used for --example/--yes; a missing answer means the operator
    must be asked, which this prompter cannot do.
    """

    def __init__(self, selection: Optional[str] = None, confirm_answer: Optional[bool] = None):
        self.selection = selection
        self.confirm_answer = confirm_answer
        self.asked: List[Dict[str, str]] = []

    def select(self, message: str, options: Sequence[str]) -> str:
        self.asked.append({'type': 'select', 'message': message})
        if self.selection is None:
            raise SelectionCancelled("No example selected")
        return self.selection

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append({'type': 'confirm', 'message': message})
        if self.confirm_answer is None:
            return default
        return self.confirm_answer
