from __future__ import annotations

from rich.console import Console


class ConsoleIO:
    """Thin wrapper around rich output and stdin so startup stays testable."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def _print(self, message: str, style: str | None = None) -> None:
        # URLs and paths must not be re-wrapped or parsed as markup.
        self._console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def write(self, message: str = "") -> None:
        self._print(message)

    def write_success(self, message: str) -> None:
        self._print(message, "bold green")

    def write_warning(self, message: str) -> None:
        self._print(message, "bold yellow")

    def write_error(self, message: str) -> None:
        self._print(message, "bold red")

    def prompt(self, message: str) -> str:
        return input(message)
