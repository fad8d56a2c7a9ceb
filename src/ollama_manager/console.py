"""
Terminal output for the management commands.
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.markup import escape
from rich.status import Status


class Reporter:
    """
    Coloured console messages.

    Informational messages are dropped in quiet mode; warnings and errors
    always print, errors on stderr.
    """

    def __init__(self, quiet: bool = False, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message, style="green", markup=False)

    def hint(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message, style="yellow", markup=False)

    def warn(self, message: str) -> None:
        self.console.print(message, style="yellow", markup=False)

    def error(self, message: str) -> None:
        self.err_console.print(message, style="red", markup=False)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/] {escape(message)}")

    @contextmanager
    def status(self, message: str) -> Iterator[Status]:
        with self.console.status(message) as status:
            yield status
