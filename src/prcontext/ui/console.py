"""Rich-powered console output for pr-context.

Everything goes to stderr so stdout carries nothing but the report path.
"""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markup import escape


class Console:
    """Terminal feedback for a report run using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole(stderr=True, highlight=False)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]→[/blue] {escape(message)}")

    def logging_handler(self, level: int) -> logging.Handler:
        """A handler that renders library log records on this console."""
        handler = RichHandler(console=self.console, show_path=False, show_time=False)
        handler.setLevel(level)
        return handler
