"""Output formatting utilities for the CLI.

Messages (info/warn/error) go to stderr so that stdout only ever carries
command results or protocol traffic.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        err_console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with err_console.status(msg, spinner="dots"):
            yield

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        err_console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def json(self, text: str) -> None:
        """Print JSON text as-is (no markup, no reformatting)."""
        console.out(text, end="", highlight=False)

    def tables_table(self, tables: Iterable[Any], title: str = "Tables") -> None:
        """
        Render BigQuery tables.

        Expects objects with `.dataset_id` and `.table_id`
        (like bqcontext.core.models.Table).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Dataset", style="meta")
        t.add_column("Table", style="ok")
        t.add_column("Full name")

        for item in tables:
            t.add_row(item.dataset_id, item.table_id, item.full_name)

        console.print(t)


out = Out()
