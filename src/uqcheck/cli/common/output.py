"""Output formatting utilities for the CLI.

Messages, spinners and tables go to stderr through rich. The report
itself is written verbatim to stdout (see `Out.report`) so it can be
diffed or piped without any styling.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import typer
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

console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def report(self, text: str) -> None:
        """Write the plain-text report to stdout exactly as rendered."""
        if text:
            typer.echo(text, nl=False)

    def json(self, payload: Any) -> None:
        """Write a JSON document to stdout."""
        typer.echo(json.dumps(payload, indent=2))

    def violations_table(
        self, report: Mapping[str, Iterable[Iterable[str]]], title: str = "Missing unique indexes"
    ) -> None:
        """
        Render violated column sets per table.

        Expects a mapping of table name to column tuples (like
        uqcheck.core.models.Report).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok", no_wrap=True)
        t.add_column("Columns")

        for table, sets in report.items():
            for columns in sets:
                t.add_row(table, ", ".join(columns))

        console.print(t)

    def indexes_table(self, table: str, indexes: Iterable[Any]) -> None:
        """
        Render the indexes of one table.

        Expects objects with .columns .is_unique and optional .name
        (like uqcheck.core.models.Index).
        """
        t = Table(title=table, show_lines=False)
        t.add_column("Index", style="meta")
        t.add_column("Columns", style="ok")
        t.add_column("Unique")

        for ix in indexes:
            t.add_row(
                str(getattr(ix, "name", "") or ""),
                ", ".join(sorted(ix.columns)),
                "yes" if ix.is_unique else "no",
            )

        console.print(t)

    def diagnostics_table(
        self, diagnostics: Iterable[Any], title: str = "Rules that could not be checked"
    ) -> None:
        """
        Render per-rule failures.

        Expects objects with .table .rule and .error
        (like uqcheck.core.models.Diagnostic).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok", no_wrap=True)
        t.add_column("Columns")
        t.add_column("Error", style="err")

        for d in diagnostics:
            t.add_row(str(d.table), ", ".join(d.rule.display_columns), str(d.error))

        console.print(t)


out = Out()
