"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from chdump.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

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


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables.

    Also serves as the Reporter handed to the core, so message text is
    escaped: partition tokens may contain square brackets.
    """

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be CHDUMP consistent."""
        return f"[CHDUMP] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")

    def print(self, msg: str) -> None:
        """Print a plain message without decoration."""
        console.print(escape(msg))

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{escape(k)}[/]: {escape(str(v))}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        # Questionary renders `instruction=...` inline, next to the echoed answer.
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
            pointer="❯",
        )
        return bool(prompt.ask())

    def partitions_table(
        self, partitions: Iterable[Any], title: str = "Partitions"
    ) -> None:
        """
        Expects objects with .database .table .partition
        (like chdump.core.models.PartitionDescriptor)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Database", style="ok", no_wrap=True)
        t.add_column("Table")
        t.add_column("Partition", style="meta")

        for p in partitions:
            t.add_row(escape(p.database), escape(p.table), escape(str(p.partition)))

        console.print(t)

    def backup_results_table(
        self, results: Iterable[tuple[str, Any]], title: str = "Backup results"
    ) -> None:
        """
        Expects tuples of (database name, FreezeResult | None); None means
        the partition listing itself failed.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Database", style="ok", no_wrap=True)
        t.add_column("Partitions")
        t.add_column("Result")

        for database, result in results:
            if result is None:
                t.add_row(escape(database), "-", "[err]FAIL[/] listing partitions")
                continue
            frozen = str(len(result.frozen))
            if result.ok:
                t.add_row(escape(database), frozen, "[ok]OK[/]")
            else:
                t.add_row(
                    escape(database), frozen, f"[err]FAIL[/] {escape(result.error)}"
                )

        console.print(t)

    def restore_plan_table(
        self, plan: Iterable[tuple[Any, Any]], title: str = "Restore plan"
    ) -> None:
        """Render (source, destination) directory pairs."""
        t = Table(title=title, show_lines=False)
        t.add_column("Source", style="meta")
        t.add_column("Destination", style="ok")

        for source, destination in plan:
            t.add_row(escape(str(source)), escape(str(destination)))

        console.print(t)


out = Out()
