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

from adxops.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

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

_STATE_STYLES = {
    "running": "ok",
    "succeeded": "ok",
    "failed": "err",
    "unavailable": "err",
}


def _cell(value: Any) -> str:
    """Render an optional value as a table cell."""
    return "" if value is None else escape(str(value))


def _state_cell(state: str | None) -> str:
    """Colour a provisioning/cluster state by outcome."""
    if not state:
        return ""
    style = _STATE_STYLES.get(state.lower(), "warn")
    return f"[{style}]{escape(state)}[/{style}]"


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be ADX-OPS consistent."""
        return f"[ADX-OPS] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(escape(msg), spinner="dots"):
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

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {escape(str(v))}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise (including Ctrl-C).
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def clusters_table(self, clusters: Iterable[Any], title: str = "Clusters") -> None:
        """
        Expects objects with .name .state .location .capacity .uri
        (like adxops.core.kusto.Cluster)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok", no_wrap=True)
        t.add_column("State")
        t.add_column("Location", style="meta")
        t.add_column("Instance count", justify="right")
        t.add_column("URI", style="meta")

        for c in clusters:
            t.add_row(
                escape(c.name),
                _state_cell(c.state),
                _cell(c.location),
                _cell(c.capacity),
                _cell(c.uri),
            )

        console.print(t)

    def databases_table(self, databases: Iterable[Any], title: str = "Databases") -> None:
        """
        Expects objects with .name .provisioning_state .location .type
        (like adxops.core.kusto.Database)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok", no_wrap=True)
        t.add_column("State")
        t.add_column("Location", style="meta")
        t.add_column("Type", style="meta")

        for db in databases:
            t.add_row(
                escape(db.name),
                _state_cell(db.provisioning_state),
                _cell(db.location),
                _cell(db.type),
            )

        console.print(t)


out = Out()
