"""CLI console helpers with optional Rich support.

This module avoids module-level imports of optional UI dependencies so
bootstrap paths (``--help``, ``--version``, ``doctor``) remain
functional even when Rich is not installed.

Two channels:

* :data:`console` / :func:`print_error` — diagnostics on **stderr**.
* :func:`write_result` — command results on **stdout**, undecorated, so
  JSON/YAML/CSV output can be piped into other tools.
"""

from __future__ import annotations

import sys
from typing import Any

from metalcloud_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, highlight=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def print_error(message: str, hint: str | None = None) -> None:
    """Show an error (and optional hint) on stderr.

    The message is escaped so API text containing ``[brackets]`` is not
    taken for Rich markup.
    """
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        print(f"Error: {message}", file=sys.stderr)
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)
        return

    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


def write_result(text: str) -> None:
    """Write a rendered command result to stdout.

    Empty results print nothing; otherwise a trailing newline is ensured.
    """
    if not text:
        return
    sys.stdout.write(text if text.endswith("\n") else text + "\n")
    sys.stdout.flush()
