"""Terminal output helpers for the CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

# soft_wrap keeps long values on one line when piped
_out = Console(highlight=False, soft_wrap=True)
_err = Console(stderr=True, highlight=False, soft_wrap=True)


def header(text: str) -> None:
    _out.print(f"[bold]{escape(text)}[/bold]")


def key_value(key: str, value: Any) -> None:
    _out.print(f"  [cyan]{key:<14}[/cyan] {escape(str(value))}")


def info(text: str) -> None:
    _out.print(escape(text))


def error(text: str) -> None:
    _err.print(f"[red]error:[/red] {escape(text)}")
