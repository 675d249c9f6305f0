"""Terminal output helpers for the CLI, backed by rich."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from rich.console import Console

if TYPE_CHECKING:
    from collections.abc import Iterator

# summaries go to stdout; diagnostics go to stderr so they never mix with
# piped output
_out = Console(highlight=False)
_err = Console(stderr=True, highlight=False)


def print(*args: Any, **kwargs: Any) -> None:  # noqa: A001
    _out.print(*args, **kwargs)


def header(text: str) -> None:
    _out.print(f"[bold]{text}[/bold]")


def subheader(text: str) -> None:
    _out.print(f"[bold cyan]{text}[/bold cyan]")


def key_value(key: str, value: Any, indent: int = 0) -> None:
    pad = " " * indent
    _out.print(f"{pad}[dim]{key}:[/dim] {value}")


def dim(text: str) -> None:
    _out.print(f"[dim]{text}[/dim]")


def info(text: str) -> None:
    _err.print(text)


def success(text: str) -> None:
    _err.print(f"[green]{text}[/green]")


def warning(text: str) -> None:
    _err.print(f"[yellow]warning:[/yellow] {text}")


def error(text: str) -> None:
    _err.print(f"[red]error:[/red] {text}")


@contextmanager
def status(text: str) -> Iterator[None]:
    """Show a spinner on stderr while the block runs."""
    with _err.status(text):
        yield
