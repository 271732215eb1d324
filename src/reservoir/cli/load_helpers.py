from __future__ import annotations

"""Run a schema or document loader and turn its failures into CLI exits."""

from pathlib import Path
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from reservoir.io.loaders import LoaderError

T = TypeVar("T")


def load_or_exit(
    loader_fn: Callable[..., T],
    path: str,
    *args: Any,
    console: Console,
    what: str = "schemas",
    verbose_errors: bool = False,
) -> T:
    """Call ``loader_fn(path, *args)``; exit with code 1 if ``path`` is missing or loading fails."""
    if not Path(path).exists():
        console.print(f"[red]{what.capitalize()} path not found:[/red] {escape(path)}")
        raise typer.Exit(code=1)
    try:
        return loader_fn(path, *args)
    except LoaderError as err:
        console.print(f"[red]Failed to load {what}:[/red] {escape(str(err))}")
        if verbose_errors and err.cause is not None:
            console.print(escape(f"{type(err.cause).__name__}: {err.cause}"))
        raise typer.Exit(code=1)


__all__ = ["load_or_exit"]
