"""
console.py

Responsibility: user-facing output and logging setup.

Progress, instructions and warnings go to a rich Console. Debug traces from
the other modules go through the standard `logging` tree, rendered by rich's
RichHandler; `--verbose` turns them on.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console()


def setup_logging(verbose: bool = False, *, target: Console | None = None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=target or console, show_path=verbose, markup=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)


def log(message: str = "", *, out: Console | None = None) -> None:
    (out or console).print(message, highlight=False)


def warn(message: str, *, out: Console | None = None) -> None:
    (out or console).print(f"[black on yellow] WARN [/] [yellow]{escape(message)}[/]", highlight=False)


def error(message: str, *, out: Console | None = None) -> None:
    (out or console).print(f"[white on red] ERROR [/] [red]{escape(message)}[/]", highlight=False)


@contextmanager
def spinner(message: str, *, out: Console | None = None) -> Iterator[None]:
    with (out or console).status(message, spinner="dots"):
        yield
