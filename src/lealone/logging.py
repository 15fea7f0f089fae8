"""Logging setup for command line runs."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def init_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route the ``lealone`` loggers to a rich console handler."""

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("lealone")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)


__all__ = ["init_logging"]
