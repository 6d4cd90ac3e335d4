"""Logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = "INFO", console: Console | None = None) -> None:
    """
    Route log records through rich on stderr.

    Args:
        level: Logging level name or number
        console: Console to write to (defaults to a stderr console)
    """
    if isinstance(level, str):
        level = level.upper()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
