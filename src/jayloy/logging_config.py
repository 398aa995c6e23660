"""Logging setup for the command line."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    verbose: bool = False,
    log_path: Path | None = None,
    console: Console | None = None,
) -> None:
    """Attach handlers to the ``jayloy`` logger.

    Args:
        verbose: Log at DEBUG instead of INFO.
        log_path: Optional file that also receives every record.
        console: Rich console to write to (stderr by default).
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=True,
        )
    ]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        handlers.append(file_handler)

    logger = logging.getLogger("jayloy")
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
