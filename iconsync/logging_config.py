"""Console logging for the CLI. Library modules only create loggers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    logger = logging.getLogger("iconsync")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        logger.addHandler(handler)
    return logger
