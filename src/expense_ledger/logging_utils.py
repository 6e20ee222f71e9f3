"""
Logging helpers for the expense ledger.

Modules create their logger with ``get_logger(__name__)``. The root logger
is configured once, with a rich handler on stderr so warnings render
alongside the CLI's own console output.
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_INITIALISED = False

def configure_root_logger(level: int | str = logging.WARNING) -> None:
    """Install the rich handler on the root logger, or just adjust the level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _LOGGER_INITIALISED:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""
    return logging.getLogger(name)
