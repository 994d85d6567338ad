"""Logging setup for the CLI.

Library modules only call `logging.getLogger(__name__)`; handlers are
installed here, once, by the entry point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACES: tuple[str, ...] = ("adapters", "core", "cli")

_configured = False


def setup_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Attach a `RichHandler` (stderr) to the package loggers. Idempotent."""

    global _configured
    numeric = getattr(logging, level.upper(), logging.WARNING)

    if _configured:
        for name in LOGGER_NAMESPACES:
            logging.getLogger(name).setLevel(numeric)
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for name in LOGGER_NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(numeric)
        logger.addHandler(handler)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
    _configured = True
