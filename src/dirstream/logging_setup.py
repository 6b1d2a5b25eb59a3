"""Console logging with Rich.

All modules log through ``logging.getLogger(__name__)``; this module only wires
the root handler once at process start.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Libraries that are chatty at INFO and drown out listing logs.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "watchfiles")


def setup_logging(level: str = "INFO") -> None:
    """Install a RichHandler on the root logger."""
    numeric = getattr(logging, level.upper(), logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=numeric,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.WARNING))
