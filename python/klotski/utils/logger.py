"""Logging utilities for the puzzle engine."""

from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a Rich handler.

    The solver can explore hundreds of thousands of states, so it only
    logs at search boundaries.  Callers may reconfigure before solving.
    """

    handler = RichHandler(show_path=False, log_time_format="%H:%M:%S")
    handler.setFormatter(logging.Formatter(fmt="%(name)s | %(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "klotski")
