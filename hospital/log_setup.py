"""Logging setup with Rich-powered colored console output."""
from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the ``hospital`` logger with Rich colored output."""
    handler = RichHandler(
        level=level,
        rich_tracebacks=True,
        show_path=False,
        show_time=True,
        omit_repeated_times=False,
        tracebacks_show_locals=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s │ %(message)s"))

    root = logging.getLogger("hospital")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the hospital namespace."""
    return logging.getLogger(f"hospital.{name}")
