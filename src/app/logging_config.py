# src/app/logging_config.py
"""
Logging setup for dump-waypoints.

Interactive terminals get rich's colored handler; pipes and CI logs get
plain "<time> [LEVEL] logger: message" lines on stdout.

DEBUG shows the container's leading bytes, the zip entry chosen, duplicate
compound keys and per-group command counts.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler


PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _make_handler(stream: TextIO, use_rich: bool) -> logging.Handler:
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(file=stream),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        return handler

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT))
    return handler


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    use_rich: Optional[bool] = None,
) -> None:
    """
    Attach one handler to the root logger, or only adjust the level when
    handlers are already present (e.g. under pytest or an embedding app).

    use_rich=None picks rich output when `stream` is a terminal.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    stream = stream or sys.stdout
    if use_rich is None:
        use_rich = hasattr(stream, "isatty") and stream.isatty()
    root.addHandler(_make_handler(stream, use_rich))
