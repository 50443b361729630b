"""Logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

_CONFIGURED_FLAG = "_pubtrack_configured"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_path: Optional[Path] = None,
) -> None:
    """Configure app-wide logging.

    - Always logs to the console through rich
    - Also logs to a rotating file when *log_path* is given
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicating handlers if called more than once.
    if getattr(root, _CONFIGURED_FLAG, False):
        return

    console = RichHandler(rich_tracebacks=True, show_path=False)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(console)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    setattr(root, _CONFIGURED_FLAG, True)
