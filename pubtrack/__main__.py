"""Entry point for running pubtrack as a module or installed script.

Usage:
    pubtrack / python -m pubtrack         → web dashboard (uvicorn)
    pubtrack <command> ... / python -m pubtrack <command> ... → CLI
"""

import sys

import uvicorn

from pubtrack.config import Settings
from pubtrack.logging_utils import configure_logging


def run() -> None:
    """Entry point: no args → web dashboard, else → CLI."""
    settings = Settings.load()
    configure_logging(settings.log_level, settings.log_path)
    if len(sys.argv) == 1:
        uvicorn.run(
            "pubtrack.gui.app:app",
            host=settings.host,
            port=settings.port,
            log_config=None,
        )
    else:
        from pubtrack.cli import run_cli
        sys.exit(run_cli())


if __name__ == "__main__":
    run()
