"""Command-line interface handlers."""

import argparse
import logging
import sys
from typing import Optional

from pubtrack.config import Settings
from pubtrack.console import ConsoleUI
from pubtrack.database.repository import PaperRepository
from pubtrack.errors import PubTrackError
from pubtrack.services.status_style import resolve_status_style
from pubtrack.services.sync_service import SyncService
from pubtrack.sheet.workbook import SheetService

logger = logging.getLogger(__name__)


class PubTrackCLI:
    """CLI application for PubTrack."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize CLI with settings.

        Args:
            settings: Application settings (loads from disk if not provided)
        """
        self.settings = settings or Settings.load()
        self.ui = ConsoleUI()
        self.sheet = SheetService(
            self.settings.workbook_path,
            theme_source=self.settings.theme_source,
            defaults=self.settings.researcher,
        )
        self.repo = PaperRepository(self.settings.db_path)
        self.sync = SyncService(self.sheet, self.repo)

    def cmd_show(self, source: str = "sheet") -> None:
        """Render the workbook (or the store) with status styles.

        Args:
            source: 'sheet' reads the workbook, 'store' reads the document store
        """
        if source == "store":
            self.ui.display_papers(self.repo.find_all(), title="Papers (store)")
            return
        snapshot = self.sheet.read()
        self.ui.researcher(snapshot.researcher)
        self.ui.display_papers(snapshot.papers, title=f"Papers ({self.sheet.path.name})")

    def cmd_import(self) -> None:
        """Replace the document store with the workbook's papers."""
        self.ui.imported(self.sync.import_sheet())

    def cmd_export(self) -> None:
        """Write the document store's papers to the workbook."""
        self.ui.exported(self.sync.export_store())

    def cmd_style(
        self,
        status: str,
        color: Optional[str] = None,
        font_color: Optional[str] = None,
    ) -> None:
        """Print the badge style resolved for a status."""
        self.ui.display_style(status, resolve_status_style(status, color, font_color))


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="pubtrack",
        description="Publication tracker: Excel workbook → dashboard",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # show command
    show_parser = subparsers.add_parser("show", help="Show papers with their status styles")
    show_parser.add_argument(
        "--source",
        default="sheet",
        choices=["sheet", "store"],
        help="Read from the workbook or the document store (default: sheet)",
    )

    # import / export commands
    subparsers.add_parser("import", help="Copy workbook papers into the document store")
    subparsers.add_parser("export", help="Write document store papers to the workbook")

    # style command
    style_parser = subparsers.add_parser("style", help="Resolve the badge style for a status")
    style_parser.add_argument("status", help="Status text")
    style_parser.add_argument("--color", default=None, help="Fill color override (#RRGGBB)")
    style_parser.add_argument(
        "--font-color",
        default=None,
        dest="font_color",
        help="Font color override (#RRGGBB)",
    )

    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI.  Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = PubTrackCLI()

    try:
        if args.command == "show":
            cli.cmd_show(args.source)
        elif args.command == "import":
            cli.cmd_import()
        elif args.command == "export":
            cli.cmd_export()
        elif args.command == "style":
            cli.cmd_style(args.status, args.color, args.font_color)
    except PubTrackError as e:
        logger.exception("Command %s failed", args.command)
        cli.ui.error(str(e))
        return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
