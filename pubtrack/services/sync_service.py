"""Copies paper records between the workbook and the document store."""

import logging

from pubtrack.database.repository import PaperRepository
from pubtrack.sheet.workbook import SheetService

logger = logging.getLogger(__name__)


class SyncService:
    """Sheet ⇄ store synchronization."""

    def __init__(self, sheet: SheetService, repo: PaperRepository):
        self.sheet = sheet
        self.repo = repo

    def import_sheet(self) -> int:
        """Replace the store contents with the sheet's papers.

        Colors and highlight flags read from the sheet are kept.

        Returns:
            Number of papers imported
        """
        snapshot = self.sheet.read()
        count = self.repo.replace_all(snapshot.papers)
        logger.info("Imported %d papers from %s", count, self.sheet.path)
        return count

    def export_store(self) -> int:
        """Write the store's papers (id order) back to the sheet.

        Returns:
            Number of papers written
        """
        papers = self.repo.find_all()
        self.sheet.write(papers)
        logger.info("Exported %d papers to %s", len(papers), self.sheet.path)
        return len(papers)
