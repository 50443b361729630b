"""Workbook ingestion and update for the fixed paper-sheet layout.

Layout of the first worksheet::

    row 1   | label | researcher name | credentials
    row 2   | label | guide name      | guide credentials
    row 3   | column headings
    row 4.. | id    | title           | status

Reads and writes of the same file are serialized, and a write replaces
the file in one step so a concurrent reader never sees half a workbook.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
import zipfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import load_workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.utils.exceptions import InvalidFileException

from pubtrack.config import ResearcherDefaults
from pubtrack.errors import SheetError
from pubtrack.models.paper import DEFAULT_STATUS, PaperRecord, Researcher, SheetSnapshot
from pubtrack.sheet.cells import as_text, extract
from pubtrack.sheet.colors import (
    DEFAULT_PALETTE,
    ThemePalette,
    all_green,
    fill_color,
    font_color,
    palette_for_workbook,
)

logger = logging.getLogger(__name__)

DATA_START_ROW = 4
ID_COL, TITLE_COL, STATUS_COL = 1, 2, 3

_LOAD_ERRORS = (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError)

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.Lock()
        return _locks[key]


PaperInput = Union[PaperRecord, Mapping[str, Any]]


def _field(paper: PaperInput, name: str) -> Any:
    if isinstance(paper, Mapping):
        return paper.get(name)
    return getattr(paper, name)


class SheetService:
    """Reads and writes the paper sheet of one workbook."""

    def __init__(
        self,
        path: Path,
        theme_source: str = "fixed",
        defaults: Optional[ResearcherDefaults] = None,
    ):
        """Initialize the service.

        Args:
            path: Path to the ``.xlsx`` workbook
            theme_source: ``"fixed"`` palette or ``"document"`` theme colors
            defaults: Header values used when the header cells are empty
        """
        self.path = Path(path)
        self.theme_source = theme_source
        self.defaults = defaults or ResearcherDefaults()
        self._lock = _lock_for(self.path)

    # ── Read ──────────────────────────────────────────────────────────

    def read(self) -> SheetSnapshot:
        """Ingest the researcher header and all paper rows.

        Raises:
            SheetError: The workbook cannot be opened or parsed.
        """
        with self._lock:
            try:
                workbook = load_workbook(self.path, rich_text=True)
                # Second load for the cached results of formula cells
                values = load_workbook(self.path, data_only=True)
            except _LOAD_ERRORS as e:
                raise SheetError(f"Cannot read workbook {self.path}: {e}", self.path) from e

        sheet = workbook.worksheets[0]
        cached = values.worksheets[0]
        palette = self._palette(workbook)

        def value(row: int, col: int) -> Any:
            return extract(sheet.cell(row=row, column=col), cached.cell(row=row, column=col).value)

        d = self.defaults
        researcher = Researcher(
            name=as_text(value(1, 2)) or d.name,
            credentials=as_text(value(1, 3)) or d.credentials,
            guide=as_text(value(2, 2)) or d.guide,
            guide_credentials=as_text(value(2, 3)) or d.guide_credentials,
        )

        papers: list[PaperRecord] = []
        for row in range(DATA_START_ROW, sheet.max_row + 1):
            id_value = value(row, ID_COL)
            if id_value == "":
                continue
            id_cell = sheet.cell(row=row, column=ID_COL)
            title_cell = sheet.cell(row=row, column=TITLE_COL)
            status_cell = sheet.cell(row=row, column=STATUS_COL)

            fills = [fill_color(c, palette) for c in (id_cell, title_cell, status_cell)]
            papers.append(
                PaperRecord(
                    id=id_value if isinstance(id_value, (int, float)) else as_text(id_value),
                    title=as_text(value(row, TITLE_COL)),
                    status=as_text(value(row, STATUS_COL)) or DEFAULT_STATUS,
                    color=fills[2],
                    font_color=font_color(status_cell, palette),
                    highlight=all_green(fills),
                )
            )

        logger.debug("Read %d papers from %s", len(papers), self.path)
        return SheetSnapshot(researcher=researcher, papers=papers)

    # ── Write ─────────────────────────────────────────────────────────

    def write(self, papers: Sequence[PaperInput]) -> None:
        """Overwrite the paper rows with *papers*, in order.

        Rows past the new list, up to the sheet's previous extent, are
        cleared so a shorter list leaves no stale rows.  Formatting is kept.

        Raises:
            SheetError: The workbook cannot be read or saved.
        """
        with self._lock:
            try:
                # rich_text keeps formatted runs in cells this write does not touch
                workbook = load_workbook(self.path, rich_text=True)
            except _LOAD_ERRORS as e:
                raise SheetError(f"Cannot read workbook {self.path}: {e}", self.path) from e

            sheet = workbook.worksheets[0]
            previous_max_row = sheet.max_row

            for index, paper in enumerate(papers):
                row = DATA_START_ROW + index
                for col, name in ((ID_COL, "id"), (TITLE_COL, "title"), (STATUS_COL, "status")):
                    cell = sheet.cell(row=row, column=col)
                    # Merged-over cells are read-only; the merge anchor holds the value
                    if isinstance(cell, MergedCell):
                        continue
                    cell.value = _field(paper, name)

            first_stale = DATA_START_ROW + len(papers)
            last_row = max(previous_max_row, first_stale)
            cleared = 0
            for cells in sheet.iter_rows(min_row=first_stale, max_row=last_row):
                for cell in cells:
                    if isinstance(cell, MergedCell):
                        continue
                    if cell.value is not None:
                        cleared += 1
                    cell.value = None

            self._save(workbook)

        logger.info(
            "Wrote %d papers to %s (%d stale cells cleared)", len(papers), self.path, cleared
        )

    # ── Private ───────────────────────────────────────────────────────

    def _palette(self, workbook: Any) -> ThemePalette:
        if self.theme_source == "document":
            return palette_for_workbook(workbook)
        return DEFAULT_PALETTE

    def _save(self, workbook: Any) -> None:
        """Save to a sibling temp file, then atomically replace the workbook."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.stem}-", suffix=self.path.suffix, dir=self.path.parent
        )
        os.close(fd)
        try:
            workbook.save(tmp_name)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise SheetError(f"Cannot write workbook {self.path}: {e}", self.path) from e
