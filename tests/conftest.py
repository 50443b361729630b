"""Shared fixtures: workbook builders, isolated settings, an API client."""

from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from pubtrack.config import Settings
from pubtrack.database.repository import PaperRepository

GREEN = "00B050"


def _fill(code: str) -> PatternFill:
    return PatternFill(fill_type="solid", fgColor=code)


def build_workbook(
    path: Path,
    papers: list[tuple],
    researcher: tuple = ("Dr. Jane Roe", "MD, PhD", "Dr. John Doe", "MS Ortho"),
    fills: Optional[dict[int, list[Optional[str]]]] = None,
    font_colors: Optional[dict[int, str]] = None,
) -> Path:
    """Write a workbook in the paper-sheet layout.

    Args:
        path: Target ``.xlsx`` path
        papers: ``(id, title, status)`` rows, written from row 4
        researcher: name, credentials, guide, guide credentials
        fills: paper index → fill codes for the id/title/status cells
        font_colors: paper index → font color code of the status cell
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Papers"
    name, credentials, guide, guide_credentials = researcher
    ws.cell(row=1, column=1, value="Researcher")
    ws.cell(row=1, column=2, value=name)
    ws.cell(row=1, column=3, value=credentials)
    ws.cell(row=2, column=1, value="Guide")
    ws.cell(row=2, column=2, value=guide)
    ws.cell(row=2, column=3, value=guide_credentials)
    for col, heading in enumerate(("ID", "Title", "Status"), start=1):
        ws.cell(row=3, column=col, value=heading)

    for index, row in enumerate(papers):
        for col, value in enumerate(row, start=1):
            ws.cell(row=4 + index, column=col, value=value)

    for index, codes in (fills or {}).items():
        for col, code in enumerate(codes, start=1):
            if code:
                ws.cell(row=4 + index, column=col).fill = _fill(code)

    for index, code in (font_colors or {}).items():
        ws.cell(row=4 + index, column=3).font = Font(color=code)

    wb.save(path)
    return path


@pytest.fixture
def make_workbook(tmp_path):
    """Factory fixture: ``make_workbook(papers, **kwargs) -> Path``."""
    def _make(papers, name="RP.xlsx", **kwargs):
        return build_workbook(tmp_path / name, papers, **kwargs)
    return _make


@pytest.fixture
def sample_papers():
    return [
        (1, "Lumbar fusion outcomes", "Published in European Spine Journal"),
        (2, "Cervical myelopathy review", "Awaiting EIC Decision"),
        (3, "Scoliosis bracing trial", "Yet to start"),
    ]


@pytest.fixture
def settings(tmp_path):
    """A fresh Settings singleton rooted in *tmp_path*."""
    Settings.reset()
    s = Settings.load(base_dir=tmp_path)
    s.update(
        workbook_path=tmp_path / "RP.xlsx",
        db_path=tmp_path / "papers.db",
    )
    yield s
    Settings.reset()


@pytest.fixture
def repo(tmp_path):
    return PaperRepository(tmp_path / "store.db")


@pytest.fixture
def client(settings, make_workbook, sample_papers):
    """TestClient over the app, backed by a sample workbook in *tmp_path*."""
    make_workbook(sample_papers)
    from pubtrack.gui.app import app

    with TestClient(app) as c:
        yield c
