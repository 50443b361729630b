"""Tests for dashboard helper functions."""

import pytest

from pubtrack.gui.helpers import filter_papers, progress_percent, split_published
from pubtrack.models.paper import PaperRecord, is_published


@pytest.fixture
def papers():
    return [
        PaperRecord(id=1, title="Spinal fusion", status="Published"),
        PaperRecord(id=2, title="Disc herniation", status="Awaiting EIC Decision"),
        PaperRecord(id=3, title="Scoliosis", status="Rejected"),
    ]


def test_filter_matches_title_or_status(papers):
    assert [p.id for p in filter_papers(papers, "DISC")] == [2]
    assert [p.id for p in filter_papers(papers, "rejected")] == [3]
    assert filter_papers(papers, "") == papers
    assert filter_papers(papers, None) == papers
    assert filter_papers(papers, "nothing") == []


def test_split_published(papers):
    published, pending = split_published(papers)
    assert [p.id for p in published] == [1]
    assert [p.id for p in pending] == [2, 3]


@pytest.mark.parametrize(
    "status, expected",
    [("Published", True), ("almost published", True), ("Yet to start", False), (None, False)],
)
def test_is_published(status, expected):
    assert is_published(status) is expected


@pytest.mark.parametrize(
    "count, target, expected",
    [(0, 50, 0), (3, 50, 6), (25, 50, 50), (80, 50, 100), (1, 0, 100)],
)
def test_progress_percent(count, target, expected):
    assert progress_percent(count, target) == expected
