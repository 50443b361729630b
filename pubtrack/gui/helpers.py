"""Shared helper functions for paper filtering and dashboard figures."""

from typing import Optional, TypeVar

from pubtrack.models.paper import PaperRecord, is_published

P = TypeVar("P", bound=PaperRecord)


def filter_papers(papers: list[P], query: Optional[str]) -> list[P]:
    """Filter papers whose title or status contains *query*.

    Uses case-insensitive substring matching; an empty query keeps all.
    """
    if not query:
        return papers
    q = query.lower()
    return [
        p for p in papers
        if q in (p.title or "").lower() or q in (p.status or "").lower()
    ]


def split_published(papers: list[P]) -> tuple[list[P], list[P]]:
    """Split papers into (published, pending) by status."""
    published = [p for p in papers if is_published(p.status)]
    pending = [p for p in papers if not is_published(p.status)]
    return published, pending


def progress_percent(count: int, target: int) -> int:
    """Rounded share of *target* reached, capped at 100."""
    if target <= 0:
        return 100
    return min(round(count / target * 100), 100)
