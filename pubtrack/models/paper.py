"""Paper data models."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Scalar id as read from the sheet: numbers stay numbers, anything else is text.
PaperId = Union[int, float, str]

DEFAULT_STATUS = "Yet to start"


@dataclass
class PaperRecord:
    """One row of the publication sheet."""

    id: PaperId
    title: str
    status: str
    color: Optional[str] = None
    font_color: Optional[str] = None
    highlight: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the web API."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "color": self.color,
            "fontColor": self.font_color,
            "highlight": self.highlight,
        }


@dataclass
class StoredPaper(PaperRecord):
    """A paper held in the document store (``key`` is the store primary key)."""

    key: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["key"] = self.key
        return data


@dataclass
class Researcher:
    """Header block of the sheet: researcher and guide."""

    name: str = ""
    credentials: str = ""
    guide: str = ""
    guide_credentials: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "credentials": self.credentials,
            "guide": self.guide,
            "guideCredentials": self.guide_credentials,
        }


@dataclass
class SheetSnapshot:
    """Result of one ingestion pass over the workbook."""

    researcher: Researcher
    papers: list[PaperRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "researcher": self.researcher.to_dict(),
            "papers": [p.to_dict() for p in self.papers],
        }


def is_published(status: Optional[str]) -> bool:
    """True when a status string marks the paper as published."""
    return "published" in (status or "").lower()
