"""Exception types raised at the I/O boundary."""

from pathlib import Path
from typing import Optional


class PubTrackError(Exception):
    """Base class for PubTrack errors."""


class SheetError(PubTrackError):
    """Reading or writing the workbook failed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class PaperNotFoundError(PubTrackError, LookupError):
    """No paper with the given store key."""

    def __init__(self, key: int):
        super().__init__(f"Paper {key} not found")
        self.key = key
