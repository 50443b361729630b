"""PubTrack - publication pipeline tracker.

A tool for tracking a researcher's papers (id, title, status) in an
Excel workbook, mirroring them into a local document store, and
rendering a status dashboard in the browser.
"""

__version__ = "1.0.0"

from pubtrack.config import Settings
from pubtrack.models.paper import PaperRecord, Researcher, SheetSnapshot

__all__ = ["PaperRecord", "Researcher", "Settings", "SheetSnapshot", "__version__"]
