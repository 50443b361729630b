"""Application state and templates."""

import logging
import os
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi.templating import Jinja2Templates

from pubtrack import __version__
from pubtrack.config import Settings
from pubtrack.database.repository import PaperRepository
from pubtrack.models.paper import PaperRecord, StoredPaper
from pubtrack.services.status_style import resolve_status_style
from pubtrack.services.sync_service import SyncService
from pubtrack.sheet.workbook import SheetService

logger = logging.getLogger(__name__)


# ============================================================================
# Global State
# ============================================================================


class AppState:
    """Mutable singleton holding the runtime services."""

    settings: Settings
    repo: PaperRepository
    sheet: SheetService
    sync: SyncService
    # Last store change seen through the repository subscription
    last_change: dict = {"event": "", "at": ""}
    _unsubscribe: Optional[Callable[[], None]] = None


state = AppState()


def _on_store_change(event: str, paper: Optional[StoredPaper]) -> None:
    state.last_change = {
        "event": event,
        "at": datetime.now(timezone.utc).isoformat(),
    }
    logger.debug("Store change: %s %s", event, paper.key if paper else "")


def init_state(settings: Settings) -> None:
    """Create the services for *settings* and subscribe to store changes."""
    shutdown_state()
    state.settings = settings
    state.repo = PaperRepository(settings.db_path)
    state.sheet = SheetService(
        settings.workbook_path,
        theme_source=settings.theme_source,
        defaults=settings.researcher,
    )
    state.sync = SyncService(state.sheet, state.repo)
    state.last_change = {"event": "", "at": ""}
    state._unsubscribe = state.repo.subscribe(_on_store_change)


def shutdown_state() -> None:
    """Drop the store subscription, if any."""
    if state._unsubscribe is not None:
        state._unsubscribe()
        state._unsubscribe = None


# ============================================================================
# Templates & Filters
# ============================================================================

base_dir = os.path.dirname(__file__)
templates = Jinja2Templates(directory=os.path.join(base_dir, "templates"))


def status_css(paper: PaperRecord) -> str:
    """Inline CSS for a paper's status badge."""
    return resolve_status_style(paper.status, paper.color, paper.font_color).css()


templates.env.filters["status_css"] = status_css
templates.env.globals["version"] = __version__
