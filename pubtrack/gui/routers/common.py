"""Common routes: index page, researcher header, status styles, change polling."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from pubtrack.errors import PubTrackError
from pubtrack.gui.state import state, templates
from pubtrack.models.paper import Researcher
from pubtrack.services.status_style import resolve_status_style

logger = logging.getLogger(__name__)

router = APIRouter()


def _researcher() -> Researcher:
    """Header from the workbook, or the configured defaults if it is unreadable."""
    try:
        return state.sheet.read().researcher
    except PubTrackError as e:
        logger.warning("Using default researcher header: %s", e)
        d = state.settings.researcher
        return Researcher(d.name, d.credentials, d.guide, d.guide_credentials)


# ============================================================================
# Main Page
# ============================================================================


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Main dashboard page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"researcher": _researcher()},
    )


# ============================================================================
# Status Style
# ============================================================================


@router.get("/api/status-style")
def status_style(
    status: str = Query("", description="Status text"),
    color: Optional[str] = Query(None, description="Fill color override"),
    font_color: Optional[str] = Query(None, alias="fontColor", description="Font color override"),
):
    """Return the badge style for a status as camelCase CSS properties."""
    style = resolve_status_style(status, color or None, font_color or None)
    return JSONResponse({**style.as_dict(), "glow": style.glow})


# ============================================================================
# Change polling
# ============================================================================


@router.get("/api/revision")
def revision():
    """Store change counter; the dashboard reloads its list when it moves."""
    return JSONResponse({"revision": state.repo.revision(), "last": state.last_change})
